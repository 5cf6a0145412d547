from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from artisan_alley.core.config import settings
from artisan_alley.core.logging import logger
from artisan_alley.api.v1.endpoints import api_router
from artisan_alley.db import models  # noqa: F401  registers tables on Base.metadata
from artisan_alley.db.base import Base
from artisan_alley.db.seed import seed_demo_data
from artisan_alley.db.session import SessionLocal, engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup...")

    Base.metadata.create_all(bind=engine)
    if settings.SEED_DEMO_DATA:
        with SessionLocal() as db:
            seed_demo_data(db)

    yield

    logger.info("Application shutdown...")


app = FastAPI(title="Artisan Alley API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"message": "Welcome to Artisan Alley API"}


def run() -> None:
    """Start the API with uvicorn, also exposed as the ``artisan-alley`` script."""
    import uvicorn

    uvicorn.run(
        "artisan_alley.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
