from fastapi import APIRouter
from artisan_alley.api.v1.endpoints import admin, ai, artists, auth, products, verification

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(products.router, tags=["products"])
api_router.include_router(artists.router, prefix="/artists", tags=["artists"])
api_router.include_router(verification.router, prefix="/artist", tags=["verification"])
api_router.include_router(ai.router, prefix="/ai", tags=["ai"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
