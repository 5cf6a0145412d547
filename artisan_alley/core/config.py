from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./artisan_alley.db"
    SECRET_KEY: str = "your-super-secret-jwt-signing-key-here"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    DEBUG: bool = True
    CORS_ORIGINS: str = "http://localhost:5000,http://localhost:5173"

    # Generative AI (story generation)
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: Optional[str] = None
    STORY_MODEL: str = "gpt-4o-mini"
    STORY_MAX_TOKENS: int = 800
    AI_TIMEOUT_SECONDS: float = 20.0

    SEED_DEMO_DATA: bool = True
    DEMO_PASSWORD: str = "artisan123"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
