from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_MAX_OUTPUT_TOKENS: int = 8192
    PROXY_URL: str = "http://localhost:8000"
    PROXY_TIMEOUT: Optional[float] = None  # seconds; None waits indefinitely
    PREMIUM_ENABLED: bool = True  # demo flag, gates CSV and email exports
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"


settings = Settings()
