from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    SANITY_PROJECT_ID: str = ""
    SANITY_DATASET: str = "production"
    SANITY_AUTH_TOKEN: str = ""
    SANITY_API_VERSION: str = "2023-05-03"
    SANITY_TIMEOUT: float = 30.0

    # "sanity" or "memory"
    ORDER_STORE: str = "sanity"

    CHECKOUT_API_URL: str = "http://localhost:8000/api/checkout"
    # None waits for the server however long the store takes
    CHECKOUT_TIMEOUT: Optional[float] = None
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
