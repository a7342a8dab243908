# app/config/settings.py
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # App Info
    app_name: str = "Dealership API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./dealership.db"
    auto_create_tables: bool = True

    # Security
    secret_key: str = "change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    bcrypt_rounds: int = 10

    # Listings
    default_page_size: int = 10
    max_page_size: int = 100

    # HTTP
    cors_origins: List[str] = ["*"]

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def database_host(self) -> Optional[str]:
        """Host part of the database url, without credentials"""
        if "@" in self.database_url:
            return self.database_url.split("@", 1)[1]
        return None

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'


settings = Settings()
