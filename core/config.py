# core/config.py
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache


@dataclass
class Settings:
    """Runtime configuration read from the environment"""
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///books.db"))
    version: str = field(default_factory=lambda: os.getenv("WP_BOOK_VERSION", "1.0.0"))
    table_prefix: str = field(default_factory=lambda: os.getenv("WP_BOOK_TABLE_PREFIX", "wp_"))
    nonce_secret: str = field(default_factory=lambda: os.getenv("WP_BOOK_NONCE_SECRET", "change-me"))
    nonce_lifetime: int = field(default_factory=lambda: int(os.getenv("WP_BOOK_NONCE_LIFETIME", "86400")))
    log_level: str = field(default_factory=lambda: os.getenv("WP_BOOK_LOG_LEVEL", "INFO"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Set up root logging for the API and CLI entry points"""
    logging.basicConfig(
        level=getattr(logging, (level or get_settings().log_level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
