# pageimages/config/settings.py
# Responsibility: Centralized, environment-driven settings and the immutable runtime config built from them.

import os
from typing import Any, Dict, List

from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    URL: str = os.getenv("DATABASE_URL", "postgresql://wiki_user:wiki_password@db:5432/wiki_db")

class RedisSettings(BaseSettings):
    URL: str = os.getenv("REDIS_URL", "redis://redis:6379/0")
    QUEUE_NAME: str = "pageimages_queue"
    LOCK_TIMEOUT_SECONDS: int = 30
    JOB_TIMEOUT: int = 60

class ServerSettings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False

class PageImagesSettings(BaseSettings):
    # Score tables: upper bound -> score
    SCORE_WIDTH: Dict[float, Any] = {119: -100, 400: 10, 600: 5, 601: 0}
    SCORE_GALLERY_WIDTH: Dict[float, Any] = {99: -100, 100: 0}
    SCORE_POSITION: Dict[int, Any] = {0: 8, 1: 6, 2: 4, 3: 3}
    SCORE_RATIO: Dict[float, Any] = {3: -100, 5: 0, 20: 5, 30: 0, 31: -100}

    # Denylist
    DENYLIST_SOURCES: List[Dict[str, Any]] = []
    DENYLIST_TTL_SECONDS: int = 900  # 15 min
    DENYLIST_CACHE_KEY: str = "pageimages-denylist"
    REMOTE_TIMEOUT: float = 3.0
    USER_AGENT: str = "PageImagesBot/1.0"
    FILE_EXTENSIONS: List[str] = ["png", "gif", "jpg", "jpeg", "webp"]

    # Output
    FREE_PROP_NAME: str = "page_image_free"
    PROP_NAME: str = "page_image"

    # "redis" or "memory"
    CACHE_BACKEND: str = "redis"

    def to_config(self):
        """
        Bundles the tables and denylist options into a single immutable value.
        Imported lazily to keep this module free of domain imports at load time.
        """
        from pageimages.denylist.sources import DenylistSource, DenylistSourceConfig
        from pageimages.scoring.score_table import ScoreTable
        from pageimages.scoring.scorer import PageImagesConfig, ScoreConfig

        score = ScoreConfig(
            standalone_width=ScoreTable(self.SCORE_WIDTH),
            gallery_width=ScoreTable(self.SCORE_GALLERY_WIDTH),
            position_index=dict(self.SCORE_POSITION),
            aspect_ratio_tenths=ScoreTable(self.SCORE_RATIO),
        )
        denylist = DenylistSourceConfig(
            sources=tuple(DenylistSource(**source) for source in self.DENYLIST_SOURCES),
            ttl_seconds=self.DENYLIST_TTL_SECONDS,
            cache_key=self.DENYLIST_CACHE_KEY,
            remote_timeout=self.REMOTE_TIMEOUT,
            user_agent=self.USER_AGENT,
            file_extensions=tuple(self.FILE_EXTENSIONS),
        )
        return PageImagesConfig(
            score=score,
            denylist=denylist,
            free_prop_name=self.FREE_PROP_NAME,
            prop_name=self.PROP_NAME,
        )

class AppSettings(BaseSettings):
    DB: DatabaseSettings = DatabaseSettings()
    REDIS: RedisSettings = RedisSettings()
    SERVER: ServerSettings = ServerSettings()
    PAGEIMAGES: PageImagesSettings = PageImagesSettings()

    class Config:
        env_file = ".env"
        env_nested_delimiter = "__"
        case_sensitive = True

settings = AppSettings()
