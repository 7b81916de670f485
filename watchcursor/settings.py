"""Service configuration loaded from WATCH_* environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    BIZ_COLLECTION,
    HOST_COLLECTION,
    HOST_RELATION_COLLECTION,
    MODULE_COLLECTION,
    OBJECT_COLLECTION,
    SET_COLLECTION,
)
from .resource_type import ResourceType


class WatchSettings(BaseSettings):
    """Watch service settings.

    All fields are read from environment variables with the ``WATCH_`` prefix.
    For example, ``WATCH_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="WATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"
    log_json: bool = False
    """Write log records as JSON lines, for log shippers."""

    # -- Watch API -------------------------------------------------------------
    max_page_size: int = 500
    """Upper bound for the page size a client may ask for with ``pagesizehint``."""

    # -- Change-stream collections ---------------------------------------------
    host_collection: str = HOST_COLLECTION
    host_relation_collection: str = HOST_RELATION_COLLECTION
    biz_collection: str = BIZ_COLLECTION
    set_collection: str = SET_COLLECTION
    module_collection: str = MODULE_COLLECTION
    object_collection: str = OBJECT_COLLECTION

    def collection_types(self) -> dict[str, ResourceType]:
        """Return the collection table for the source mapper."""
        return {
            self.host_collection: ResourceType.HOST,
            self.host_relation_collection: ResourceType.HOST_RELATION,
            self.biz_collection: ResourceType.BIZ,
            self.set_collection: ResourceType.SET,
            self.module_collection: ResourceType.MODULE,
            self.object_collection: ResourceType.OBJECT,
        }


@lru_cache(maxsize=1)
def get_settings() -> WatchSettings:
    """Return a cached settings instance.

    Call ``get_settings.cache_clear()`` in tests to force a re-read after
    overriding env vars.
    """
    return WatchSettings()
