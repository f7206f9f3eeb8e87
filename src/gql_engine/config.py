import os
from typing import Literal

from pydantic import BaseModel, ConfigDict

_TRUTHY = {"1", "true", "yes", "on"}


class EngineSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    unknown_fields: Literal["error", "ignore"] = "error"
    concurrent_fields: bool = True
    log_level: str = "WARNING"


def get_settings() -> EngineSettings:
    """Build settings from ``GQL_ENGINE_*`` environment variables."""
    return EngineSettings(
        unknown_fields=os.getenv("GQL_ENGINE_UNKNOWN_FIELDS", "error").lower(),  # type: ignore[arg-type]
        concurrent_fields=os.getenv("GQL_ENGINE_CONCURRENT_FIELDS", "true").lower() in _TRUTHY,
        log_level=os.getenv("GQL_ENGINE_LOG_LEVEL", "WARNING").upper(),
    )
