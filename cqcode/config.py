"""cqcode configuration management."""

import logging
import os

from pydantic import Field
from pydantic_settings import BaseSettings

from . import __version__

logger = logging.getLogger("cqcode.config")


class CQSettings(BaseSettings):
    """Settings loaded from environment variables or .env file."""

    # Media cache
    cache_dir: str = Field(
        default="~/.cache/cqcode/media",
        description="Directory for pre-downloaded media",
    )

    # Downloads
    max_concurrent_downloads: int = Field(default=4, ge=1, description="Parallel download limit")
    download_timeout: float = Field(default=30.0, gt=0, description="Seconds per download attempt")
    download_retries: int = Field(default=3, ge=1, description="Total attempts per download")
    retry_delay: float = Field(default=1.0, ge=0, description="Base backoff delay in seconds")
    user_agent: str = Field(default=f"cqcode/{__version__}", description="HTTP User-Agent")

    model_config = {"env_prefix": "CQCODE_", "env_file": ".env", "extra": "ignore"}

    @property
    def cache_path(self) -> str:
        return os.path.expanduser(self.cache_dir)


def load_settings() -> CQSettings:
    """Load settings from environment."""
    settings = CQSettings()

    cache_path = settings.cache_path
    parent = cache_path
    while parent and not os.path.exists(parent):
        parent = os.path.dirname(parent)
    if parent and not os.access(parent, os.W_OK):
        logger.warning(
            f"Media cache directory {cache_path} is not writable; "
            "image pre-download will always fall back to remote URLs."
        )

    return settings
