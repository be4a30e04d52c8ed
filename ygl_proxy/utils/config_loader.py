"""
Configuration loader for the YGL proxy
"""

import logging
import os
from typing import List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_YGL_BASE_URL = "https://www.yougotlistings.com/api"


class Settings(BaseModel):
    """Runtime settings, read from the environment (and ``.env``)"""

    port: int = Field(default=5050, ge=1, le=65535)
    env: str = "production"
    ygl_api_key: str = ""
    allowed_origins: List[str] = Field(default_factory=list)
    ygl_base_url: str = DEFAULT_YGL_BASE_URL
    ygl_timeout_seconds: float = Field(default=10.0, gt=0)
    ygl_max_redirects: int = Field(default=3, ge=0)
    cache_ttl_seconds: float = Field(default=120.0, gt=0)
    rate_limit_per_minute: int = Field(default=60, ge=0)
    static_dir: str = "public"
    max_body_bytes: int = Field(default=1024 * 1024, ge=1)

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    @property
    def is_test(self) -> bool:
        return self.env == "test"


def _split_origins(raw: str) -> List[str]:
    return [s.strip() for s in raw.split(",") if s.strip()]


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build ``Settings`` from environment variables

    Args:
        environ: Mapping to read from. Defaults to ``os.environ`` after loading ``.env``.

    Returns:
        Validated settings
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    values = {
        "port": environ.get("PORT", "5050"),
        "env": environ.get("NODE_ENV", "production"),
        "ygl_api_key": environ.get("YGL_API_KEY", ""),
        "allowed_origins": _split_origins(environ.get("ALLOWED_ORIGINS", "")),
        "ygl_base_url": environ.get("YGL_BASE_URL", DEFAULT_YGL_BASE_URL).rstrip("/"),
        "ygl_timeout_seconds": environ.get("YGL_TIMEOUT_SECONDS", "10"),
        "cache_ttl_seconds": environ.get("CACHE_TTL_SECONDS", "120"),
        "rate_limit_per_minute": environ.get("RATE_LIMIT_PER_MINUTE", "60"),
        "static_dir": environ.get("STATIC_DIR", "public"),
    }
    settings = Settings(**values)

    if not settings.ygl_api_key:
        logger.warning("[WARN] Missing YGL_API_KEY in environment. Set it in .env or the host's env vars.")

    return settings
