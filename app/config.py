"""Module with settings.

Copyright (c) 2024 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

import os
from functools import cached_property

from pydantic import BaseModel, HttpUrl, computed_field


class Settings(BaseModel):
    """Settings of the blocking job."""

    ENVIRONMENT: str = "local"
    DEBUG: bool = False
    JOB_NAME: str = "ADBlocker"

    API_URL: HttpUrl
    APP_ID: str
    APP_SECRET: str
    SSL_PUBLIC_KEY: str | None = None
    API_TIMEOUT_SECONDS: float = 30.0

    AD_DOMAIN: str
    AD_HOST: str | None = None
    AD_PORT: int = 636
    AD_USE_SSL: bool = True
    AD_BASE_DN: str | None = None
    AD_USER: str
    AD_PASSWORD: str
    AD_CONNECT_TIMEOUT_SECONDS: int = 10

    AD_UPDATE_FIELD: str | None = None
    AD_UPDATE_FIELD_ENABLE_VALUE: str = ""
    AD_UPDATE_FIELD_DISABLE_VALUE: str = ""

    CRASH_REPORT_DSN: str | None = None

    # NOTE: negative interval runs one cycle and exits
    RUN_INTERVAL_SECONDS: float = -1.0

    @computed_field  # type: ignore
    @cached_property
    def UPDATE_FIELD(self) -> str | None:  # noqa: N802
        """Attribute used for blocking, None selects expiration date."""
        if self.AD_UPDATE_FIELD is None or not self.AD_UPDATE_FIELD.strip():
            return None
        return self.AD_UPDATE_FIELD.strip()

    @computed_field  # type: ignore
    @cached_property
    def BASE_DN(self) -> str:  # noqa: N802
        """Search base, derived from domain when not set.

        corp.example.com -> dc=corp,dc=example,dc=com
        """
        if self.AD_BASE_DN:
            return self.AD_BASE_DN
        return ",".join(
            f"dc={part}" for part in self.AD_DOMAIN.split(".") if part
        )

    @computed_field  # type: ignore
    @cached_property
    def USE_PINNING(self) -> bool:  # noqa: N802
        """Check server public key outside local environment."""
        return self.ENVIRONMENT.lower() != "local"

    @classmethod
    def from_os(cls) -> "Settings":
        """Get cls from environ."""
        return Settings(**os.environ)
