"""
Admin account configuration.

Resolves the values the bootstrap needs from ``Settings`` once, at startup,
into an immutable struct that is passed into the orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass

from admin_setup.config.settings import Settings
from admin_setup.core.errors import ConfigurationError

REQUIRED_VARIABLES = ("ADMIN_EMAIL", "ADMIN_PASSWORD")


@dataclass(frozen=True)
class AdminConfig:
    """Resolved admin account configuration."""

    username: str
    email: str
    password: str
    alias: str | None = None
    reset: bool = False
    local_setup_extras: bool = False

    @property
    def has_alias(self) -> bool:
        return bool(self.alias)

    def __repr__(self) -> str:
        return (
            f"AdminConfig(username={self.username!r}, email={self.email!r}, "
            f"password='***', alias={self.alias!r}, reset={self.reset}, "
            f"local_setup_extras={self.local_setup_extras})"
        )


def load_admin_config(settings: Settings) -> AdminConfig:
    """
    Build the admin configuration from settings.

    Raises:
        ConfigurationError: If the admin email or password is not set.
    """
    missing = [
        name
        for name, value in zip(
            REQUIRED_VARIABLES, (settings.admin_email, settings.admin_password)
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(
            "ADMIN_EMAIL and ADMIN_PASSWORD environment variables must be set.",
            details={"missing": missing},
        )

    return AdminConfig(
        username=settings.admin_username,
        email=settings.admin_email,
        password=settings.admin_password,
        alias=settings.admin_alias,
        reset=settings.admin_reset,
        local_setup_extras=settings.app_env_local_setup,
    )
