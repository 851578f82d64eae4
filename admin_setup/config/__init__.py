"""Configuration module for the admin setup command."""

from admin_setup.config.admin import AdminConfig, load_admin_config
from admin_setup.config.settings import Settings, get_settings

__all__ = ["AdminConfig", "Settings", "get_settings", "load_admin_config"]
