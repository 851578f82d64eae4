"""Credential helpers."""

from admin_setup.auth.password import hash_password, verify_password

__all__ = ["hash_password", "verify_password"]
