#!/usr/bin/env python3
"""Create or reset the site admin account.

Needs the package importable, so run ``pip install -e .`` from the repository
root first. The installed ``setup-admin-user`` command and
``python -m admin_setup`` are equivalent.

Usage:
  python scripts/setup_admin_user.py [--init-db] [--quiet] [--json-logs]

Environment:
  ADMIN_USERNAME (default "Admin"), ADMIN_EMAIL, ADMIN_PASSWORD (required),
  ADMIN_ALIAS, ADMIN_RESET, APP_ENV_LOCAL_SETUP, DATABASE_URL
"""
from __future__ import annotations

from admin_setup.cli import run

if __name__ == "__main__":
    run()
