"""Allow ``python -m admin_setup``."""

from admin_setup.cli import run

run()
