"""Command-line entry point: ``setup-admin-user``.

Creates the admin account if none exists, or resets its email and password
when ADMIN_RESET is set.

Usage:
  setup-admin-user [--init-db] [--quiet] [--json-logs]

Environment:
  ADMIN_USERNAME, ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_ALIAS, ADMIN_RESET,
  APP_ENV_LOCAL_SETUP, DATABASE_URL
"""
from __future__ import annotations

import argparse
import sys
from uuid import uuid4

from pydantic import ValidationError

from admin_setup.config import Settings, get_settings, load_admin_config
from admin_setup.core import AppError, ConfigurationError, ExitCode, get_logger, run_context, setup_logging
from admin_setup.db import dispose_engine, get_engine, init_database, reset_session_factory, session_scope
from admin_setup.services import run_bootstrap

logger = get_logger("admin_setup.cli")

COMMAND_NAME = "setup-admin-user"
BANNER = (
    "********************",
    "* ADMIN USER SETUP *",
    "********************\n",
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=COMMAND_NAME,
        description=(
            "Creates the admin user account if no users exist, "
            "or resets the password if it does."
        ),
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Create missing database tables before running",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log records")
    return parser.parse_args(argv)


def report_error(exc: AppError) -> int:
    print(f"Error [{exc.code.value}]: {exc.message}", file=sys.stderr)
    return exc.exit_code


def load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid configuration",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    echo = (lambda line: None) if args.quiet else print

    for line in BANNER:
        echo(line)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        return report_error(e)

    setup_logging(
        level=settings.log_level,
        json_output=args.json_logs or settings.log_json,
        log_file=settings.log_file,
        debug=settings.debug,
    )
    token = run_context.set({"run_id": uuid4().hex, "command": COMMAND_NAME})

    try:
        try:
            config = load_admin_config(settings)
        except ConfigurationError as e:
            logger.error("Admin configuration missing", data=e.details)
            return report_error(e)

        get_engine(settings)
        if args.init_db:
            init_database()

        with session_scope() as db:
            outcome = run_bootstrap(config, db, echo=echo)

        logger.info(
            "Admin setup finished",
            data={
                "intent": outcome.intent.kind.value,
                "account_id": outcome.account.id,
                "roles_created": outcome.roles_created,
                "alias_created": outcome.alias_created,
            },
        )
        return ExitCode.OK
    except AppError as e:
        logger.error(
            "Admin setup failed",
            data={"code": e.code.value, "message": e.message, "details": e.details},
        )
        return report_error(e)
    finally:
        dispose_engine()
        reset_session_factory()
        run_context.reset(token)


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
