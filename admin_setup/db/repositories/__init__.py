"""Database repositories for data access."""

from admin_setup.db.repositories.accounts import (
    create_account,
    email_exists,
    get_account_by_id,
    list_accounts_by_role,
    mark_email_verified,
    set_has_alias,
    update_account_credentials,
)
from admin_setup.db.repositories.aliases import create_alias, list_aliases_for_account
from admin_setup.db.repositories.roles import (
    count_roles,
    create_role,
    get_role_by_id,
    list_roles,
)

__all__ = [
    # Roles
    "count_roles",
    "list_roles",
    "get_role_by_id",
    "create_role",
    # Accounts
    "get_account_by_id",
    "list_accounts_by_role",
    "create_account",
    "update_account_credentials",
    "mark_email_verified",
    "set_has_alias",
    "email_exists",
    # Aliases
    "create_alias",
    "list_aliases_for_account",
]
