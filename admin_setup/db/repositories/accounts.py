"""
Account repository for database operations.
"""

from datetime import date, datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from admin_setup.db.models import Account


def get_account_by_id(db: Session, account_id: int) -> Account | None:
    """Get account by ID."""
    return db.get(Account, account_id)


def get_account_by_email(db: Session, email: str) -> Account | None:
    """Get account by email (case-insensitive)."""
    if not email:
        return None
    stmt = select(Account).where(func.lower(Account.email) == email.lower())
    return db.execute(stmt).scalars().first()


def list_accounts_by_role(db: Session, role_id: int) -> list[Account]:
    """List accounts holding a role, in id order."""
    stmt = select(Account).where(Account.role_id == role_id).order_by(Account.id)
    return list(db.execute(stmt).scalars().all())


def create_account(
    db: Session,
    name: str,
    email: str,
    password_hash: str,
    role_id: int,
    dob: date | None = None,
    has_alias: bool = False,
) -> Account:
    """
    Create a new account.

    Args:
        db: Database session.
        name: Display name.
        email: Login email, stored as given.
        password_hash: Argon2id password hash.
        role_id: Role the account is assigned to.
        dob: Date of birth.
        has_alias: Whether the account has a linked alias.

    Returns:
        Created Account object.
    """
    account = Account(
        name=name,
        email=email,
        password_hash=password_hash,
        role_id=role_id,
        dob=dob,
        has_alias=has_alias,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


def update_account_credentials(
    db: Session,
    account: Account,
    email: str | None = None,
    password_hash: str | None = None,
) -> Account:
    """Update email and/or password hash. Other fields are untouched."""
    if email is not None:
        account.email = email
    if password_hash is not None:
        account.password_hash = password_hash
    db.commit()
    db.refresh(account)
    return account


def mark_email_verified(db: Session, account: Account, verified_at: datetime) -> Account:
    """Stamp the email verification timestamp."""
    account.email_verified_at = verified_at
    db.commit()
    return account


def set_has_alias(db: Session, account: Account, has_alias: bool = True) -> Account:
    """Set the account's alias flag."""
    account.has_alias = has_alias
    db.commit()
    return account


def email_exists(db: Session, email: str, exclude_account_id: int | None = None) -> bool:
    """Check if email is taken, optionally ignoring one account."""
    account = get_account_by_email(db, email)
    if account is None:
        return False
    return account.id != exclude_account_id
