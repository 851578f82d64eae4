"""
Alias repository for linked external identities.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from admin_setup.db.models import AliasRecord


def create_alias(
    db: Session,
    account_id: int,
    alias: str,
    site: str,
    is_primary: bool = True,
    is_visible: bool = True,
) -> AliasRecord:
    """
    Attach an external alias to an account.

    Args:
        db: Database session.
        account_id: Owning account.
        alias: Username on the external site.
        site: External site identifier.
        is_primary: Whether this is the account's primary alias.
        is_visible: Whether the alias is shown publicly.

    Returns:
        Created AliasRecord.
    """
    record = AliasRecord(
        account_id=account_id,
        site=site,
        alias=alias,
        is_primary_alias=is_primary,
        is_visible=is_visible,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def list_aliases_for_account(db: Session, account_id: int) -> list[AliasRecord]:
    """List aliases attached to an account."""
    stmt = (
        select(AliasRecord)
        .where(AliasRecord.account_id == account_id)
        .order_by(AliasRecord.id)
    )
    return list(db.execute(stmt).scalars().all())
