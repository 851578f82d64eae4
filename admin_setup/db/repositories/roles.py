"""
Role repository for database operations.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from admin_setup.db.models import Role


def count_roles(db: Session) -> int:
    """Count all roles."""
    return db.execute(select(func.count()).select_from(Role)).scalar_one()


def list_roles(db: Session) -> list[Role]:
    """List all roles, in id order."""
    stmt = select(Role).order_by(Role.id)
    return list(db.execute(stmt).scalars().all())


def get_role_by_id(db: Session, role_id: int) -> Role | None:
    """Get role by ID."""
    return db.get(Role, role_id)


def create_role(
    db: Session,
    name: str,
    sort: int,
    description: str | None = None,
) -> Role:
    """
    Create a new role.

    Args:
        db: Database session.
        name: Display name.
        sort: Rank order (higher is more privileged).
        description: Optional description.

    Returns:
        Created Role object.
    """
    role = Role(name=name, description=description, sort=sort)
    db.add(role)
    db.commit()
    db.refresh(role)
    return role
