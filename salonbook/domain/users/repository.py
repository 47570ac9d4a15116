"""User repository - Database operations for users"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import User


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_users(db: Session, organization_id: int) -> list[User]:
        """Users of one organization, newest first"""
        return (
            db.query(User)
            .options(joinedload(User.organization))
            .filter(User.organization_id == organization_id)
            .order_by(User.created_at.desc(), User.id.desc())
            .all()
        )

    @staticmethod
    def list_users(
        db: Session, organization_id: Optional[int] = None, offset: int = 0, limit: int = 50
    ) -> tuple[list[User], int]:
        """Users across organizations, optionally filtered to one"""
        query = db.query(User)
        if organization_id is not None:
            query = query.filter(User.organization_id == organization_id)

        total = query.with_entities(func.count(User.id)).scalar() or 0
        users = (
            query.options(joinedload(User.organization))
            .order_by(User.created_at.desc(), User.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return users, total

    @staticmethod
    def get_user_by_id(db: Session, user_id: int, organization_id: Optional[int] = None) -> Optional[User]:
        """Get a user, restricted to ``organization_id`` when given"""
        query = db.query(User).filter(User.id == user_id)
        if organization_id is not None:
            query = query.filter(User.organization_id == organization_id)
        return query.first()

    @staticmethod
    def get_user_by_username(db: Session, username: str, exclude_id: Optional[int] = None) -> Optional[User]:
        query = db.query(User).filter(User.username == username)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first()

    @staticmethod
    def create_user(db: Session, **user_data) -> User:
        user = User(**user_data)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        """Update a user; ``organization_id`` may be cleared explicitly"""
        for key, value in updates.items():
            if (value is not None or key == "organization_id") and hasattr(user, key):
                setattr(user, key, value)

        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def delete_user(db: Session, user: User) -> None:
        db.delete(user)
        db.commit()
