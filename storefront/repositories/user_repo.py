# storefront/repositories/user_repo.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlmodel import Session, select

from storefront.models.user import User, RefreshToken


class UserRepository:
    """
    Data access layer for User and its refresh tokens.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic

    Emails passed in are expected to be normalized already.
    """

    # ----- Basic CRUD -----

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a User by unique email, or None if not found."""
        stmt = select(User).where(User.email == email)
        return session.exec(stmt).first()

    def create(self, session: Session, user: User) -> User:
        """Insert a new User and return the persisted row."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        """Persist changes to an existing User."""
        user.updated_at = datetime.now(timezone.utc)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    # ----- Refresh tokens -----

    def list_refresh_tokens(self, session: Session, user_id: uuid.UUID) -> list[str]:
        stmt = (
            select(RefreshToken.token)
            .where(RefreshToken.user_id == user_id)
            .order_by(RefreshToken.created_at)
        )
        return list(session.exec(stmt).all())

    def has_refresh_token(
        self, session: Session, user_id: uuid.UUID, token: str
    ) -> bool:
        stmt = select(RefreshToken.id).where(
            RefreshToken.user_id == user_id, RefreshToken.token == token
        )
        return session.exec(stmt).first() is not None

    def add_refresh_token(
        self, session: Session, user_id: uuid.UUID, token: str
    ) -> None:
        session.add(RefreshToken(user_id=user_id, token=token))
        session.commit()

    def remove_refresh_token(
        self, session: Session, user_id: uuid.UUID, token: str
    ) -> int:
        """
        Delete every row holding this exact token for the user.

        Returns the number of rows removed (0 if it was already gone).
        """
        stmt = delete(RefreshToken).where(
            RefreshToken.user_id == user_id, RefreshToken.token == token
        )
        result = session.exec(stmt)
        session.commit()
        return result.rowcount
