import logging
from datetime import datetime, timezone
from typing import List
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from userauth.core.errors import ConflictError, NotFoundError, StoreError
from userauth.core.security import get_password_hash
from userauth.models.user import User
from userauth.schemas import UserPayload

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MESSAGE = "User not found"


class UserStore:
    """CRUD on the users table. Every call receives the request's session."""

    @staticmethod
    def find_by_email(db: Session, email: str, include_deleted: bool = False) -> User:
        """
        Return the user with this email.
        Deactivated users are skipped unless include_deleted is set.
        """
        try:
            query = db.query(User).filter(User.email == email)
            if not include_deleted:
                query = query.filter(User.deleted_at.is_(None))
            user = query.first()
        except SQLAlchemyError as exc:
            raise StoreError(f"could not look up user: {exc}") from exc

        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        return user

    @staticmethod
    def create(db: Session, payload: UserPayload) -> User:
        """Insert a new user, hashing the password first"""
        db_user = User(
            email=payload.email,
            fname=payload.fname,
            lname=payload.lname,
            password=get_password_hash(payload.password.strip()),
            profile_image=payload.profile_image,
        )
        db.add(db_user)
        UserStore._commit(db)
        # Refresh to load auto-generated fields (id, timestamps)
        db.refresh(db_user)
        return db_user

    @staticmethod
    def update(db: Session, payload: UserPayload) -> User:
        """
        Overwrite every field of the active user matching payload.email.

        Blank fields in the payload are written as-is, including the
        password which is re-hashed from whatever was sent.
        """
        db_user = UserStore.find_by_email(db, payload.email)

        db_user.email = payload.email
        db_user.fname = payload.fname
        db_user.lname = payload.lname
        db_user.password = get_password_hash(payload.password.strip())
        db_user.profile_image = payload.profile_image

        UserStore._commit(db)
        db.refresh(db_user)
        return db_user

    @staticmethod
    def deactivate(db: Session, email: str) -> None:
        """Soft delete: mark the active user as deleted"""
        db_user = UserStore.find_by_email(db, email)
        db_user.deleted_at = datetime.now(timezone.utc)
        UserStore._commit(db)

    @staticmethod
    def delete(db: Session, email: str) -> None:
        """Hard delete: remove the row, whether deactivated or not"""
        db_user = UserStore.find_by_email(db, email, include_deleted=True)
        db.delete(db_user)
        UserStore._commit(db)

    @staticmethod
    def list_all(db: Session, include_deleted: bool = False) -> List[User]:
        try:
            query = db.query(User)
            if not include_deleted:
                query = query.filter(User.deleted_at.is_(None))
            return query.order_by(User.id).all()
        except SQLAlchemyError as exc:
            raise StoreError(f"could not list users: {exc}") from exc

    @staticmethod
    def _commit(db: Session) -> None:
        try:
            db.commit()
        except IntegrityError as exc:
            # Unique index on email caught a duplicate the pre-check missed
            db.rollback()
            logger.warning(f"Integrity error on users table: {exc.orig}")
            raise ConflictError("Email already registered") from exc
        except SQLAlchemyError as exc:
            # Rollback prevents partial state if the transaction was partially applied
            db.rollback()
            raise StoreError(f"could not save user: {exc}") from exc


user_store = UserStore()
