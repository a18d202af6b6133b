"""
Signup, login, update and deactivate/delete flows.

Each flow stops at the first failure and lets the AuthError propagate to
the API layer, which renders it as a failed envelope. Nothing is retried.
"""

import logging
from typing import Any, Dict
from sqlalchemy.orm import Session
from userauth.core.errors import (
    ConflictError,
    CredentialMismatchError,
    NotFoundError,
    StoreError,
)
from userauth.core.security import check_password, create_access_token
from userauth.schemas import AuthContext, UserPayload, UserResponse
from userauth.services import validator
from userauth.services.user_store import user_store

logger = logging.getLogger(__name__)

SUCCESS = "success"
ALREADY_REGISTERED_MESSAGE = "User already registered, please login"


class AuthService:

    @staticmethod
    def signup(db: Session, payload: UserPayload) -> Dict[str, Any]:
        # Duplicate check comes before the presence rules
        try:
            user_store.find_by_email(db, payload.email.strip())
        except NotFoundError:
            pass
        else:
            logger.warning("Signup rejected, email already registered")
            raise ConflictError(ALREADY_REGISTERED_MESSAGE)

        payload = validator.prepare(payload)
        validator.validate(payload, validator.CREATE)

        db_user = user_store.create(db, payload)
        logger.info(f"Registered user {db_user.id}")
        return {
            "status": SUCCESS,
            "message": "Registered successfully",
            "user": UserResponse.model_validate(db_user),
        }

    @staticmethod
    def login(db: Session, payload: UserPayload) -> Dict[str, Any]:
        payload = validator.prepare(payload)
        validator.validate(payload, validator.LOGIN)

        try:
            db_user = user_store.find_by_email(db, payload.email)
        except NotFoundError:
            raise NotFoundError("Login failed, please signup")
        except StoreError as exc:
            # Only path where a store failure is reported as a server error
            raise StoreError(exc.message, status_code=500) from exc

        try:
            check_password(payload.password, db_user.password)
        except CredentialMismatchError:
            logger.warning(f"Login failed for user {db_user.id}: password mismatch")
            raise CredentialMismatchError("Login failed, please try again")

        token = create_access_token(db_user.id)
        logger.info(f"User {db_user.id} logged in")
        return {"status": SUCCESS, "message": "logged in", "token": token}

    @staticmethod
    def update(db: Session, payload: UserPayload, auth: AuthContext) -> Dict[str, Any]:
        """Overwrite the user matching payload.email. Not re-validated."""
        db_user = user_store.update(db, payload)
        logger.info(f"User {auth.user_id} updated user {db_user.id}")
        return {
            "status": SUCCESS,
            "message": "Details updated Successfully",
            "user": UserResponse.model_validate(db_user),
        }

    @staticmethod
    def deactivate_or_delete(
        db: Session, payload: UserPayload, auth: AuthContext, hard: bool = False
    ) -> Dict[str, Any]:
        if hard:
            user_store.delete(db, payload.email)
            message = "User deleted successfully"
        else:
            user_store.deactivate(db, payload.email)
            message = "User deactivated successfully"
        logger.info(f"User {auth.user_id} {'deleted' if hard else 'deactivated'} an account")
        return {"status": SUCCESS, "message": message}

    @staticmethod
    def list_users(db: Session) -> Dict[str, Any]:
        users = user_store.list_all(db)
        return {
            "status": SUCCESS,
            "message": "Users fetched successfully",
            "users": [UserResponse.model_validate(user) for user in users],
        }


auth_service = AuthService()
