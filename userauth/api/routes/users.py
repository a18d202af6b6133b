from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from userauth.api.dependencies import get_auth_context
from userauth.core.database import get_db
from userauth.schemas import (
    AuthContext,
    StatusResponse,
    TokenEnvelope,
    UserEnvelope,
    UserListEnvelope,
    UserPayload,
)
from userauth.services.auth_service import auth_service

router = APIRouter(tags=["users"])

# Handlers are async but the flows hash passwords and hit the database
# synchronously, so they run in the thread pool to keep the event loop free


@router.post("/signup", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def signup(payload: UserPayload, db: Session = Depends(get_db)):
    """Register a new user"""
    return await run_in_threadpool(auth_service.signup, db, payload)


@router.post("/login", response_model=TokenEnvelope)
async def login(payload: UserPayload, db: Session = Depends(get_db)):
    """Check credentials and issue an access token"""
    return await run_in_threadpool(auth_service.login, db, payload)


@router.put("/update", response_model=UserEnvelope)
async def update_user(
    payload: UserPayload,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    """Overwrite the details of the user matching the payload email"""
    return await run_in_threadpool(auth_service.update, db, payload, auth)


@router.put("/deactivate", response_model=StatusResponse)
async def deactivate_user(
    payload: UserPayload,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    """Soft delete the user matching the payload email"""
    return await run_in_threadpool(auth_service.deactivate_or_delete, db, payload, auth, False)


@router.delete("/delete", response_model=StatusResponse)
async def delete_user(
    payload: UserPayload,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    """Permanently remove the user matching the payload email"""
    return await run_in_threadpool(auth_service.deactivate_or_delete, db, payload, auth, True)


@router.get("/users", response_model=UserListEnvelope)
async def list_users(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    """List active users"""
    return await run_in_threadpool(auth_service.list_users, db)
