"""Admin Auth Routes: login, logout, session check and registration.

Invariants:
    - Unknown username and wrong password produce the identical 401 body
    - A successful login issues a fresh token (any presented token is destroyed first)
    - Session cookie is HTTP-only, SameSite=Lax, max-age = session TTL (7 days)
    - /session reveals only a boolean, never which admin is logged in
    - Registration never logs the new admin in

Design Decisions:
    - bcrypt hashing/verification runs in the threadpool to keep the event loop free
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from starlette.concurrency import run_in_threadpool

from gallery.api.dependencies import get_storage, session_token
from gallery.config import Settings, get_settings
from gallery.core.errors import ConflictError, InvalidCredentialsError
from gallery.core.passwords import dummy_verify, hash_password, verify_password
from gallery.core.repository_protocols import SessionStore, Storage
from gallery.infrastructure.session_store import get_session_store
from gallery.schemas.admin import (
    AdminCredentials, SessionStatusResponse, SuccessResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin", tags=["admin"])


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def _clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


@router.post("/login", response_model=SuccessResponse)
async def login(
    body: AdminCredentials,
    request: Request,
    response: Response,
    storage: Storage = Depends(get_storage),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    """Check credentials and bind a new server-side session to the admin."""
    user = await storage.get_admin_user_by_username(body.username)
    if user is None:
        await run_in_threadpool(dummy_verify)
        raise InvalidCredentialsError()
    if not await run_in_threadpool(verify_password, body.password, user.password):
        raise InvalidCredentialsError()

    sessions.destroy(session_token(request))
    token = sessions.create(user.id)
    _set_session_cookie(response, token, settings)
    logger.info("Admin logged in")
    return SuccessResponse()


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    request: Request,
    response: Response,
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    sessions.destroy(session_token(request))
    _clear_session_cookie(response, settings)
    return SuccessResponse()


@router.get("/session", response_model=SessionStatusResponse)
async def session_status(
    request: Request, sessions: SessionStore = Depends(get_session_store),
):
    return SessionStatusResponse(
        authenticated=sessions.get(session_token(request)) is not None,
    )


@router.post(
    "/register", response_model=SuccessResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: AdminCredentials,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """Create an admin account. The username must be free."""
    if await storage.get_admin_user_by_username(body.username) is not None:
        raise ConflictError("Username already exists")
    password_hash = await run_in_threadpool(
        hash_password, body.password, settings.bcrypt_rounds,
    )
    await storage.create_admin_user(body.username, password_hash)
    logger.info("Admin user registered")
    return SuccessResponse()
