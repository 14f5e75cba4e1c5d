"""Route Dependencies: storage, image store, and the admin gate.

Invariants:
    - Routes declaring Depends(require_admin) are checked by AdminGatedRoute before
      the request body is read, so 401 beats any body or form validation error
    - A missing, expired or unknown session token is one uniform 401 ("Unauthorized")
    - Gated requests announcing a body larger than one upload plus form overhead are
      rejected from Content-Length alone, before anything is buffered
    - Only the session store decides authentication; the admin row is not re-read
"""

from typing import Callable
from uuid import UUID

from fastapi import Depends, Request, Response
from fastapi.routing import APIRoute
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.config import get_settings
from gallery.core.errors import AuthenticationError, UploadRejectedError
from gallery.core.repository_protocols import SessionStore, Storage
from gallery.infrastructure.database import get_db
from gallery.infrastructure.image_store import ImageStore
from gallery.infrastructure.session_store import get_session_store
from gallery.infrastructure.storage import DatabaseStorage

# Multipart boundaries, headers and the text fields of one invitation form
FORM_OVERHEAD_BYTES = 64 * 1024


def get_storage(db: AsyncSession = Depends(get_db)) -> Storage:
    return DatabaseStorage(db)


def get_image_store() -> ImageStore:
    settings = get_settings()
    return ImageStore(
        settings.upload_dir, settings.upload_url_prefix, settings.max_upload_bytes,
    )


def session_token(request: Request) -> str | None:
    """Session token from the admin cookie, if the client sent one."""
    return request.cookies.get(get_settings().session_cookie_name)


def authenticate(request: Request, sessions: SessionStore) -> UUID:
    admin_id = sessions.get(session_token(request))
    if admin_id is None:
        raise AuthenticationError()
    return admin_id


def require_admin(
    request: Request, sessions: SessionStore = Depends(get_session_store),
) -> UUID:
    """Gate for state-mutating endpoints. Returns the session's admin id."""
    return authenticate(request, sessions)


def check_content_length(request: Request) -> None:
    """Reject bodies that announce more than one upload can legitimately need."""
    raw = request.headers.get("content-length")
    if raw is None or not raw.isdigit():
        return
    limit = get_settings().max_upload_bytes
    if int(raw) > limit + FORM_OVERHEAD_BYTES:
        raise UploadRejectedError(f"File too large (max {limit} bytes)")


class AdminGatedRoute(APIRoute):
    """APIRoute that runs the admin check ahead of body parsing.

    FastAPI reads JSON and multipart bodies before resolving dependencies, so a
    plain Depends(require_admin) would let anonymous clients trigger validation
    errors and spool uploads. Routes opt in by declaring Depends(require_admin).
    """

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()
        if not any(d.dependency is require_admin for d in self.dependencies):
            return handler

        async def gated_handler(request: Request) -> Response:
            authenticate(request, get_session_store())
            check_content_length(request)
            return await handler(request)

        return gated_handler
