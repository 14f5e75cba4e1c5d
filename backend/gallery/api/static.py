"""Upload Static Files: serves the upload directory with long-lived cache headers.

Invariants:
    - Stored filenames are generated once and never reused, so responses are immutable
    - Missing files fall through to Starlette's 404 (rendered by error_handlers)
"""

from starlette.staticfiles import StaticFiles
from starlette.types import Scope

UPLOAD_CACHE_CONTROL = "public, max-age=31536000, immutable"


class CachedStaticFiles(StaticFiles):
    """StaticFiles that stamps a Cache-Control header on every hit."""

    def __init__(self, *args, cache_control: str = UPLOAD_CACHE_CONTROL, **kwargs):
        super().__init__(*args, **kwargs)
        self.cache_control = cache_control

    async def get_response(self, path: str, scope: Scope):
        response = await super().get_response(path, scope)
        if response.status_code in (200, 304):
            response.headers["Cache-Control"] = self.cache_control
        return response
