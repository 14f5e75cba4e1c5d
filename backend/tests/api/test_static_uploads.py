"""Upload Static Files: stored images are public with year-long immutable caching.

Invariants:
    - Files in the upload directory are served under /uploads/<name>
    - Hits carry Cache-Control: public, max-age=31536000, immutable
    - Missing files are a JSON 404
"""

from pathlib import Path
from uuid import uuid4

from gallery.api.static import UPLOAD_CACHE_CONTROL
from gallery.config import get_settings


async def test_uploaded_file_is_served_with_cache_headers(client, png_bytes):
    name = f"{uuid4().hex}.png"
    path = Path(get_settings().upload_dir) / name
    path.write_bytes(png_bytes)
    try:
        res = await client.get(f"/uploads/{name}")
    finally:
        path.unlink()

    assert res.status_code == 200
    assert res.content == png_bytes
    assert res.headers["cache-control"] == UPLOAD_CACHE_CONTROL


async def test_missing_upload_returns_json_404(client):
    res = await client.get("/uploads/does-not-exist.png")
    assert res.status_code == 404
    assert res.json() == {"error": "Not Found"}
    assert "cache-control" not in res.headers
