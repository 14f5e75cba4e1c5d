"""Sample Images: bundled fallback artwork referenced by seeded invitations.

Invariants:
    - Only names in SAMPLE_IMAGES are served; the path segment never reaches the filesystem
    - Unknown type and missing file are both 404, with distinct messages
"""

from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from gallery.config import Settings, get_settings
from gallery.core.domain_types import SAMPLE_IMAGES
from gallery.core.errors import ResourceNotFoundError

router = APIRouter(prefix="/api/sample-images", tags=["sample-images"])


@router.get("/{image_type}", response_class=FileResponse)
async def get_sample_image(
    image_type: str, settings: Settings = Depends(get_settings),
):
    filename = SAMPLE_IMAGES.get(image_type)
    if filename is None:
        raise ResourceNotFoundError("Sample image")
    path = Path(settings.sample_images_dir) / filename
    if not path.is_file():
        raise ResourceNotFoundError("Image file", "Image file not found")
    return FileResponse(path)
