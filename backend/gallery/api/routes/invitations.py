"""Invitation Routes: public listing/detail and admin create/update/delete.

Invariants:
    - Writes require an admin session, checked by AdminGatedRoute before the
      multipart body is parsed (401 beats 400, anonymous uploads are never spooled)
    - Form fields are validated by schemas/invitation.py before any file is written
    - update: 404 is decided before the new image is stored
    - The superseded image is discarded only after the row points elsewhere
      (update) or is gone (delete); only /uploads/ URLs are ever deleted

Design Decisions:
    - File writes and row writes are separate steps. A failure between them can leave
      an orphaned upload; no compensating cleanup is attempted
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from pydantic import BaseModel, ValidationError

from gallery.api.dependencies import (
    AdminGatedRoute, get_image_store, get_storage, require_admin,
)
from gallery.core.errors import (
    RequestValidationFailed, ResourceNotFoundError, UploadRejectedError,
)
from gallery.core.repository_protocols import Storage
from gallery.infrastructure.image_store import ImageStore
from gallery.models.invitation import Invitation
from gallery.schemas.invitation import (
    InvitationCreate, InvitationResponse, InvitationUpdate, invitation_values,
)

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/invitations", tags=["invitations"], route_class=AdminGatedRoute,
)


async def get_invitation_or_404(invitation_id: str, storage: Storage) -> Invitation:
    invitation = await storage.get_invitation(invitation_id)
    if invitation is None:
        raise ResourceNotFoundError("Invitation")
    return invitation


def _parse_form(schema: type[BaseModel], **fields: str | None) -> BaseModel:
    """Validate multipart text fields; absent fields are left out."""
    try:
        return schema.model_validate(
            {name: value for name, value in fields.items() if value is not None},
        )
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"])
        raise RequestValidationFailed(f"{field}: {first['msg']}", field=field) from e


@router.get("", response_model=list[InvitationResponse])
async def list_invitations(storage: Storage = Depends(get_storage)):
    """All invitations, oldest first."""
    return await storage.list_invitations()


@router.get("/{invitation_id}", response_model=InvitationResponse)
async def get_invitation(invitation_id: str, storage: Storage = Depends(get_storage)):
    return await get_invitation_or_404(invitation_id, storage)


@router.post(
    "", response_model=InvitationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_invitation(
    title: str | None = Form(None),
    description: str | None = Form(None),
    price: str | None = Form(None),
    image: UploadFile | None = File(None),
    storage: Storage = Depends(get_storage),
    images: ImageStore = Depends(get_image_store),
):
    """Create an invitation: store the image, then insert the row."""
    data = _parse_form(
        InvitationCreate, title=title, description=description, price=price,
    )
    if image is None:
        raise UploadRejectedError("Image is required")
    image_url = await images.save(image)
    invitation = await storage.create_invitation(invitation_values(data, image_url))
    logger.info(
        "Invitation created",
        extra={"invitation_id": str(invitation.id), "image_url": image_url},
    )
    return invitation


@router.patch(
    "/{invitation_id}", response_model=InvitationResponse,
    dependencies=[Depends(require_admin)],
)
async def update_invitation(
    invitation_id: str,
    title: str | None = Form(None),
    description: str | None = Form(None),
    price: str | None = Form(None),
    image: UploadFile | None = File(None),
    storage: Storage = Depends(get_storage),
    images: ImageStore = Depends(get_image_store),
):
    """Partially update an invitation; a new image replaces and deletes the old one."""
    data = _parse_form(
        InvitationUpdate, title=title, description=description, price=price,
    )
    existing = await get_invitation_or_404(invitation_id, storage)
    old_image_url = existing.image_url

    new_image_url = await images.save(image) if image is not None else None
    updated = await storage.update_invitation(
        existing.id, invitation_values(data, new_image_url),
    )
    if updated is None:
        # Row deleted between the lookup and the update
        images.discard(new_image_url)
        raise ResourceNotFoundError("Invitation")

    if new_image_url is not None and old_image_url != new_image_url:
        images.discard(old_image_url)
    logger.info("Invitation updated", extra={"invitation_id": str(updated.id)})
    return updated


@router.delete(
    "/{invitation_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_invitation(
    invitation_id: str,
    storage: Storage = Depends(get_storage),
    images: ImageStore = Depends(get_image_store),
):
    """Delete the row, then its managed image file."""
    existing = await get_invitation_or_404(invitation_id, storage)
    image_url = existing.image_url
    await storage.delete_invitation(existing.id)
    images.discard(image_url)
    logger.info("Invitation deleted", extra={"invitation_id": str(existing.id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
