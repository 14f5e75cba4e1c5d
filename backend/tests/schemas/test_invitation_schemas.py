"""Invitation Schemas: field validation, partial updates, camelCase output."""

from datetime import datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from pydantic import ValidationError

from gallery.schemas.admin import AdminCredentials
from gallery.schemas.invitation import (
    MAX_PRICE, InvitationCreate, InvitationResponse, InvitationUpdate, invitation_values,
)
from gallery.schemas.setting import SettingUpsert


def test_create_strips_text_and_coerces_price():
    data = InvitationCreate(title="  Gala  ", description=" Night ", price="45")
    assert data.title == "Gala"
    assert data.description == "Night"
    assert data.price == 45


@pytest.mark.parametrize("fields", [
    {"title": "   ", "description": "d", "price": 1},
    {"title": "t", "description": "", "price": 1},
    {"title": "t", "description": "d", "price": -1},
    {"title": "t", "description": "d", "price": "ten"},
    {"description": "d", "price": 1},
])
def test_create_rejects_invalid_fields(fields):
    with pytest.raises(ValidationError):
        InvitationCreate(**fields)


def test_zero_price_is_allowed():
    assert InvitationCreate(title="t", description="d", price=0).price == 0


def test_price_is_bounded_by_integer_column():
    assert InvitationCreate(title="t", description="d", price=MAX_PRICE).price == MAX_PRICE
    with pytest.raises(ValidationError):
        InvitationCreate(title="t", description="d", price=MAX_PRICE + 1)
    with pytest.raises(ValidationError):
        InvitationUpdate(price=10**20)


def test_update_values_only_include_sent_fields():
    data = InvitationUpdate(title="New")
    assert invitation_values(data) == {"title": "New"}
    assert invitation_values(data, "/uploads/x.png") == {
        "title": "New", "image_url": "/uploads/x.png",
    }


def test_update_rejects_blank_title_and_negative_price():
    with pytest.raises(ValidationError):
        InvitationUpdate(title=" ")
    with pytest.raises(ValidationError):
        InvitationUpdate(price=-5)


def test_response_serializes_camel_case():
    row = SimpleNamespace(
        id=uuid4(), title="t", description="d", price=3,
        image_url="/uploads/a.png", created_at=datetime.now(timezone.utc),
    )
    dumped = InvitationResponse.model_validate(row).model_dump(by_alias=True)
    assert set(dumped) == {"id", "title", "description", "price", "imageUrl", "createdAt"}


def test_credentials_require_both_fields():
    with pytest.raises(ValidationError):
        AdminCredentials(username="admin", password="")
    with pytest.raises(ValidationError):
        AdminCredentials(username="", password="pw")


def test_setting_key_is_stripped():
    assert SettingUpsert(key="  telegram_link ", value="v").key == "telegram_link"
    with pytest.raises(ValidationError):
        SettingUpsert(key="   ", value="v")
