"""Pet post request/response schemas - REST API contract (camelCase on the wire)."""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class PetPostBase(BaseModel):
    status: Literal["lost", "found"]
    pet_name: str | None = Field(None, max_length=255)
    species: str | None = Field(None, max_length=100)
    sex: str | None = Field(None, max_length=50)
    breed: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=255)
    description: str | None = None
    email: EmailStr | None = None
    image_url: str | None = Field(None, max_length=1024)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PetPostCreate(PetPostBase):
    pass


class PetPostResponse(PetPostBase):
    id: uuid.UUID
    owner_id: uuid.UUID | None = None
    created_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ImageUploadResponse(BaseModel):
    imageUrl: str
    imageId: str
