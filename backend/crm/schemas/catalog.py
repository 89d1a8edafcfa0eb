"""Catalog Schemas — category and subcategory input normalization and API responses.

Invariants:
    - CategoryCreate.name / SubCategoryCreate.name: required, trimmed, ≤200 chars
    - url / description: optional, trimmed, stored as "" when blank
    - SubCategory reference accepted as `category` or `categoryId` (frontend wire name)
    - Update schemas are partial: to_changes() returns only the fields the caller sent;
      a name that is sent must still be non-blank

Design Decisions:
    - Responses use camelCase aliases; records arrive snake_case and validate by name
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from crm.schemas.normalize import DefaultedText, RequiredText, reference

CategoryReference = Annotated[UUID, reference("category")]
OptionalCategoryReference = Annotated[UUID | None, reference("category", required=False)]

_INPUT_CONFIG = ConfigDict(
    alias_generator=to_camel, populate_by_name=True, extra="ignore",
)
_OUTPUT_CONFIG = ConfigDict(
    alias_generator=to_camel, populate_by_name=True, from_attributes=True,
)


# --- Category -----------------------------------------------------------------

class CategoryCreate(BaseModel):
    model_config = _INPUT_CONFIG

    name: RequiredText = Field(max_length=200)
    url: DefaultedText = ""


class CategoryUpdate(BaseModel):
    model_config = _INPUT_CONFIG

    name: RequiredText = Field(None, max_length=200)
    url: DefaultedText = ""

    def to_changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class CategoryResponse(BaseModel):
    model_config = _OUTPUT_CONFIG

    id: UUID
    name: str
    url: str = ""
    created_at: datetime
    updated_at: datetime | None = None


class CategoryRef(BaseModel):
    """Category as embedded in subcategory and customer responses."""
    model_config = _OUTPUT_CONFIG

    id: UUID
    name: str
    url: str = ""


# --- SubCategory --------------------------------------------------------------

class SubCategoryCreate(BaseModel):
    model_config = _INPUT_CONFIG

    name: RequiredText = Field(max_length=200)
    category_id: CategoryReference = Field(
        validation_alias=AliasChoices("category", "categoryId"),
    )
    description: DefaultedText = ""


class SubCategoryUpdate(BaseModel):
    model_config = _INPUT_CONFIG

    name: RequiredText = Field(None, max_length=200)
    category_id: OptionalCategoryReference = Field(
        None, validation_alias=AliasChoices("category", "categoryId"),
    )
    description: DefaultedText = ""

    def to_changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True)
        # A blank reference on update leaves the current category in place
        if changes.get("category_id", ...) is None:
            changes.pop("category_id")
        return changes


class SubCategoryResponse(BaseModel):
    model_config = _OUTPUT_CONFIG

    id: UUID
    name: str
    category: CategoryRef | None = None
    category_id: UUID
    description: str = ""
    created_at: datetime
    updated_at: datetime | None = None
