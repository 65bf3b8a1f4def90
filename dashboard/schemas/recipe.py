import datetime as dt

from pydantic import Field, field_validator

from dashboard.models.enums import TimeUnit
from dashboard.schemas.common import CamelModel


class Ingredient(CamelModel):
    id: str | None = None
    name: str
    quantity: str = ""
    unit: str = ""


class Direction(CamelModel):
    id: str | None = None
    step: int = Field(ge=1)
    instruction: str
    duration: str | None = None
    time_value: int | None = Field(default=None, ge=0)
    time_unit: TimeUnit | None = None


class RecipeCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=100)
    description: str = ""
    ingredients: list[Ingredient] = Field(default_factory=list)
    directions: list[Direction] = Field(default_factory=list)
    serving_size: int = Field(default=1, ge=1)
    total_time_value: int = Field(default=0, ge=0)
    total_time_unit: TimeUnit = TimeUnit.MINUTES
    notes: str | None = None
    image_url: str | None = None

    @field_validator("title", "category")
    @classmethod
    def strip_required(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Value cannot be blank")
        return normalized


class RecipeUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    ingredients: list[Ingredient] | None = None
    directions: list[Direction] | None = None
    serving_size: int | None = Field(default=None, ge=1)
    total_time_value: int | None = Field(default=None, ge=0)
    total_time_unit: TimeUnit | None = None
    notes: str | None = None
    image_url: str | None = None


class RecipeRead(CamelModel):
    id: str
    title: str
    description: str
    category: str
    ingredients: list[Ingredient]
    directions: list[Direction]
    serving_size: int
    total_time: str
    total_time_value: int
    total_time_unit: TimeUnit
    is_favorite: bool
    notes: str | None = None
    image_url: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class RecipeCategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = ""


class RecipeCategoryRead(CamelModel):
    id: str
    name: str
    description: str
    count: int
    created_at: dt.datetime | None = None
