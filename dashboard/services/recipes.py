from __future__ import annotations

import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.models.enums import TimeUnit
from dashboard.models.recipe import Recipe
from dashboard.models.recipe_category import RecipeCategory
from dashboard.schemas.recipe import Direction, RecipeCreate, RecipeUpdate

logger = logging.getLogger(__name__)

FALLBACK_CATEGORY = "Other"


def format_total_time(value: int, unit: TimeUnit | str) -> str:
    unit = TimeUnit(unit)
    if value == 1:
        return f"1 {unit.value[:-1]}"
    if unit == TimeUnit.MINUTES:
        return f"{value} mins"
    return f"{value} {unit.value}"


def format_step_duration(value: int, unit: TimeUnit | str) -> str:
    """Label for one direction step; day-long steps read as "Day N"."""
    unit = TimeUnit(unit)
    if unit == TimeUnit.DAYS:
        return f"Day {value}"
    return format_total_time(value, unit)


def _direction_documents(directions: list[Direction]) -> list[dict]:
    documents = []
    for direction in directions:
        if direction.duration is None and direction.time_value:
            direction = direction.model_copy(
                update={"duration": format_step_duration(direction.time_value, direction.time_unit or TimeUnit.MINUTES)}
            )
        documents.append(direction.model_dump(mode="json", by_alias=True, exclude_none=True))
    return documents


def build_recipe(user_id: str, payload: RecipeCreate) -> Recipe:
    return Recipe(
        user_id=user_id,
        title=payload.title,
        description=payload.description.strip(),
        category=payload.category,
        ingredients=[item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in payload.ingredients],
        directions=_direction_documents(payload.directions),
        serving_size=payload.serving_size,
        total_time=format_total_time(payload.total_time_value, payload.total_time_unit),
        total_time_value=payload.total_time_value,
        total_time_unit=payload.total_time_unit.value,
        notes=payload.notes,
        image_url=payload.image_url,
        is_favorite=False,
    )


def apply_recipe_update(recipe: Recipe, payload: RecipeUpdate) -> None:
    changes = payload.model_dump(exclude_unset=True)

    for field in ("title", "category", "description", "serving_size", "notes", "image_url"):
        if field in changes and (changes[field] is not None or field in ("notes", "image_url")):
            setattr(recipe, field, changes[field])
    if payload.ingredients is not None:
        recipe.ingredients = [
            item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in payload.ingredients
        ]
    if payload.directions is not None:
        recipe.directions = _direction_documents(payload.directions)

    if payload.total_time_value is not None:
        recipe.total_time_value = payload.total_time_value
    if payload.total_time_unit is not None:
        recipe.total_time_unit = payload.total_time_unit.value
    recipe.total_time = format_total_time(recipe.total_time_value, recipe.total_time_unit)


async def get_category_by_name(session: AsyncSession, user_id: str, name: str) -> RecipeCategory | None:
    return await session.scalar(
        select(RecipeCategory).where(RecipeCategory.user_id == user_id, RecipeCategory.name == name)
    )


async def refresh_category_count(session: AsyncSession, user_id: str, name: str) -> None:
    try:
        count = await session.scalar(
            select(func.count(Recipe.id)).where(Recipe.user_id == user_id, Recipe.category == name)
        )
        category = await get_category_by_name(session, user_id, name)
        if category is None:
            session.add(RecipeCategory(user_id=user_id, name=name, description="", count=count or 0))
        else:
            category.count = count or 0
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error("Error updating category count for %s: %s", name, exc)


async def rename_category_recipes(session: AsyncSession, user_id: str, old_name: str, new_name: str) -> None:
    await session.execute(
        update(Recipe)
        .where(Recipe.user_id == user_id, Recipe.category == old_name)
        .values(category=new_name)
    )


async def move_recipes_to_fallback(session: AsyncSession, user_id: str, name: str) -> None:
    await session.execute(
        update(Recipe)
        .where(Recipe.user_id == user_id, Recipe.category == name)
        .values(category=FALLBACK_CATEGORY)
    )
