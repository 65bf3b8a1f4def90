from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.api.deps import get_user_id
from dashboard.db.session import get_session
from dashboard.errors import NotFound, ValidationFailed
from dashboard.models.recipe import Recipe
from dashboard.models.recipe_category import RecipeCategory
from dashboard.schemas.common import ApiResponse
from dashboard.schemas.recipe import (
    RecipeCategoryCreate,
    RecipeCategoryRead,
    RecipeCreate,
    RecipeRead,
    RecipeUpdate,
)
from dashboard.services.recipes import (
    FALLBACK_CATEGORY,
    apply_recipe_update,
    build_recipe,
    move_recipes_to_fallback,
    refresh_category_count,
    rename_category_recipes,
)

router = APIRouter(prefix="/api/recipe", tags=["recipes"])


async def _get_recipe(session: AsyncSession, user_id: str, recipe_id: str) -> Recipe:
    recipe = await session.get(Recipe, recipe_id)
    if recipe is None or recipe.user_id != user_id:
        raise NotFound("Recipe not found", f"Recipe with ID {recipe_id} does not exist")
    return recipe


async def _get_category(session: AsyncSession, user_id: str, category_id: str) -> RecipeCategory:
    category = await session.get(RecipeCategory, category_id)
    if category is None or category.user_id != user_id:
        raise NotFound("Category not found", f"Category with ID {category_id} does not exist")
    return category


async def _list_recipes(session: AsyncSession, *filters) -> list[RecipeRead]:
    rows = await session.scalars(
        select(Recipe).where(*filters).order_by(Recipe.created_at.desc(), Recipe.id.desc())
    )
    return [RecipeRead.model_validate(item) for item in rows.all()]


@router.get("/recipes", response_model=ApiResponse[list[RecipeRead]])
async def list_recipes(
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    return ApiResponse(data=await _list_recipes(session, Recipe.user_id == user_id))


@router.get("/recipes/favorites", response_model=ApiResponse[list[RecipeRead]])
async def list_favorite_recipes(
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    recipes = await _list_recipes(session, Recipe.user_id == user_id, Recipe.is_favorite.is_(True))
    return ApiResponse(data=recipes)


@router.get("/recipes/category/{category}", response_model=ApiResponse[list[RecipeRead]])
async def list_recipes_by_category(
    category: str,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    recipes = await _list_recipes(session, Recipe.user_id == user_id, Recipe.category == category)
    return ApiResponse(data=recipes)


@router.get("/recipes/{recipe_id}", response_model=ApiResponse[RecipeRead])
async def get_recipe(
    recipe_id: str,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    recipe = await _get_recipe(session, user_id, recipe_id)
    return ApiResponse(data=RecipeRead.model_validate(recipe))


@router.post("/recipes", response_model=ApiResponse[RecipeRead], status_code=status.HTTP_201_CREATED)
async def create_recipe(
    payload: RecipeCreate,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    recipe = build_recipe(user_id, payload)
    session.add(recipe)
    await session.commit()
    await session.refresh(recipe)

    await refresh_category_count(session, user_id, recipe.category)
    return ApiResponse(data=RecipeRead.model_validate(recipe))


@router.put("/recipes/{recipe_id}", response_model=ApiResponse[RecipeRead])
async def update_recipe(
    recipe_id: str,
    payload: RecipeUpdate,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    recipe = await _get_recipe(session, user_id, recipe_id)
    old_category = recipe.category
    apply_recipe_update(recipe, payload)
    await session.commit()
    await session.refresh(recipe)

    if recipe.category != old_category:
        await refresh_category_count(session, user_id, old_category)
        await refresh_category_count(session, user_id, recipe.category)
    return ApiResponse(data=RecipeRead.model_validate(recipe))


@router.delete("/recipes/{recipe_id}", response_model=ApiResponse[None])
async def delete_recipe(
    recipe_id: str,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    recipe = await _get_recipe(session, user_id, recipe_id)
    category = recipe.category
    await session.delete(recipe)
    await session.commit()

    await refresh_category_count(session, user_id, category)
    return ApiResponse(message="Recipe deleted successfully")


@router.put("/recipes/{recipe_id}/favorite", response_model=ApiResponse[RecipeRead])
async def toggle_favorite(
    recipe_id: str,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    recipe = await _get_recipe(session, user_id, recipe_id)
    recipe.is_favorite = not recipe.is_favorite
    await session.commit()
    await session.refresh(recipe)
    return ApiResponse(data=RecipeRead.model_validate(recipe))


@router.get("/categories", response_model=ApiResponse[list[RecipeCategoryRead]])
async def list_categories(
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    rows = await session.scalars(
        select(RecipeCategory).where(RecipeCategory.user_id == user_id).order_by(RecipeCategory.name.asc())
    )
    return ApiResponse(data=[RecipeCategoryRead.model_validate(item) for item in rows.all()])


@router.post("/categories", response_model=ApiResponse[RecipeCategoryRead], status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: RecipeCategoryCreate,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    category = RecipeCategory(user_id=user_id, name=payload.name.strip(), description=payload.description, count=0)
    session.add(category)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ValidationFailed("Category already exists", f"A category named {payload.name} exists") from exc

    await session.refresh(category)
    return ApiResponse(data=RecipeCategoryRead.model_validate(category))


@router.put("/categories/{category_id}", response_model=ApiResponse[RecipeCategoryRead])
async def update_category(
    category_id: str,
    payload: RecipeCategoryCreate,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    category = await _get_category(session, user_id, category_id)
    old_name = category.name
    new_name = payload.name.strip()

    category.name = new_name
    category.description = payload.description
    if old_name != new_name:
        await rename_category_recipes(session, user_id, old_name, new_name)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ValidationFailed("Category already exists", f"A category named {new_name} exists") from exc

    await session.refresh(category)
    return ApiResponse(data=RecipeCategoryRead.model_validate(category))


@router.delete("/categories/{category_id}", response_model=ApiResponse[None])
async def delete_category(
    category_id: str,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    category = await _get_category(session, user_id, category_id)
    await move_recipes_to_fallback(session, user_id, category.name)
    await session.delete(category)
    await session.commit()

    await refresh_category_count(session, user_id, FALLBACK_CATEGORY)
    return ApiResponse(message="Category deleted successfully")
