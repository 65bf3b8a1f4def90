from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.api.deps import get_user_id
from dashboard.db.session import get_session
from dashboard.models.cooking_session import CookingSession
from dashboard.schemas.common import ApiResponse
from dashboard.schemas.cooking_session import CookingSessionRead, CookingSessionSave

router = APIRouter(prefix="/api/cooking-session", tags=["cooking-session"])


@router.get("/{recipe_id}", response_model=ApiResponse[CookingSessionRead])
async def get_cooking_session(
    recipe_id: str,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    cooking = await session.get(CookingSession, (user_id, recipe_id))
    if cooking is None:
        return ApiResponse(data=None)
    return ApiResponse(data=CookingSessionRead.model_validate(cooking))


@router.post("/{recipe_id}", response_model=ApiResponse[CookingSessionRead])
async def save_cooking_session(
    recipe_id: str,
    payload: CookingSessionSave,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    cooking = await session.get(CookingSession, (user_id, recipe_id))
    if cooking is None:
        cooking = CookingSession(user_id=user_id, recipe_id=recipe_id)
        session.add(cooking)

    for field, value in payload.model_dump().items():
        setattr(cooking, field, value)

    await session.commit()
    await session.refresh(cooking)
    return ApiResponse(data=CookingSessionRead.model_validate(cooking))


@router.delete("/{recipe_id}", response_model=ApiResponse[None])
async def delete_cooking_session(
    recipe_id: str,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    cooking = await session.get(CookingSession, (user_id, recipe_id))
    if cooking is not None:
        await session.delete(cooking)
        await session.commit()
    return ApiResponse()
