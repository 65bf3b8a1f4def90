from fastapi import APIRouter, Depends, status
from sqlalchemy import select

from dashboard.api.deps import get_store, get_user_id
from dashboard.errors import NotFound
from dashboard.models.enums import SourceType
from dashboard.models.todo import Todo
from dashboard.schemas.common import ApiResponse
from dashboard.schemas.todo import TodoCreate, TodoRead, TodoUpdate
from dashboard.services.derived_records import retract_derived_records
from dashboard.services.store import DashboardStore
from dashboard.services.todos import sync_todo_records

router = APIRouter(prefix="/api/todos", tags=["todos"])

# Edits to these fields change the todo's notification and event.
DERIVED_FIELDS = frozenset({"title", "description", "priority", "due_date"})
REQUIRED_FIELDS = frozenset({"title", "description", "status", "priority", "completed"})


async def _get_todo(store: DashboardStore, user_id: str, todo_id: str) -> Todo:
    todo = await store.session.get(Todo, todo_id)
    if todo is None or todo.user_id != user_id:
        raise NotFound("Todo not found", f"No todo found with ID: {todo_id}")
    return todo


@router.get("", response_model=ApiResponse[list[TodoRead]])
async def list_todos(
    user_id: str = Depends(get_user_id),
    store: DashboardStore = Depends(get_store),
) -> ApiResponse:
    rows = await store.session.scalars(
        select(Todo).where(Todo.user_id == user_id).order_by(Todo.created_at.desc(), Todo.id.desc())
    )
    return ApiResponse(data=[TodoRead.model_validate(item) for item in rows.all()])


@router.get("/{todo_id}", response_model=ApiResponse[TodoRead])
async def get_todo(
    todo_id: str,
    user_id: str = Depends(get_user_id),
    store: DashboardStore = Depends(get_store),
) -> ApiResponse:
    todo = await _get_todo(store, user_id, todo_id)
    return ApiResponse(data=TodoRead.model_validate(todo))


@router.post("", response_model=ApiResponse[TodoRead], status_code=status.HTTP_201_CREATED)
async def create_todo(
    payload: TodoCreate,
    user_id: str = Depends(get_user_id),
    store: DashboardStore = Depends(get_store),
) -> ApiResponse:
    todo = Todo(
        user_id=user_id,
        title=payload.title,
        description=payload.description,
        status=payload.status,
        priority=payload.priority,
        completed=False,
        due_date=payload.due_date,
    )
    store.session.add(todo)
    await store.session.commit()
    await store.session.refresh(todo)

    result = TodoRead.model_validate(todo)
    await sync_todo_records(store, user_id, result, replace=False)
    return ApiResponse(data=result)


@router.put("/{todo_id}", response_model=ApiResponse[TodoRead])
async def update_todo(
    todo_id: str,
    payload: TodoUpdate,
    user_id: str = Depends(get_user_id),
    store: DashboardStore = Depends(get_store),
) -> ApiResponse:
    todo = await _get_todo(store, user_id, todo_id)
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field not in REQUIRED_FIELDS
    }
    for field, value in changes.items():
        setattr(todo, field, value)

    await store.session.commit()
    await store.session.refresh(todo)

    result = TodoRead.model_validate(todo)
    if DERIVED_FIELDS & changes.keys():
        await sync_todo_records(store, user_id, result)
    return ApiResponse(data=result)


@router.delete("/{todo_id}", response_model=ApiResponse[None])
async def delete_todo(
    todo_id: str,
    user_id: str = Depends(get_user_id),
    store: DashboardStore = Depends(get_store),
) -> ApiResponse:
    todo = await _get_todo(store, user_id, todo_id)
    await store.session.delete(todo)
    await store.session.commit()

    await retract_derived_records(store, user_id, SourceType.TODO, todo_id)
    return ApiResponse(message="Todo deleted successfully")
