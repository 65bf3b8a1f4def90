from __future__ import annotations

from dashboard.models.enums import Priority, RepeatType, SourceType
from dashboard.schemas.todo import TodoRead
from dashboard.services.derived_records import (
    DerivedRecordDraft,
    publish_derived_records,
    retract_derived_records,
)
from dashboard.services.month import month_key
from dashboard.services.store import DashboardStore


def todo_draft(todo: TodoRead) -> DerivedRecordDraft | None:
    if todo.due_date is None:
        return None
    return DerivedRecordDraft(
        title=todo.title,
        date=todo.due_date,
        priority=Priority(todo.priority),
        repeat_type=RepeatType.NONE,
        source_type=SourceType.TODO,
        source_id=todo.id,
        month_key=month_key(todo.due_date.year, todo.due_date.month),
        event_title=todo.title,
        event_description=todo.description or None,
    )


async def sync_todo_records(store: DashboardStore, user_id: str, todo: TodoRead, replace: bool = True) -> bool:
    """Publish the todo's notification and event, dropping stale ones first.

    Takes a detached copy of the row: a failed write rolls the session back.
    """
    if replace:
        await retract_derived_records(store, user_id, SourceType.TODO, todo.id)

    draft = todo_draft(todo)
    if draft is None:
        return False
    return await publish_derived_records(store, user_id, draft)
