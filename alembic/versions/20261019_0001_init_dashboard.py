"""init dashboard tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 10:00:00

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


ENUM_TYPES = {
    "budget_category": ("Income", "Expense", "Savings"),
    "date_type": ("fixed", "dynamic"),
    "weekend_rule": ("next", "previous"),
    "priority_level": ("high", "medium", "low"),
    "repeat_type": ("none", "monthly"),
    "source_type": ("budget", "todo", "recipe"),
}

budget_category_enum = postgresql.ENUM(*ENUM_TYPES["budget_category"], name="budget_category", create_type=False)
date_type_enum = postgresql.ENUM(*ENUM_TYPES["date_type"], name="date_type", create_type=False)
weekend_rule_enum = postgresql.ENUM(*ENUM_TYPES["weekend_rule"], name="weekend_rule", create_type=False)
priority_enum = postgresql.ENUM(*ENUM_TYPES["priority_level"], name="priority_level", create_type=False)
repeat_type_enum = postgresql.ENUM(*ENUM_TYPES["repeat_type"], name="repeat_type", create_type=False)
source_type_enum = postgresql.ENUM(*ENUM_TYPES["source_type"], name="source_type", create_type=False)


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
    ]
    if updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()"))
        )
    return columns


def upgrade() -> None:
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(
            f"""
            DO $$
            BEGIN
                IF NOT EXISTS (SELECT 1 FROM pg_type WHERE typname = '{name}') THEN
                    CREATE TYPE {name} AS ENUM ({labels});
                END IF;
            END$$;
            """
        )

    op.create_table(
        "budget_templates",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("source", sa.String(length=255), nullable=False),
        sa.Column("category", budget_category_enum, nullable=False),
        sa.Column("purpose", sa.String(length=255), nullable=False),
        sa.Column("due_day", sa.Integer(), nullable=False),
        sa.Column("date_type", date_type_enum, nullable=False, server_default="fixed"),
        sa.Column("dynamic_rule", weekend_rule_enum, nullable=False, server_default="next"),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("expected_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("target", sa.Numeric(12, 2), nullable=True),
        sa.Column("current_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("stepup_date", sa.Date(), nullable=True),
        sa.Column("stepup_amount", sa.Numeric(12, 2), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_budget_templates_user_id", "budget_templates", ["user_id"])

    op.create_table(
        "monthly_budgets",
        sa.Column("user_id", sa.String(length=64), primary_key=True),
        sa.Column("month_key", sa.String(length=7), primary_key=True),
        sa.Column("transactions", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "budget_transactions",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("source", sa.String(length=255), nullable=False),
        sa.Column("category", budget_category_enum, nullable=False),
        sa.Column("purpose", sa.String(length=255), nullable=False),
        sa.Column("due_day", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("expected_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("target", sa.Numeric(12, 2), nullable=True),
        sa.Column("current_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("stepup_date", sa.Date(), nullable=True),
        sa.Column("stepup_amount", sa.Numeric(12, 2), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_budget_transactions_user_id", "budget_transactions", ["user_id"])

    op.create_table(
        "notification_records",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("priority", priority_enum, nullable=False),
        sa.Column("repeat_type", repeat_type_enum, nullable=False),
        sa.Column("source_type", source_type_enum, nullable=False),
        sa.Column("source_id", sa.String(length=64), nullable=False),
        sa.Column("category", source_type_enum, nullable=False),
        sa.Column("month_key", sa.String(length=7), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_notification_records_source",
        "notification_records",
        ["user_id", "source_type", "source_id", "month_key"],
    )

    op.create_table(
        "event_records",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("priority", priority_enum, nullable=False),
        sa.Column("repeat_type", repeat_type_enum, nullable=False),
        sa.Column("source_type", source_type_enum, nullable=False),
        sa.Column("source_id", sa.String(length=64), nullable=False),
        sa.Column("month_key", sa.String(length=7), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_event_records_source", "event_records", ["user_id", "source_type", "source_id", "month_key"])

    op.create_table(
        "inbox_notifications",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False, server_default="info"),
        sa.Column("link", sa.String(length=512), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(updated=False),
    )
    op.create_index("ix_inbox_notifications_user_id", "inbox_notifications", ["user_id"])

    op.create_table(
        "todos",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="pending"),
        sa.Column("priority", priority_enum, nullable=False, server_default="medium"),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("due_date", sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_todos_user_id", "todos", ["user_id"])

    op.create_table(
        "recipes",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("ingredients", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("directions", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("serving_size", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("total_time", sa.String(length=32), nullable=False, server_default=""),
        sa.Column("total_time_value", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_time_unit", sa.String(length=16), nullable=False, server_default="minutes"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
        sa.Column("is_favorite", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_recipes_user_id", "recipes", ["user_id"])
    op.create_index("ix_recipes_category", "recipes", ["category"])

    op.create_table(
        "recipe_categories",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(updated=False),
        sa.UniqueConstraint("user_id", "name", name="uq_recipe_categories_user_name"),
    )

    op.create_table(
        "cooking_sessions",
        sa.Column("user_id", sa.String(length=64), primary_key=True),
        sa.Column("recipe_id", sa.String(length=64), primary_key=True),
        sa.Column("is_playing", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_paused", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("pause_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("total_pause_duration", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("checked_steps", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
    )


def downgrade() -> None:
    op.drop_table("cooking_sessions")
    op.drop_table("recipe_categories")
    op.drop_table("recipes")
    op.drop_table("todos")
    op.drop_table("inbox_notifications")
    op.drop_table("event_records")
    op.drop_table("notification_records")
    op.drop_table("budget_transactions")
    op.drop_table("monthly_budgets")
    op.drop_table("budget_templates")
    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name};")
