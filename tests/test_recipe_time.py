import pytest

from dashboard.models.enums import TimeUnit
from dashboard.schemas.recipe import Direction, Ingredient, RecipeCreate, RecipeUpdate
from dashboard.services.recipes import apply_recipe_update, build_recipe, format_step_duration, format_total_time


@pytest.mark.parametrize(
    ("value", "unit", "expected"),
    [
        (45, TimeUnit.MINUTES, "45 mins"),
        (1, TimeUnit.MINUTES, "1 minute"),
        (1, TimeUnit.HOURS, "1 hour"),
        (2, TimeUnit.HOURS, "2 hours"),
        (1, TimeUnit.DAYS, "1 day"),
        (3, "days", "3 days"),
    ],
)
def test_format_total_time(value: int, unit: TimeUnit | str, expected: str) -> None:
    assert format_total_time(value, unit) == expected


def test_day_long_steps_are_numbered() -> None:
    assert format_step_duration(2, TimeUnit.DAYS) == "Day 2"
    assert format_step_duration(10, TimeUnit.MINUTES) == "10 mins"


def test_build_recipe_fills_derived_labels() -> None:
    payload = RecipeCreate(
        title="  Sourdough  ",
        category="Bread",
        ingredients=[Ingredient(name="Flour", quantity="500", unit="g")],
        directions=[
            Direction(step=1, instruction="Feed the starter", time_value=1, time_unit=TimeUnit.DAYS),
            Direction(step=2, instruction="Bake", time_value=45, time_unit=TimeUnit.MINUTES),
        ],
        total_time_value=2,
        total_time_unit=TimeUnit.DAYS,
    )

    recipe = build_recipe("user-1", payload)

    assert recipe.title == "Sourdough"
    assert recipe.total_time == "2 days"
    assert recipe.is_favorite is False
    assert [item["duration"] for item in recipe.directions] == ["Day 1", "45 mins"]
    assert recipe.directions[1]["timeValue"] == 45
    assert recipe.ingredients == [{"name": "Flour", "quantity": "500", "unit": "g"}]


def test_update_recomputes_total_time() -> None:
    recipe = build_recipe("user-1", RecipeCreate(title="Soup", category="Dinner", total_time_value=30))

    apply_recipe_update(recipe, RecipeUpdate(total_time_value=1, total_time_unit=TimeUnit.HOURS, notes=None))

    assert recipe.total_time == "1 hour"
    assert recipe.total_time_unit == "hours"
    assert recipe.category == "Dinner"
