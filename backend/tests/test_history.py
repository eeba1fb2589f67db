"""
Tests for meal-plan history grouping and copying a period's plan.
"""

from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from mealplan.errors import NoMealPlans, StoreUnavailable
from mealplan.models import MealPlan
from mealplan.services.history import copy_period, meal_plan_history
from mealplan.services.periods import PeriodMode


@pytest.fixture
def pasta(make_recipe):
    return make_recipe("Pasta", [("pasta", 1, "lb")])


@pytest.fixture
def salad(make_recipe):
    return make_recipe("Salad", [("spinach", 2, "cup")])


class TestMealPlanHistory:

    def test_groups_by_week_newest_first(self, db, user, pasta, salad, schedule):
        schedule(pasta, date(2024, 1, 3), "dinner")
        schedule(salad, date(2024, 1, 3), "lunch")
        schedule(pasta, date(2024, 1, 10), "dinner")

        history = meal_plan_history(db, user.id, PeriodMode.WEEK)

        assert [h.period.key for h in history] == ["2024-01-08", "2024-01-01"]
        week1 = history[1]
        assert week1.meals_planned == 2
        assert week1.total_recipes == 2
        assert week1.total_possible_meals == 21
        assert week1.planning_percentage == 10
        assert week1.status == "partial"
        assert week1.meals["2024-01-03"]["lunch"]["recipe_name"] == "Salad"
        assert week1.name == "Jan 1 - Jan 7, 2024"

    def test_month_uses_actual_days(self, db, user, pasta, schedule):
        schedule(pasta, date(2024, 2, 14))
        history = meal_plan_history(db, user.id, PeriodMode.MONTH)
        assert history[0].total_possible_meals == 29 * 3

    def test_fully_planned_week_is_completed(self, db, user, pasta, schedule):
        for day in range(1, 8):
            for meal in ("breakfast", "lunch", "dinner"):
                schedule(pasta, date(2024, 1, day), meal)
        history = meal_plan_history(db, user.id, PeriodMode.WEEK)
        assert history[0].planning_percentage == 100
        assert history[0].status == "completed"
        assert history[0].total_recipes == 1

    def test_empty_history(self, db, user):
        assert meal_plan_history(db, user.id, PeriodMode.TWO_WEEK) == []


class TestCopyPeriod:

    def test_copies_meals_at_same_offsets(self, db, user, pasta, salad, schedule):
        schedule(pasta, date(2024, 1, 1), "dinner")
        schedule(salad, date(2024, 1, 4), "lunch")

        created = copy_period(db, user.id, date(2024, 1, 1), PeriodMode.WEEK, date(2024, 2, 5))

        assert sorted((m.plan_date, m.meal_type) for m in created) == [
            (date(2024, 2, 5), "dinner"),
            (date(2024, 2, 8), "lunch"),
        ]
        assert db.query(MealPlan).filter(MealPlan.user_id == user.id).count() == 4

    def test_store_failure_surfaces_as_store_unavailable(self, db, user, pasta, schedule, monkeypatch):
        schedule(pasta, date(2024, 1, 1), "dinner")

        def _boom():
            raise OperationalError("COMMIT", {}, Exception("connection lost"))

        monkeypatch.setattr(db, "commit", _boom)
        with pytest.raises(StoreUnavailable):
            copy_period(db, user.id, date(2024, 1, 1), PeriodMode.WEEK, date(2024, 2, 5))
        monkeypatch.undo()
        assert db.query(MealPlan).filter(MealPlan.user_id == user.id).count() == 1

    def test_empty_source_period(self, db, user):
        with pytest.raises(NoMealPlans):
            copy_period(db, user.id, date(2024, 1, 1), PeriodMode.WEEK, date(2024, 2, 5))
