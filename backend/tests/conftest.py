"""
Pytest configuration and shared fixtures.

Every test gets a fresh in-memory SQLite database; services receive an
explicit `today` so nothing depends on the wall clock.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mealplan.database import Base, get_db
from mealplan.main import app
from mealplan.models import MealPlan, Recipe, RecipeIngredient, User


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    u = User(email="cook@example.com", name="Cook")
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture
def make_recipe(db, user):
    """Factory: make_recipe("Soup", [("onion", 1, "cup"), ...])."""
    def _make(name, lines, owner=None, optional=()):
        recipe = Recipe(name=name, servings=4, user_id=(owner or user).id)
        db.add(recipe)
        db.flush()
        for idx, (ing_name, qty, unit) in enumerate(lines):
            db.add(RecipeIngredient(
                recipe_id=recipe.id,
                ingredient_name=ing_name,
                quantity=qty,
                unit=unit,
                sort_order=idx,
                optional=ing_name in optional,
            ))
        db.commit()
        db.refresh(recipe)
        return recipe
    return _make


@pytest.fixture
def schedule(db, user):
    """Factory: schedule(recipe, date(2024, 1, 3), "dinner")."""
    def _schedule(recipe, plan_date: date, meal_type="dinner", owner=None):
        mp = MealPlan(
            user_id=(owner or user).id,
            plan_date=plan_date,
            meal_type=meal_type,
            recipe_id=recipe.id if recipe else None,
        )
        db.add(mp)
        db.commit()
        db.refresh(mp)
        return mp
    return _schedule


@pytest.fixture
def client(session_factory, user):
    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        c.headers.update({"X-User-Id": str(user.id)})
        yield c
    app.dependency_overrides.clear()
