"""Initial schema: users, recipes, meal plans, grocery lists

Revision ID: 001
Revises:
Create Date: 2025-01-01 00:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("email", sa.String, unique=True, index=True, nullable=False),
        sa.Column("name", sa.String),
        *_timestamps(),
    )

    # --- recipes ---
    op.create_table(
        "recipes",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("servings", sa.Integer, server_default="4"),
        sa.Column("cuisine", sa.String),
        *_timestamps(),
    )

    # --- recipe_ingredients ---
    op.create_table(
        "recipe_ingredients",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("recipe_id", sa.Uuid, sa.ForeignKey("recipes.id"), nullable=False, index=True),
        sa.Column("ingredient_name", sa.String, nullable=False),
        sa.Column("quantity", sa.Float),
        sa.Column("unit", sa.String),
        sa.Column("preparation", sa.String),
        sa.Column("sort_order", sa.Integer),
        sa.Column("optional", sa.Boolean, server_default="false"),
        *_timestamps(),
    )

    # --- meal_plans ---
    op.create_table(
        "meal_plans",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("plan_date", sa.Date, nullable=False, index=True),
        sa.Column("meal_type", sa.String, nullable=False),
        sa.Column("recipe_id", sa.Uuid, sa.ForeignKey("recipes.id"), nullable=True),
        sa.Column("servings", sa.Integer),
        sa.Column("notes", sa.Text),
        *_timestamps(),
    )

    # --- grocery_lists ---
    op.create_table(
        "grocery_lists",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("period_start", sa.Date, index=True),
        sa.Column("period_end", sa.Date),
        sa.Column("items", sa.JSON().with_variant(JSONB, "postgresql"), nullable=False, server_default="[]"),
        sa.Column("estimated_cost", sa.Float, nullable=False, server_default="0"),
        sa.Column("created_from_meal_plan", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("revision", sa.Integer, nullable=False, server_default="1"),
        *_timestamps(),
        sa.UniqueConstraint(
            "user_id", "period_start", "created_from_meal_plan",
            name="uq_grocery_lists_user_period",
        ),
    )


def downgrade() -> None:
    op.drop_table("grocery_lists")
    op.drop_table("meal_plans")
    op.drop_table("recipe_ingredients")
    op.drop_table("recipes")
    op.drop_table("users")
