from datetime import datetime
from uuid import UUID
from pydantic import BaseModel


class RecipeIngredientCreate(BaseModel):
    ingredient_name: str
    quantity: float | None = None
    unit: str | None = None
    preparation: str | None = None
    sort_order: int | None = None
    optional: bool = False


class RecipeIngredientResponse(BaseModel):
    id: UUID
    recipe_id: UUID
    ingredient_name: str
    quantity: float | None
    unit: str | None
    preparation: str | None
    sort_order: int | None
    optional: bool

    model_config = {"from_attributes": True}


class RecipeCreate(BaseModel):
    name: str
    description: str | None = None
    servings: int = 4
    cuisine: str | None = None
    ingredients: list[RecipeIngredientCreate] = []


class RecipeListResponse(BaseModel):
    id: UUID
    name: str
    servings: int | None
    cuisine: str | None

    model_config = {"from_attributes": True}


class RecipeResponse(RecipeListResponse):
    description: str | None
    ingredients: list[RecipeIngredientResponse] = []
    created_at: datetime
    updated_at: datetime
