from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, selectinload

from mealplan.database import get_db
from mealplan.models.recipe import Recipe, RecipeIngredient
from mealplan.models.user import User
from mealplan.schemas.recipe import RecipeCreate, RecipeResponse, RecipeListResponse
from mealplan.utils.auth import get_current_user
from mealplan.utils.pagination import paginate

router = APIRouter()


def _get_recipe(db: Session, recipe_id: UUID, user_id) -> Recipe:
    recipe = db.query(Recipe).options(
        selectinload(Recipe.ingredients),
    ).filter(Recipe.id == recipe_id, Recipe.user_id == user_id).first()
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.get("/", response_model=dict)
def list_recipes(
    search: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    q = db.query(Recipe).filter(Recipe.user_id == current_user.id)
    if search:
        q = q.filter(Recipe.name.ilike(f"%{search}%"))
    q = q.order_by(Recipe.name.asc())
    result = paginate(q, skip, limit)
    result["items"] = [RecipeListResponse.model_validate(i) for i in result["items"]]
    return result


@router.post("/", response_model=RecipeResponse, status_code=201)
def create_recipe(
    body: RecipeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    recipe = Recipe(**body.model_dump(exclude={"ingredients"}), user_id=current_user.id)
    db.add(recipe)
    db.flush()
    for idx, ing_data in enumerate(body.ingredients):
        data = ing_data.model_dump()
        if data["sort_order"] is None:
            data["sort_order"] = idx
        db.add(RecipeIngredient(recipe_id=recipe.id, **data))
    db.commit()
    return _get_recipe(db, recipe.id, current_user.id)


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_recipe(db, recipe_id, current_user.id)
