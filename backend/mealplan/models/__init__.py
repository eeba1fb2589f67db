from mealplan.models.user import User
from mealplan.models.recipe import Recipe, RecipeIngredient
from mealplan.models.meal_plan import MealPlan
from mealplan.models.grocery import GroceryList

__all__ = [
    "User", "Recipe", "RecipeIngredient", "MealPlan", "GroceryList",
]
