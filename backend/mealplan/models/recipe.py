from sqlalchemy import Column, String, Integer, Float, Boolean, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from mealplan.database import Base, BaseMixin


class Recipe(BaseMixin, Base):
    __tablename__ = "recipes"

    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    servings = Column(Integer, default=4)
    cuisine = Column(String)

    user = relationship("User", back_populates="recipes")
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.sort_order",
    )


class RecipeIngredient(BaseMixin, Base):
    __tablename__ = "recipe_ingredients"

    recipe_id = Column(Uuid, ForeignKey("recipes.id"), nullable=False, index=True)
    ingredient_name = Column(String, nullable=False)
    quantity = Column(Float)
    unit = Column(String)
    preparation = Column(String)
    sort_order = Column(Integer)
    optional = Column(Boolean, default=False)

    recipe = relationship("Recipe", back_populates="ingredients")
