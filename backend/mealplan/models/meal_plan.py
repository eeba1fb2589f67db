from sqlalchemy import Column, String, Integer, Date, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from mealplan.database import Base, BaseMixin


class MealPlan(BaseMixin, Base):
    __tablename__ = "meal_plans"

    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    plan_date = Column(Date, nullable=False, index=True)
    meal_type = Column(String, nullable=False)
    recipe_id = Column(Uuid, ForeignKey("recipes.id"), nullable=True)
    servings = Column(Integer)
    notes = Column(Text)

    user = relationship("User", back_populates="meal_plans")
    recipe = relationship("Recipe")
