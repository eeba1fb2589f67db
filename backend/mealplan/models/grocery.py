from sqlalchemy import (
    Column, String, Integer, Float, Boolean, Date, ForeignKey, JSON, Uuid, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from mealplan.database import Base, BaseMixin


class GroceryList(BaseMixin, Base):
    __tablename__ = "grocery_lists"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "period_start", "created_from_meal_plan",
            name="uq_grocery_lists_user_period",
        ),
    )

    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    period_start = Column(Date, index=True)
    period_end = Column(Date)
    # JSON array of {name, amount, unit, recipes, checked, estimated_price}
    items = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    estimated_cost = Column(Float, nullable=False, default=0.0)
    created_from_meal_plan = Column(Boolean, nullable=False, default=True)
    revision = Column(Integer, nullable=False)

    user = relationship("User", back_populates="grocery_lists")

    __mapper_args__ = {"version_id_col": revision}
