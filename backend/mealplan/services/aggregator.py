"""
Ingredient Aggregator: folds the ingredient lines of scheduled meals into
one shopping list.

Lines merge when their trimmed, lower-cased name and raw unit string match;
the same ingredient in another unit stays a separate item. Amounts are
accumulated first and every item is priced afterwards from its final total.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date

from mealplan.services.pricing import estimate_price

logger = logging.getLogger(__name__)


@dataclass
class MealPlanEntry:
    """A scheduled meal with the ingredient lines of its recipe."""

    date: date
    meal_type: str
    recipe_id: object
    recipe_name: str
    ingredients: list[dict] = field(default_factory=list)
    servings: int | None = None


@dataclass
class GroceryItem:
    name: str
    amount: float
    unit: str
    recipes: list[str] = field(default_factory=list)
    checked: bool = False
    estimated_price: float = 0.0

    @property
    def merge_key(self) -> tuple[str, str]:
        return normalize_name(self.name), self.unit

    def add_recipe(self, recipe_name: str) -> None:
        if recipe_name and recipe_name not in self.recipes:
            self.recipes.append(recipe_name)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
            "recipes": list(self.recipes),
            "checked": self.checked,
            "estimated_price": self.estimated_price,
        }


@dataclass
class AggregationResult:
    items: list[GroceryItem]
    estimated_cost: float
    skipped_lines: int = 0

    def items_as_dicts(self) -> list[dict]:
        return [item.to_dict() for item in self.items]


def normalize_name(name: str) -> str:
    return name.strip().lower()


def _parse_line(line: dict) -> tuple[str, float, str] | None:
    """Return (name, amount, unit) or None when the line can't be shopped."""
    name = line.get("name")
    if not isinstance(name, str) or not name.strip():
        return None
    raw_amount = line.get("amount")
    if raw_amount is None or isinstance(raw_amount, bool):
        return None
    try:
        amount = float(raw_amount)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount):
        return None
    return name.strip(), amount, line.get("unit") or ""


def aggregate(entries: list[MealPlanEntry]) -> AggregationResult:
    merged: dict[tuple[str, str], GroceryItem] = {}
    skipped = 0

    for entry in entries:
        for line in entry.ingredients or []:
            parsed = _parse_line(line)
            if parsed is None:
                skipped += 1
                logger.warning(
                    f"Skipping malformed ingredient line {line!r} "
                    f"from '{entry.recipe_name}' on {entry.date}"
                )
                continue
            name, amount, unit = parsed
            key = (normalize_name(name), unit)
            item = merged.get(key)
            if item is None:
                item = GroceryItem(name=name, amount=0.0, unit=unit)
                merged[key] = item
            item.amount += amount
            item.add_recipe(entry.recipe_name)

    # Second pass: price from the accumulated amount only
    items = list(merged.values())
    for item in items:
        item.amount = round(item.amount, 4)
        item.estimated_price = estimate_price(item.name, item.amount, item.unit)

    estimated_cost = round(sum(item.estimated_price for item in items), 2)
    return AggregationResult(items=items, estimated_cost=estimated_cost, skipped_lines=skipped)
