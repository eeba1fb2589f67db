"""
Static grocery price heuristic.

This is a rough approximation for budgeting hints, not a pricing service:
a substring match on the ingredient name picks a base USD price, and the
unit decides how much of that base the quantity represents.
"""

# ── Base prices (USD), first substring match wins ───────────────────

BASE_PRICES = {
    # Proteins
    "chicken": 3.5,
    "beef": 5.5,
    "pork": 4.0,
    "fish": 6.0,
    "salmon": 8.0,
    "eggs": 2.5,
    "tofu": 3.0,
    # Vegetables
    "onion": 1.0,
    "garlic": 2.0,
    "tomato": 2.5,
    "potato": 1.5,
    "carrot": 1.5,
    "broccoli": 2.0,
    "spinach": 2.5,
    "bell pepper": 3.0,
    "mushroom": 3.5,
    # Pantry staples
    "rice": 1.5,
    "pasta": 1.0,
    "flour": 2.0,
    "sugar": 2.0,
    "salt": 1.0,
    "oil": 3.0,
    "butter": 4.0,
    "milk": 3.5,
    "cheese": 5.0,
    # Herbs & spices
    "oregano": 1.5,
    "basil": 2.0,
    "thyme": 1.5,
    "paprika": 2.5,
    "cumin": 2.0,
}

DEFAULT_BASE_PRICE = 2.5

# unit -> fraction of the base price one unit represents
UNIT_MULTIPLIERS = {
    "lb": 1.0,
    "pound": 1.0,
    "oz": 1 / 16,
    "ounce": 1 / 16,
    "kg": 2.2,
    "g": 1 / 454,
    "gram": 1 / 454,
    "cup": 0.5,
    "tbsp": 0.05,
    "tsp": 0.02,
}

# Unknown units ("clove", "can", "") are capped so counts can't explode the total
UNKNOWN_UNIT_FACTOR = 0.25
UNKNOWN_UNIT_CAP = 2.0


def base_price(name: str) -> float:
    lowered = (name or "").lower()
    for fragment, price in BASE_PRICES.items():
        if fragment in lowered:
            return price
    return DEFAULT_BASE_PRICE


def quantity_multiplier(amount: float, unit: str | None) -> float:
    factor = UNIT_MULTIPLIERS.get(unit or "")
    if factor is None:
        return min(amount * UNKNOWN_UNIT_FACTOR, UNKNOWN_UNIT_CAP)
    return amount * factor


def estimate_price(name: str, amount: float, unit: str | None) -> float:
    """Estimated USD cost of `amount` `unit` of `name`, rounded to cents."""
    return round(base_price(name) * quantity_multiplier(amount, unit), 2)
