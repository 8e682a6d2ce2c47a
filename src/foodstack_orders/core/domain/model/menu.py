from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Tuple


@dataclass(frozen=True)
class Meal:
    meal_id: str
    name: str = ""
    category: str = ""
    price: Decimal = Decimal("0")
    image_url: str = ""


@dataclass(frozen=True)
class Menu:
    menu_id: str
    menu_name: str = ""
    meals: Tuple[Meal | None, ...] = field(default_factory=tuple)
