from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Tuple

from foodstack_orders.core.domain.model.menu import Meal, Menu
from foodstack_orders.core.domain.model.order import OrderRequest, fold_key


def quantities_by_meal(request: OrderRequest) -> Dict[str, int]:
    # last line wins when a meal id repeats, same as the stored record
    return {fold_key(item.meal_id): item.quantity for item in request.ordered_items()}


def requests_equivalent(left: OrderRequest | None, right: OrderRequest | None) -> bool:
    """Same ordered meals with the same quantities, in any order."""
    if left is None or right is None:
        return False
    return quantities_by_meal(left) == quantities_by_meal(right)


def build_meal_index(menus: Iterable[Menu | None]) -> Dict[str, Meal]:
    index: Dict[str, Meal] = {}
    for menu in menus:
        if menu is None:
            continue
        for meal in menu.meals or ():
            if meal is None or not (meal.meal_id or "").strip():
                continue
            index.setdefault(fold_key(meal.meal_id), meal)
    return index


def find_unknown_meals(
    request: OrderRequest, meal_index: Mapping[str, Meal]
) -> Tuple[str, ...]:
    unknown: List[str] = []
    for item in request.ordered_items():
        meal_id = item.meal_id or ""
        if fold_key(meal_id) not in meal_index and meal_id not in unknown:
            unknown.append(meal_id)
    return tuple(unknown)
