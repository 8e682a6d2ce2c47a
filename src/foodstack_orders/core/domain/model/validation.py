from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ValidationCode(str, Enum):
    NULL_REQUEST = "NullRequest"
    MISSING_REQUEST_ID = "MissingRequestID"
    NO_MEALS = "NoMeals"
    NULL_MEAL_ITEM = "NullMealItem"
    MISSING_MEAL_ID = "MissingMealID"
    QUANTITY_NEGATIVE = "QuantityNegative"
    QUANTITY_TOO_HIGH = "QuantityTooHigh"
    ALL_ZERO_QUANTITY = "AllZeroQuantity"


@dataclass(frozen=True)
class ValidationIssue:
    code: ValidationCode
    message: str
    meal_id: str | None = None
