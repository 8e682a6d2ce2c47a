from __future__ import annotations

from typing import List, Tuple

from foodstack_orders.core.domain.model.order import MAX_QUANTITY, OrderRequest
from foodstack_orders.core.domain.model.validation import (
    ValidationCode,
    ValidationIssue,
)


def validate_order_request(
    request: OrderRequest | None,
) -> Tuple[ValidationIssue, ...]:
    """Structural checks only; every problem is collected, nothing is raised.

    An empty tuple means the request is well formed.
    """
    if request is None:
        return (
            ValidationIssue(ValidationCode.NULL_REQUEST, "Request body is required."),
        )

    issues: List[ValidationIssue] = []
    ordered = 0

    if not (request.request_id or "").strip():
        issues.append(
            ValidationIssue(ValidationCode.MISSING_REQUEST_ID, "requestID is required.")
        )

    if not request.meals:
        issues.append(
            ValidationIssue(
                ValidationCode.NO_MEALS, "Order must contain at least one meal."
            )
        )
    else:
        for item in request.meals:
            if item is None:
                issues.append(
                    ValidationIssue(
                        ValidationCode.NULL_MEAL_ITEM, "Meal item cannot be null."
                    )
                )
                continue
            if not (item.meal_id or "").strip():
                issues.append(
                    ValidationIssue(ValidationCode.MISSING_MEAL_ID, "MealID is required.")
                )
            if item.quantity < 0:
                issues.append(
                    ValidationIssue(
                        ValidationCode.QUANTITY_NEGATIVE,
                        "Quantity cannot be negative.",
                        meal_id=item.meal_id,
                    )
                )
            if item.quantity > MAX_QUANTITY:
                issues.append(
                    ValidationIssue(
                        ValidationCode.QUANTITY_TOO_HIGH,
                        f"Quantity cannot be greater than {MAX_QUANTITY}.",
                        meal_id=item.meal_id,
                    )
                )
            if item.quantity > 0:
                ordered += 1

    if not issues and ordered == 0:
        issues.append(
            ValidationIssue(
                ValidationCode.ALL_ZERO_QUANTITY,
                "At least one meal must have quantity greater than zero.",
            )
        )

    return tuple(issues)
