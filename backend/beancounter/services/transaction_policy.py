"""Transaction type policy for loyalty transactions.

``TYPE_RULES`` is the only place that knows which fields a transaction type
requires, derives or forbids. Recording and editing both go through
``prepare`` so the two flows can never disagree.

| type              | order ref | amount | points earned          | points redeemed |
|-------------------|-----------|--------|------------------------|-----------------|
| purchase          | required  | > 0    | >= 0, derived if unset | must be 0       |
| refund            | required  | < 0    | forced to 0            | must be 0       |
| points_redemption | optional  | forced 0 | forced to 0          | >= 0            |
| points_adjustment | forbidden | forced 0 | any, may be negative | forced to 0     |
"""

import enum
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from beancounter.core.errors import FieldError, ValidationError
from beancounter.models import TransactionDraft, TransactionType


class OrderRef(enum.Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    FORBIDDEN = "forbidden"


class AmountRule(enum.Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    ZERO = "zero"


class PointsRule(enum.Enum):
    NON_NEGATIVE = "non_negative"
    ZERO = "zero"
    ANY = "any"


@dataclass(frozen=True)
class TypeRule:
    order_ref: OrderRef
    amount: AmountRule
    points_earned: PointsRule
    points_redeemed: PointsRule
    # Fields silently set to zero for this type instead of being reported.
    forced: frozenset[str] = frozenset()


TYPE_RULES: dict[TransactionType, TypeRule] = {
    TransactionType.PURCHASE: TypeRule(
        order_ref=OrderRef.REQUIRED,
        amount=AmountRule.POSITIVE,
        points_earned=PointsRule.NON_NEGATIVE,
        points_redeemed=PointsRule.ZERO,
    ),
    TransactionType.REFUND: TypeRule(
        order_ref=OrderRef.REQUIRED,
        amount=AmountRule.NEGATIVE,
        points_earned=PointsRule.ZERO,
        points_redeemed=PointsRule.ZERO,
        forced=frozenset({"points_earned"}),
    ),
    TransactionType.POINTS_REDEMPTION: TypeRule(
        order_ref=OrderRef.OPTIONAL,
        amount=AmountRule.ZERO,
        points_earned=PointsRule.ZERO,
        points_redeemed=PointsRule.NON_NEGATIVE,
        forced=frozenset({"amount", "points_earned"}),
    ),
    TransactionType.POINTS_ADJUSTMENT: TypeRule(
        order_ref=OrderRef.FORBIDDEN,
        amount=AmountRule.ZERO,
        points_earned=PointsRule.ANY,
        points_redeemed=PointsRule.ZERO,
        forced=frozenset({"amount", "points_redeemed"}),
    ),
}

_ZERO_FOR_FIELD = {"amount": Decimal("0.00"), "points_earned": 0, "points_redeemed": 0}


def points_for_amount(amount: Decimal) -> int:
    """One point per currency unit, rounded half up (12.50 earns 13)."""
    if amount <= 0:
        return 0
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _earned(draft: TransactionDraft) -> int:
    if draft.points_earned is not None:
        return draft.points_earned
    if draft.type == TransactionType.PURCHASE:
        return points_for_amount(draft.amount)
    return 0


def apply_type_rules(draft: TransactionDraft) -> TransactionDraft:
    """Fill in forced and derived fields for the draft's type."""
    rule = TYPE_RULES[draft.type]
    updates = {name: _ZERO_FOR_FIELD[name] for name in rule.forced}
    if "points_earned" not in updates:
        updates["points_earned"] = _earned(draft)
    return draft.model_copy(update=updates)


def change_type(draft: TransactionDraft, new_type: TransactionType) -> TransactionDraft:
    """Re-derive a draft after its type is switched."""
    updates: dict = {"type": new_type}
    if new_type == TransactionType.REFUND:
        updates["amount"] = -abs(draft.amount)
    elif new_type == TransactionType.PURCHASE:
        updates["amount"] = abs(draft.amount)
        updates["points_earned"] = None
    elif new_type == TransactionType.POINTS_ADJUSTMENT:
        updates["order_id"] = None
    return apply_type_rules(draft.model_copy(update=updates))


def validate(draft: TransactionDraft) -> list[FieldError]:
    """Field errors for a draft; an empty list means it can be recorded."""
    errors: list[FieldError] = []
    label = draft.type.value.replace("_", " ")

    if not draft.customer_id:
        errors.append(FieldError(field="customer_id", message="Customer is required"))
    if draft.date is None:
        errors.append(FieldError(field="date", message="Date is required"))

    rule = TYPE_RULES[draft.type]

    if rule.order_ref == OrderRef.REQUIRED and not draft.order_id:
        errors.append(FieldError(field="order_id", message="Order ID is required for purchases and refunds"))
    elif rule.order_ref == OrderRef.FORBIDDEN and draft.order_id:
        errors.append(FieldError(field="order_id", message=f"Order ID is not allowed for {label}s"))

    if rule.amount == AmountRule.POSITIVE and draft.amount <= 0:
        errors.append(FieldError(field="amount", message="Amount must be positive for purchases"))
    elif rule.amount == AmountRule.NEGATIVE and draft.amount >= 0:
        errors.append(FieldError(field="amount", message="Amount must be negative for refunds"))
    elif rule.amount == AmountRule.ZERO and draft.amount != 0:
        errors.append(FieldError(field="amount", message=f"Amount must be zero for {label}s"))

    for name, value, points_rule in (
        ("points_earned", _earned(draft), rule.points_earned),
        ("points_redeemed", draft.points_redeemed, rule.points_redeemed),
    ):
        pretty = name.replace("_", " ").capitalize()
        if points_rule == PointsRule.NON_NEGATIVE and value < 0:
            errors.append(FieldError(field=name, message=f"{pretty} cannot be negative"))
        elif points_rule == PointsRule.ZERO and value != 0:
            errors.append(FieldError(field=name, message=f"{pretty} must be zero for {label}s"))

    return errors


def prepare(draft: TransactionDraft) -> TransactionDraft:
    """Apply the type rules and validate; raises ``ValidationError``."""
    prepared = apply_type_rules(draft)
    errors = validate(prepared)
    if errors:
        raise ValidationError(errors, message=f"Invalid {draft.type.value} transaction")
    return prepared
