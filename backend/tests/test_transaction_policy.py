"""Unit tests for the loyalty transaction type policy."""

import datetime as dt
from decimal import Decimal

import pytest

from beancounter.core.errors import ValidationError
from beancounter.models import TransactionDraft, TransactionType
from beancounter.services import transaction_policy
from beancounter.services.transaction_policy import TYPE_RULES


def _draft(**overrides):
    values = dict(
        customer_id="cust-001",
        date=dt.date(2024, 5, 20),
        type=TransactionType.PURCHASE,
        order_id="ORD-1001",
        amount=Decimal("12.50"),
    )
    values.update(overrides)
    return TransactionDraft(**values)


def _fields(errors):
    return {e.field for e in errors}


# ── Points derivation ────────────────────────────────

@pytest.mark.parametrize(
    "amount, points",
    [("12.50", 13), ("12.49", 12), ("0.50", 1), ("0", 0), ("-8.50", 0)],
)
def test_points_for_amount_rounds_half_up(amount, points):
    assert transaction_policy.points_for_amount(Decimal(amount)) == points


def test_every_type_has_a_rule():
    assert set(TYPE_RULES) == set(TransactionType)


# ── Validation ───────────────────────────────────────

def test_purchase_12_50_with_13_points_is_valid():
    """A purchase of 12.50 earning 13 points is accepted."""
    draft = transaction_policy.prepare(_draft(points_earned=13))
    assert draft.points_earned == 13


def test_purchase_derives_points_when_omitted():
    draft = transaction_policy.prepare(_draft())
    assert draft.points_earned == 13


def test_same_record_as_points_adjustment_is_rejected():
    """Points adjustments may not reference an order."""
    with pytest.raises(ValidationError) as exc_info:
        transaction_policy.prepare(_draft(type=TransactionType.POINTS_ADJUSTMENT, points_earned=13))

    assert "order_id" in _fields(exc_info.value.errors)


@pytest.mark.parametrize("amount", ["0", "-3.00"])
def test_purchase_amount_must_be_positive(amount):
    errors = transaction_policy.validate(_draft(amount=Decimal(amount)))
    assert "amount" in _fields(errors)


@pytest.mark.parametrize("amount", ["0", "4.00"])
def test_refund_amount_must_be_negative(amount):
    draft = transaction_policy.apply_type_rules(_draft(type=TransactionType.REFUND, amount=Decimal(amount)))
    assert "amount" in _fields(transaction_policy.validate(draft))


def test_purchase_and_refund_require_order_reference():
    for type_ in (TransactionType.PURCHASE, TransactionType.REFUND):
        draft = _draft(type=type_, order_id=None, amount=Decimal("-1") if type_ == TransactionType.REFUND else Decimal("1"))
        assert "order_id" in _fields(transaction_policy.validate(transaction_policy.apply_type_rules(draft)))


def test_purchase_cannot_redeem_points():
    errors = transaction_policy.validate(_draft(points_redeemed=5))
    assert "points_redeemed" in _fields(errors)


def test_customer_and_date_are_required():
    errors = transaction_policy.validate(_draft(customer_id="", date=None))
    assert {"customer_id", "date"} <= _fields(errors)


def test_negative_points_adjustment_is_allowed():
    draft = transaction_policy.prepare(
        _draft(type=TransactionType.POINTS_ADJUSTMENT, order_id=None, amount=Decimal("0"), points_earned=-20)
    )
    assert draft.points_earned == -20


# ── Forced fields ────────────────────────────────────

def test_refund_forces_points_earned_to_zero():
    draft = transaction_policy.apply_type_rules(
        _draft(type=TransactionType.REFUND, amount=Decimal("-8.50"), points_earned=9)
    )
    assert draft.points_earned == 0


def test_redemption_forces_amount_and_points_earned():
    draft = transaction_policy.apply_type_rules(
        _draft(type=TransactionType.POINTS_REDEMPTION, amount=Decimal("5.00"), points_earned=5, points_redeemed=50)
    )
    assert draft.amount == 0
    assert draft.points_earned == 0
    assert draft.points_redeemed == 50
    assert transaction_policy.validate(draft) == []


def test_adjustment_forces_points_redeemed_to_zero():
    draft = transaction_policy.apply_type_rules(
        _draft(type=TransactionType.POINTS_ADJUSTMENT, order_id=None, points_earned=10, points_redeemed=4)
    )
    assert draft.points_redeemed == 0
    assert draft.amount == 0


# ── Type switching ───────────────────────────────────

def test_change_purchase_to_refund_negates_amount():
    draft = transaction_policy.change_type(_draft(points_earned=13), TransactionType.REFUND)

    assert draft.type == TransactionType.REFUND
    assert draft.amount == Decimal("-12.50")
    assert draft.points_earned == 0


def test_change_refund_to_purchase_rederives_points():
    refund = _draft(type=TransactionType.REFUND, amount=Decimal("-12.50"))
    draft = transaction_policy.change_type(refund, TransactionType.PURCHASE)

    assert draft.amount == Decimal("12.50")
    assert draft.points_earned == 13


def test_change_to_adjustment_clears_order_reference():
    draft = transaction_policy.change_type(_draft(), TransactionType.POINTS_ADJUSTMENT)

    assert draft.order_id is None
    assert draft.amount == 0
    assert transaction_policy.validate(draft) == []
