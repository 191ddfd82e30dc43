"""Unit tests for the loyalty ledger."""

import datetime as dt
import logging
from decimal import Decimal

import pytest

from beancounter.core.errors import InsufficientPoints, NotFoundError, ValidationError
from beancounter.db.store import Store
from beancounter.models import Customer, TransactionDraft, TransactionType
from beancounter.services.loyalty import LoyaltyLedger, recompute_points_from_history


def _purchase(amount="12.50", **overrides):
    values = dict(date=dt.date(2024, 5, 20), type=TransactionType.PURCHASE, order_id="ORD-2001", amount=Decimal(amount))
    values.update(overrides)
    return TransactionDraft(**values)


def _redemption(points):
    return TransactionDraft(date=dt.date(2024, 5, 21), type=TransactionType.POINTS_REDEMPTION, points_redeemed=points)


def _assert_balance_matches_history(store, customer):
    assert customer.points == recompute_points_from_history(customer, store.transactions_for(customer.id))


@pytest.fixture
def empty_store():
    return Store()


@pytest.fixture
def customer(empty_store):
    """Customer with a 100 point balance carried over from a manual adjustment."""
    customer = Customer(id="cust-100", first_name="Maya", last_name="Patel")
    empty_store.customers[customer.id] = customer
    LoyaltyLedger(empty_store).record_transaction(
        customer,
        TransactionDraft(date=dt.date(2024, 5, 1), type=TransactionType.POINTS_ADJUSTMENT, points_earned=100),
    )
    return customer


# ── Record / delete ──────────────────────────────────

def test_purchase_then_delete_restores_balance(empty_store, customer):
    """Balance 100, purchase earning 13 points -> 113; deleting it -> 100."""
    ledger = LoyaltyLedger(empty_store)
    assert customer.points == 100

    transaction = ledger.record_transaction(customer, _purchase())
    assert transaction.points_earned == 13
    assert customer.points == 113
    assert customer.total_spent == Decimal("12.50")

    ledger.delete_transaction(transaction.id)
    assert customer.points == 100
    assert customer.total_spent == Decimal("0")


def test_redemption_beyond_balance_is_rejected_without_side_effects(empty_store, customer):
    ledger = LoyaltyLedger(empty_store)
    before = dict(empty_store.transactions)

    with pytest.raises(InsufficientPoints):
        ledger.record_transaction(customer, _redemption(150))

    assert customer.points == 100
    assert empty_store.transactions == before


def test_deleting_spent_purchase_is_rejected(empty_store):
    """Reversing points that were already redeemed would go negative."""
    customer = Customer(id="cust-200", first_name="Leo", last_name="Kim")
    empty_store.customers[customer.id] = customer
    ledger = LoyaltyLedger(empty_store)

    purchase = ledger.record_transaction(customer, _purchase())
    ledger.record_transaction(customer, _redemption(10))
    assert customer.points == 3

    with pytest.raises(InsufficientPoints):
        ledger.delete_transaction(purchase.id)
    assert customer.points == 3
    assert purchase.id in empty_store.transactions


def test_delete_twice_reports_not_found(empty_store, customer):
    ledger = LoyaltyLedger(empty_store)
    transaction = ledger.record_transaction(customer, _purchase())
    ledger.delete_transaction(transaction.id)

    with pytest.raises(NotFoundError):
        ledger.delete_transaction(transaction.id)


def test_invalid_draft_is_not_recorded(empty_store, customer):
    ledger = LoyaltyLedger(empty_store)
    count = len(empty_store.transactions)

    with pytest.raises(ValidationError):
        ledger.record_transaction(customer, _purchase(amount="0"))

    assert len(empty_store.transactions) == count
    assert customer.points == 100


def test_draft_for_another_customer_is_rejected(empty_store, customer):
    with pytest.raises(ValidationError):
        LoyaltyLedger(empty_store).record_transaction(customer, _purchase(customer_id="cust-other"))


# ── Edit ─────────────────────────────────────────────

def test_edit_reverses_old_effect_before_applying_new(empty_store, customer):
    ledger = LoyaltyLedger(empty_store)
    transaction = ledger.record_transaction(customer, _purchase())

    edited = ledger.edit_transaction(transaction.id, _purchase(amount="20.00"))

    assert edited.id == transaction.id
    assert edited.points_earned == 20
    assert customer.points == 120
    assert customer.total_spent == Decimal("20.00")
    _assert_balance_matches_history(empty_store, customer)


def test_edit_cannot_move_transaction_to_another_customer(empty_store, customer):
    ledger = LoyaltyLedger(empty_store)
    transaction = ledger.record_transaction(customer, _purchase())

    with pytest.raises(ValidationError):
        ledger.edit_transaction(transaction.id, _purchase(customer_id="cust-001"))


def test_edit_that_would_go_negative_is_rejected(empty_store, customer):
    ledger = LoyaltyLedger(empty_store)
    redemption = ledger.record_transaction(customer, _redemption(40))

    with pytest.raises(InsufficientPoints):
        ledger.edit_transaction(redemption.id, _redemption(200))

    assert customer.points == 60
    assert empty_store.transactions[redemption.id].points_redeemed == 40


# ── History ──────────────────────────────────────────

def test_balance_follows_history_through_mixed_sequence(store):
    """Fixture customers keep points == sum(history) across records and deletes."""
    ledger = LoyaltyLedger(store)
    customer = store.customers["cust-002"]
    _assert_balance_matches_history(store, customer)

    first = ledger.record_transaction(customer, _purchase("7.25"))
    _assert_balance_matches_history(store, customer)
    ledger.record_transaction(customer, _redemption(20))
    _assert_balance_matches_history(store, customer)
    ledger.delete_transaction("trans-004")
    _assert_balance_matches_history(store, customer)
    ledger.delete_transaction(first.id)
    _assert_balance_matches_history(store, customer)


def test_reconcile_repairs_drift_and_logs_it(store, caplog):
    customer = store.customers["cust-001"]
    customer.points = 999

    with caplog.at_level(logging.WARNING, logger="beancounter.services.loyalty"):
        drift = LoyaltyLedger(store).reconcile(customer)

    assert drift == 957
    assert customer.points == 42
    assert "Points drift for customer cust-001" in caplog.text
