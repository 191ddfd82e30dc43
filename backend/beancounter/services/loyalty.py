"""Loyalty ledger: customer transactions and the points balance they imply.

A customer's ``points`` always equals the sum over that customer's recorded
transactions of ``points_earned - points_redeemed``. The balance is only
touched here, as a side effect of recording, editing or deleting a
transaction. Any change that would leave the balance negative is rejected
with ``InsufficientPoints`` before anything is written.

Lifecycle: a ``TransactionDraft`` becomes a recorded ``CustomerTransaction``;
deleting it removes it from the store for good.
"""

import logging
from decimal import Decimal

from beancounter.core.errors import FieldError, InsufficientPoints, NotFoundError, ValidationError
from beancounter.db.store import Store
from beancounter.models import Customer, CustomerTransaction, TransactionDraft
from beancounter.models.mixins import new_id
from beancounter.services import transaction_policy

logger = logging.getLogger(__name__)


def recompute_points_from_history(customer: Customer, transactions: list[CustomerTransaction]) -> int:
    """Balance implied by ``transactions`` for ``customer``."""
    return sum(t.points_delta for t in transactions if t.customer_id == customer.id)


def recompute_spent_from_history(customer: Customer, transactions: list[CustomerTransaction]) -> Decimal:
    return sum((t.amount for t in transactions if t.customer_id == customer.id), Decimal("0.00"))


class LoyaltyLedger:
    def __init__(self, store: Store):
        self.store = store

    def _customer(self, customer_id: str) -> Customer:
        customer = self.store.customers.get(customer_id)
        if customer is None:
            raise NotFoundError(f"Customer not found: {customer_id}")
        return customer

    def _check_balance(self, customer: Customer, delta: int) -> None:
        if customer.points + delta < 0:
            raise InsufficientPoints(customer.id, customer.points, delta)

    def record_transaction(self, customer: Customer, draft: TransactionDraft) -> CustomerTransaction:
        if draft.customer_id and draft.customer_id != customer.id:
            raise ValidationError(
                [FieldError(field="customer_id", message="Transaction belongs to a different customer")]
            )
        prepared = transaction_policy.prepare(draft.model_copy(update={"customer_id": customer.id}))

        with self.store.customer_lock(customer.id):
            transaction = CustomerTransaction(id=new_id("trans"), **prepared.model_dump())
            self._check_balance(customer, transaction.points_delta)

            self.store.transactions[transaction.id] = transaction
            customer.points += transaction.points_delta
            customer.total_spent += transaction.amount

        logger.info(
            "Recorded %s %s for customer %s: points %+d -> %d",
            transaction.type.value, transaction.id, customer.id, transaction.points_delta, customer.points,
        )
        return transaction

    def edit_transaction(self, transaction_id: str, draft: TransactionDraft) -> CustomerTransaction:
        """Replace a recorded transaction, reversing its old effect first."""
        current = self.get_transaction(transaction_id)
        if draft.customer_id and draft.customer_id != current.customer_id:
            raise ValidationError(
                [FieldError(field="customer_id", message="Customer of a recorded transaction cannot change")]
            )
        prepared = transaction_policy.prepare(draft.model_copy(update={"customer_id": current.customer_id}))
        customer = self._customer(current.customer_id)

        with self.store.customer_lock(customer.id):
            updated = CustomerTransaction(id=current.id, **prepared.model_dump())
            net = updated.points_delta - current.points_delta
            self._check_balance(customer, net)

            self.store.transactions[current.id] = updated
            customer.points += net
            customer.total_spent += updated.amount - current.amount

        logger.info("Edited transaction %s for customer %s: points %+d -> %d", current.id, customer.id, net, customer.points)
        return updated

    def delete_transaction(self, transaction_id: str) -> CustomerTransaction:
        """Remove a transaction and reverse its point effect."""
        transaction = self.get_transaction(transaction_id)
        customer = self._customer(transaction.customer_id)

        with self.store.customer_lock(customer.id):
            self._check_balance(customer, -transaction.points_delta)
            del self.store.transactions[transaction.id]
            customer.points -= transaction.points_delta
            customer.total_spent -= transaction.amount

        logger.info("Deleted transaction %s for customer %s: balance now %d", transaction.id, customer.id, customer.points)
        return transaction

    def get_transaction(self, transaction_id: str) -> CustomerTransaction:
        transaction = self.store.transactions.get(transaction_id)
        if transaction is None:
            raise NotFoundError(f"Transaction not found: {transaction_id}")
        return transaction

    def reconcile(self, customer: Customer) -> int:
        """Rewrite a customer's balance and spend from history; returns the drift."""
        with self.store.customer_lock(customer.id):
            history = self.store.transactions_for(customer.id)
            points = recompute_points_from_history(customer, history)
            drift = customer.points - points
            if drift:
                logger.warning(
                    "Points drift for customer %s: stored %d, history %d", customer.id, customer.points, points
                )
            if points < 0:
                raise InsufficientPoints(customer.id, 0, points)
            customer.points = points
            customer.total_spent = recompute_spent_from_history(customer, history)
        return drift
