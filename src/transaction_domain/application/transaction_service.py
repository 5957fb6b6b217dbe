# src/transaction_domain/application/transaction_service.py
"""Application service for the transaction validation-and-commit pipeline."""

import logging
from dataclasses import replace
from typing import Optional, TypeVar

from src.catalog_domain.domain.entity_store import EntityStore
from src.common.dtos.report_dtos import DistributionReportDTO
from src.common.dtos.transaction_dtos import TransactionOutcomeDTO
from src.common.exceptions.custom_exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidQuantityError,
    PreconditionError,
    ProductNotSuppliedError,
    ValidationError,
)
from src.common.utils.date_utils import current_timestamp
from src.common.utils.geo_utils import planar_distance_km
from src.ledger_domain.domain.entities.ledger import Ledger
from src.transaction_domain.domain.entities.transaction import OrderType, Transaction, TransactionStatus
from src.transaction_domain.domain.services.policy_engine import PolicyEngine

logger = logging.getLogger(__name__)

T = TypeVar("T")

FAILED_POLICY_PREFIX = "Failed Transaction"
FAILED_CREDIT_PREFIX = "Failed Transaction (Credit)"
COMPLETED_PREFIX = "Completed Transaction"

# (supplier_id, product_id, transporter_id, quantity) per retailer in a seasonal run
SEASONAL_ORDERS = (
    (1, 1, 1, 100),  # High-demand product
    (2, 2, 2, 50),  # Normal-demand product
)


def _require(entity: Optional[T], entity_kind: str, entity_id: int) -> T:
    if entity is None:
        raise EntityNotFoundError(entity_kind, entity_id)
    return entity


class TransactionApplicationService:
    """Runs the commit pipeline against the entity store and records every outcome in the ledger."""

    def __init__(self, store: EntityStore, ledger: Ledger, policy_engine: PolicyEngine) -> None:
        self.store = store
        self.ledger = ledger
        self.policy_engine = policy_engine

    def create_transaction(
        self,
        supplier_id: int,
        retailer_id: int,
        product_id: int,
        transporter_id: int,
        quantity: int,
        order_type: OrderType | str = OrderType.REGULAR,
    ) -> TransactionOutcomeDTO:
        """
        Validates, costs and commits one order.

        Unknown ids, a supplier that doesn't carry the product, insufficient stock
        and non-positive quantities raise before a Transaction exists: nothing is
        stored, no id is consumed, no block is written.

        Once the Transaction is built its id is consumed, and policy or credit
        rejections come back as Failed outcomes that are stored and recorded.
        """
        try:
            order_type = OrderType(order_type)
        except ValueError as e:
            raise ValidationError(f"Unknown order type {order_type!r}", original_exception=e)
        if quantity <= 0:
            raise InvalidQuantityError(quantity)

        supplier = _require(self.store.find_supplier(supplier_id), "Supplier", supplier_id)
        retailer = _require(self.store.find_retailer(retailer_id), "Retailer", retailer_id)
        product = _require(self.store.find_product(product_id), "Product", product_id)
        transporter = _require(self.store.find_transporter(transporter_id), "Transporter", transporter_id)

        if not supplier.supplies(product_id):
            raise ProductNotSuppliedError(supplier_id, product_id)
        if not product.has_enough_stock(quantity):
            raise InsufficientStockError(product_id, quantity, product.stock)

        product_cost = product.price * quantity
        distance_km = planar_distance_km(supplier.latitude, supplier.longitude, retailer.latitude, retailer.longitude)
        transport_cost = transporter.calculate_transport_cost(distance_km)

        transaction = Transaction(
            id=self.store.next_transaction_id(),
            supplier_id=supplier_id,
            retailer_id=retailer_id,
            product_id=product_id,
            transporter_id=transporter_id,
            quantity=quantity,
            product_cost=product_cost,
            transport_cost=transport_cost,
            total_cost=product_cost + transport_cost,
            timestamp=current_timestamp(),
            order_type=order_type,
        )

        decision = self.policy_engine.evaluate(transaction)
        if not decision.approved:
            logger.warning(f"Transaction {transaction.id} failed validation: {decision.reason}")
            return self._record_failure(transaction, FAILED_POLICY_PREFIX, decision.reason)

        if not retailer.has_enough_credit(transaction.total_cost):
            logger.warning(f"Transaction {transaction.id} failed: Insufficient retailer credit")
            return self._record_failure(transaction, FAILED_CREDIT_PREFIX, "Insufficient retailer credit")

        # Build both updated entities before storing either, so they land together
        charged_retailer = retailer.deduct_credit(transaction.total_cost)
        depleted_product = product.with_stock_delta(-quantity)
        self.store.save_retailer(charged_retailer)
        self.store.save_product(depleted_product)

        completed = replace(transaction, status=TransactionStatus.COMPLETED)
        self.store.add_transaction(completed)
        self.ledger.append(f"{COMPLETED_PREFIX} | {completed.block_data()}")

        logger.info(f"Transaction {completed.id} completed: RM{completed.total_cost:.2f}")
        return TransactionOutcomeDTO(
            transaction_id=completed.id, status=completed.status, transaction=completed
        )

    def _record_failure(self, transaction: Transaction, prefix: str, reason: str) -> TransactionOutcomeDTO:
        failed = replace(transaction, status=TransactionStatus.FAILED)
        self.store.add_transaction(failed)
        self.ledger.append(f"{prefix} | {failed.block_data()}")
        return TransactionOutcomeDTO(transaction_id=failed.id, status=failed.status, transaction=failed, reason=reason)

    def list_transactions(self) -> list[Transaction]:
        return self.store.list_transactions()

    def run_seasonal_simulation(self) -> list[TransactionOutcomeDTO]:
        """Places the seasonal order pair for every retailer. A rejected call doesn't stop the run."""
        logger.info("Running seasonal simulation...")
        outcomes: list[TransactionOutcomeDTO] = []

        for retailer in self.store.list_retailers():
            for supplier_id, product_id, transporter_id, quantity in SEASONAL_ORDERS:
                logger.info(f"Creating seasonal transaction for {retailer.name}: product {product_id} x{quantity}")
                try:
                    outcome = self.create_transaction(
                        supplier_id, retailer.id, product_id, transporter_id, quantity, OrderType.SEASONAL
                    )
                except (EntityNotFoundError, PreconditionError) as e:
                    logger.warning(f"Seasonal transaction for {retailer.name} not created: {e}")
                    continue
                outcomes.append(outcome)

        logger.info(f"Seasonal simulation complete: {len(outcomes)} transactions recorded")
        return outcomes

    def generate_distribution_report(self) -> DistributionReportDTO:
        report = DistributionReportDTO()

        for transaction in self.store.list_transactions():
            if transaction.status == TransactionStatus.COMPLETED:
                report.completed += 1
                report.total_revenue += transaction.total_cost
                product = self.store.find_product(transaction.product_id)
                product_name = product.name if product else f"Product {transaction.product_id}"
                report.units_by_product[product_name] = (
                    report.units_by_product.get(product_name, 0) + transaction.quantity
                )
            elif transaction.status == TransactionStatus.FAILED:
                report.failed += 1

        return report
