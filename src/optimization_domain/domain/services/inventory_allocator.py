# src/optimization_domain/domain/services/inventory_allocator.py
"""Demand-proportional stock allocation across retailers, with a holding-cost comparison."""

import logging
from collections import defaultdict
from typing import Iterable, Sequence

from src.catalog_domain.domain.entities.product import Product
from src.catalog_domain.domain.entities.retailer import Retailer
from src.common.dtos.report_dtos import AllocationPlanDTO, RetailerAllocationDTO
from src.common.exceptions.custom_exceptions import InventoryOptimizationError
from src.transaction_domain.domain.entities.transaction import Transaction, TransactionStatus

logger = logging.getLogger(__name__)


def historical_demand(product_id: int, transactions: Iterable[Transaction]) -> dict[int, int]:
    """Units of the product per retailer over Completed transactions."""
    demand: dict[int, int] = defaultdict(int)
    for transaction in transactions:
        if transaction.product_id == product_id and transaction.status == TransactionStatus.COMPLETED:
            demand[transaction.retailer_id] += transaction.quantity
    return dict(demand)


def allocate_inventory(
    product: Product,
    retailers: Sequence[Retailer],
    transactions: Iterable[Transaction],
    safety_stock_floor: int = 10,
    holding_cost_rate: float = 0.2,
) -> AllocationPlanDTO:
    """
    Splits the product's current stock in proportion to each retailer's past
    demand (evenly when there is none), lifts every share to the safety floor,
    then scales all shares down when the floored total exceeds the stock.

    The scale-down runs after the floor, so a retailer can end below it.
    Advisory only: nothing is mutated.
    """
    if not retailers:
        raise InventoryOptimizationError("Need products and retailers to optimize inventory")

    demand = historical_demand(product.id, transactions)
    total_stock = product.stock
    total_demand = sum(demand.get(retailer.id, 0) for retailer in retailers)

    allocations: dict[int, int] = {}
    for retailer in retailers:
        if total_demand > 0:
            share = int(total_stock * (demand.get(retailer.id, 0) / total_demand))
        else:
            share = total_stock // len(retailers)
        allocations[retailer.id] = max(share, safety_stock_floor)

    allocated = sum(allocations.values())
    rescaled = allocated > total_stock
    if rescaled:
        factor = total_stock / allocated
        logger.info(f"Allocation for product {product.id} exceeds stock ({allocated} > {total_stock}), rescaling")
        allocations = {retailer_id: int(units * factor) for retailer_id, units in allocations.items()}

    unit_holding_cost = product.price * holding_cost_rate
    baseline_holding_cost = (total_stock // len(retailers)) * len(retailers) * unit_holding_cost
    optimized_holding_cost = sum(allocations.values()) * unit_holding_cost

    return AllocationPlanDTO(
        product_id=product.id,
        total_stock=total_stock,
        total_demand=total_demand,
        allocations=[
            RetailerAllocationDTO(
                retailer_id=retailer.id,
                retailer_name=retailer.name,
                historical_demand=demand.get(retailer.id, 0),
                allocation=allocations[retailer.id],
            )
            for retailer in retailers
        ],
        rescaled=rescaled,
        baseline_holding_cost=baseline_holding_cost,
        optimized_holding_cost=optimized_holding_cost,
        savings=baseline_holding_cost - optimized_holding_cost,
    )
