# src/optimization_domain/application/optimization_service.py
"""Application service for route and inventory advisories."""

import logging
from typing import Optional

from src.catalog_domain.domain.entity_store import EntityStore
from src.common.config.settings import settings
from src.common.dtos.report_dtos import AllocationPlanDTO, RoutePlanDTO
from src.common.exceptions.custom_exceptions import EntityNotFoundError, InventoryOptimizationError
from src.common.utils.flat_file_utils import format_id_list
from src.ledger_domain.domain.entities.ledger import Ledger
from src.optimization_domain.domain.services.inventory_allocator import allocate_inventory
from src.optimization_domain.domain.services.route_optimizer import plan_nearest_neighbor_route

logger = logging.getLogger(__name__)


class OptimizationApplicationService:
    """Runs the planners over the current store. Plans never change stock, credit or routes on their own."""

    def __init__(self, store: EntityStore, ledger: Ledger) -> None:
        self.store = store
        self.ledger = ledger

    def optimize_route(
        self, supplier_id: int, transporter_id: Optional[int] = None, record: bool = True
    ) -> RoutePlanDTO:
        """
        Plans a delivery loop from the supplier through every retailer.

        With a transporter the plan is costed, and with `record` the plan is
        appended to the ledger.
        """
        supplier = self.store.find_supplier(supplier_id)
        if supplier is None:
            raise EntityNotFoundError("Supplier", supplier_id)
        transporter = None
        if transporter_id is not None:
            transporter = self.store.find_transporter(transporter_id)
            if transporter is None:
                raise EntityNotFoundError("Transporter", transporter_id)

        plan = plan_nearest_neighbor_route(supplier, self.store.list_retailers())
        if transporter is not None:
            plan.transporter_id = transporter.id
            plan.transport_cost = transporter.calculate_transport_cost(plan.total_distance_km)

        logger.info(
            f"Route for supplier {supplier.name}: {plan.retailer_ids} ({plan.total_distance_km:.2f} km)"
        )

        if record:
            payload = (
                f"Optimized Route | Supplier: {supplier.id}"
                f" | Retailers: {format_id_list(plan.retailer_ids)}"
                f" | Distance: {plan.total_distance_km:.2f}"
            )
            if transporter is not None:
                payload += f" | Transporter: {transporter.id} | Cost: {plan.transport_cost:.2f}"
            self.ledger.append(payload)

        return plan

    def optimize_inventory(self, product_id: int, record: bool = False) -> AllocationPlanDTO:
        """
        Builds an allocation plan for one product. `record` stands for the
        operator accepting the plan: only then is it written to the ledger.
        """
        if not self.store.products:
            raise InventoryOptimizationError("Need products and retailers to optimize inventory")
        product = self.store.find_product(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)

        plan = allocate_inventory(
            product,
            self.store.list_retailers(),
            self.store.list_transactions(),
            safety_stock_floor=settings.SAFETY_STOCK_FLOOR,
            holding_cost_rate=settings.HOLDING_COST_RATE,
        )

        logger.info(
            f"Inventory plan for {product.name}: {plan.total_allocated}/{plan.total_stock} units allocated, "
            f"potential savings RM{plan.savings:.2f}"
        )

        if record:
            self.ledger.append(
                f"Inventory Optimization | Product: {product.id}"
                f" | Total Stock: {plan.total_stock}"
                f" | Optimization Savings: {plan.savings:.2f}"
            )

        return plan
