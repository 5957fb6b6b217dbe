# tests/test_optimization_domain/test_application/test_optimization_service.py
"""Tests for the Optimization Application Service."""

import pytest

from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import (
    EntityNotFoundError,
    InventoryOptimizationError,
    RouteOptimizationError,
)


def test_optimize_route_records_costed_plan(optimization_service, sample_catalog, ledger) -> None:
    plan = optimization_service.optimize_route(1, transporter_id=1)

    assert plan.retailer_ids == [1, 2, 3]
    assert plan.transporter_id == 1
    assert plan.transport_cost == pytest.approx(plan.total_distance_km * 2.50)
    assert ledger.latest.payload == (
        f"Optimized Route | Supplier: 1 | Retailers: 1,2,3 | Distance: {plan.total_distance_km:.2f}"
        f" | Transporter: 1 | Cost: {plan.transport_cost:.2f}"
    )


def test_optimize_route_without_transporter(optimization_service, sample_catalog, ledger) -> None:
    plan = optimization_service.optimize_route(2)

    assert plan.transport_cost is None
    assert ledger.latest.payload.startswith("Optimized Route | Supplier: 2 | Retailers: ")
    assert "Transporter" not in ledger.latest.payload


def test_optimize_route_without_recording(optimization_service, sample_catalog, ledger) -> None:
    blocks_before = len(ledger)

    optimization_service.optimize_route(1, transporter_id=2, record=False)

    assert len(ledger) == blocks_before


def test_optimize_route_unknown_entities(optimization_service, sample_catalog) -> None:
    with pytest.raises(EntityNotFoundError):
        optimization_service.optimize_route(99)
    with pytest.raises(EntityNotFoundError):
        optimization_service.optimize_route(1, transporter_id=99)


def test_optimize_route_needs_two_retailers(optimization_service, catalog_service, ledger) -> None:
    catalog_service.add_supplier("Depot", "Origin", "HQ", 3.0, 101.0)
    catalog_service.add_retailer("Solo", "Town", 3.1, 101.1, 100.0, 100.0)
    blocks_before = len(ledger)

    with pytest.raises(RouteOptimizationError):
        optimization_service.optimize_route(1)

    assert len(ledger) == blocks_before


def test_optimize_inventory_is_advisory(optimization_service, transaction_service, sample_catalog, ledger) -> None:
    """Planning never moves stock and only writes a block when accepted."""
    transaction_service.run_seasonal_simulation()
    blocks_before = len(ledger)

    plan = optimization_service.optimize_inventory(1)

    assert plan.total_stock == 700
    assert plan.total_demand == 300
    assert [row.historical_demand for row in plan.allocations] == [100, 100, 100]
    assert sample_catalog.find_product(1).stock == 700
    assert len(ledger) == blocks_before

    accepted = optimization_service.optimize_inventory(1, record=True)

    assert ledger.latest.payload == (
        f"Inventory Optimization | Product: 1 | Total Stock: 700 | Optimization Savings: {accepted.savings:.2f}"
    )


def test_optimize_inventory_uses_configured_floor(optimization_service, sample_catalog, mocker) -> None:
    mocker.patch.object(settings, "SAFETY_STOCK_FLOOR", 400)

    plan = optimization_service.optimize_inventory(3)

    assert plan.rescaled is True
    assert plan.total_allocated <= 600


def test_optimize_inventory_errors(optimization_service, entity_store, sample_catalog) -> None:
    with pytest.raises(EntityNotFoundError):
        optimization_service.optimize_inventory(99)

    entity_store.clear()
    with pytest.raises(InventoryOptimizationError):
        optimization_service.optimize_inventory(1)
