"""Main application entry point for the agro distribution ledger batch run."""

import logging
import time
from dataclasses import dataclass

import schedule

from src.catalog_domain.application.catalog_service import CatalogApplicationService
from src.catalog_domain.domain.entity_store import EntityStore
from src.catalog_domain.infrastructure.persistence.flat_file_catalog_repository import FlatFileCatalogRepository
from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import (
    ApplicationError,
    EntityNotFoundError,
    LedgerIntegrityError,
    PersistenceError,
    PreconditionError,
)
from src.common.logger_config import setup_logging
from src.ledger_domain.application.ledger_service import LedgerApplicationService
from src.ledger_domain.domain.entities.ledger import Ledger
from src.ledger_domain.infrastructure.persistence.flat_file_ledger_repository import FlatFileLedgerRepository
from src.optimization_domain.application.optimization_service import OptimizationApplicationService
from src.transaction_domain.application.transaction_service import TransactionApplicationService
from src.transaction_domain.domain.services.policy_engine import PolicyEngine

logger = logging.getLogger(__name__)

ADVISORY_SUPPLIER_ID = 1
ADVISORY_TRANSPORTER_ID = 1
ADVISORY_PRODUCT_ID = 1


@dataclass
class Services:
    catalog: CatalogApplicationService
    transactions: TransactionApplicationService
    optimization: OptimizationApplicationService
    ledger: LedgerApplicationService


def setup_dependencies() -> Services:
    """Initializes and wires up application dependencies around one store and one ledger."""
    store = EntityStore()
    ledger = Ledger()

    catalog_repository = FlatFileCatalogRepository()
    ledger_repository = FlatFileLedgerRepository()

    return Services(
        catalog=CatalogApplicationService(store=store, ledger=ledger, catalog_repo=catalog_repository),
        transactions=TransactionApplicationService(store=store, ledger=ledger, policy_engine=PolicyEngine.default()),
        optimization=OptimizationApplicationService(store=store, ledger=ledger),
        ledger=LedgerApplicationService(ledger=ledger, ledger_repo=ledger_repository),
    )


def load_or_seed(services: Services) -> None:
    """Restores the saved chain and catalog, seeding the demo catalog on first run."""
    services.ledger.restore()
    if not services.catalog.load_catalog():
        logger.info("Seeding sample catalog")
        services.catalog.load_sample_data()


def log_distribution_report(services: Services) -> None:
    report = services.transactions.generate_distribution_report()
    logger.info("--- Distribution Report ---")
    logger.info(f"Completed transactions: {report.completed}")
    logger.info(f"Failed transactions: {report.failed}")
    logger.info(f"Total revenue: RM{report.total_revenue:.2f}")
    for product_name, units in report.units_by_product.items():
        logger.info(f"  {product_name}: {units} units")


def log_advisories(services: Services) -> None:
    """Route and inventory plans are advisory. Neither is applied to the store."""
    try:
        route = services.optimization.optimize_route(ADVISORY_SUPPLIER_ID, ADVISORY_TRANSPORTER_ID)
        logger.info(
            f"Suggested route for supplier {route.supplier_id}: {route.retailer_ids}, "
            f"{route.total_distance_km:.2f} km, RM{route.transport_cost:.2f}"
        )

        plan = services.optimization.optimize_inventory(ADVISORY_PRODUCT_ID)
        for row in plan.allocations:
            logger.info(
                f"  {row.retailer_name} (ID: {row.retailer_id}): demand {row.historical_demand}, "
                f"allocate {row.allocation}"
            )
        logger.info(
            f"Holding cost RM{plan.baseline_holding_cost:.2f} -> RM{plan.optimized_holding_cost:.2f} "
            f"(savings RM{plan.savings:.2f})"
        )
    except (EntityNotFoundError, PreconditionError) as e:
        logger.warning(f"Advisory skipped: {e}")


def run_ledger_audit(services: Services) -> None:
    """Audits chain linkage and saves everything. Scheduled when AUDIT_INTERVAL_MINUTES is set."""
    try:
        services.ledger.audit()
    except LedgerIntegrityError as e:
        logger.error(f"{e}")
        raise
    services.ledger.persist()
    services.catalog.save_catalog()
    summary = services.ledger.chain_summary()
    logger.info(f"Ledger holds {summary['block_count']} blocks, latest #{summary['latest_block']}")


def run_distribution_cycle(services: Services) -> None:
    """Main process: load or seed, simulate seasonal demand, report, advise, audit and save."""
    try:
        load_or_seed(services)

        outcomes = services.transactions.run_seasonal_simulation()
        for outcome in outcomes:
            if not outcome.succeeded:
                logger.warning(f"Transaction {outcome.transaction_id} failed: {outcome.reason}")

        log_distribution_report(services)
        log_advisories(services)
        run_ledger_audit(services)

    except (LedgerIntegrityError, PersistenceError) as e:
        logger.error(f"An error occurred during the distribution cycle: {e}")
        raise
    except ApplicationError as e:
        logger.error(f"An unexpected application error occurred: {e}")
        raise


if __name__ == "__main__":
    setup_logging(log_file=settings.LOG_FILE)
    logger.info("Starting agro distribution ledger batch run...")

    services = setup_dependencies()
    run_distribution_cycle(services)

    if settings.AUDIT_INTERVAL_MINUTES > 0:
        logger.info(f"Scheduling ledger audit every {settings.AUDIT_INTERVAL_MINUTES} minutes")
        schedule.every(settings.AUDIT_INTERVAL_MINUTES).minutes.do(run_ledger_audit, services)
        while True:
            schedule.run_pending()
            time.sleep(1)

    logger.info("Agro distribution ledger batch run completed.")
