# tests/conftest.py
import itertools
from unittest.mock import Mock

import pytest

from src.catalog_domain.application.catalog_service import CatalogApplicationService
from src.catalog_domain.domain.entity_store import EntityStore
from src.catalog_domain.domain.repositories.catalog_repository import ICatalogRepository
from src.common.config.settings import settings
from src.ledger_domain.application.ledger_service import LedgerApplicationService
from src.ledger_domain.domain.entities.ledger import Ledger
from src.ledger_domain.domain.repositories.ledger_repository import ILedgerRepository
from src.optimization_domain.application.optimization_service import OptimizationApplicationService
from src.transaction_domain.application.transaction_service import TransactionApplicationService
from src.transaction_domain.domain.services.policy_engine import PolicyEngine

FIXED_TIMESTAMP = "20261018:10:00"


@pytest.fixture(autouse=True)
def mock_settings(mocker, tmp_path) -> None:
    """Pins every tunable in settings so tests don't depend on the local .env."""
    mocker.patch.object(settings, "DATA_DIR", str(tmp_path / "data"))
    mocker.patch.object(settings, "PRICE_THRESHOLD", 4000.0)
    mocker.patch.object(settings, "SAFETY_STOCK_FLOOR", 10)
    mocker.patch.object(settings, "HOLDING_COST_RATE", 0.2)
    mocker.patch.object(settings, "LEDGER_TOKEN_LENGTH", 10)
    mocker.patch.object(settings, "TIMEZONE", "")
    mocker.patch.object(settings, "AUDIT_INTERVAL_MINUTES", 0)


@pytest.fixture
def token_factory():
    """Deterministic, unique block tokens: tok0001, tok0002, ..."""
    counter = itertools.count(1)
    return lambda: f"tok{next(counter):04d}"


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def ledger(token_factory, fixed_clock) -> Ledger:
    """Fresh ledger holding only its genesis block."""
    return Ledger(token_factory=token_factory, clock=fixed_clock)


@pytest.fixture
def entity_store() -> EntityStore:
    return EntityStore()


@pytest.fixture
def mock_catalog_repository() -> Mock:
    """Mock for the catalog repository interface."""
    return Mock(spec=ICatalogRepository)


@pytest.fixture
def mock_ledger_repository() -> Mock:
    """Mock for the ledger repository interface."""
    return Mock(spec=ILedgerRepository)


@pytest.fixture
def catalog_service(entity_store, ledger, mock_catalog_repository) -> CatalogApplicationService:
    """CatalogApplicationService over an empty store with a mocked repository."""
    return CatalogApplicationService(store=entity_store, ledger=ledger, catalog_repo=mock_catalog_repository)


@pytest.fixture
def sample_catalog(catalog_service) -> EntityStore:
    """Store seeded with the demo catalog: 3 products, 2 suppliers, 3 retailers, 2 transporters."""
    catalog_service.load_sample_data()
    return catalog_service.store


@pytest.fixture
def transaction_service(entity_store, ledger) -> TransactionApplicationService:
    """Pipeline with the default price-threshold policy."""
    return TransactionApplicationService(store=entity_store, ledger=ledger, policy_engine=PolicyEngine.default())


@pytest.fixture
def optimization_service(entity_store, ledger) -> OptimizationApplicationService:
    return OptimizationApplicationService(store=entity_store, ledger=ledger)


@pytest.fixture
def ledger_service(ledger, mock_ledger_repository) -> LedgerApplicationService:
    """LedgerApplicationService with a mocked repository."""
    return LedgerApplicationService(ledger=ledger, ledger_repo=mock_ledger_repository)
