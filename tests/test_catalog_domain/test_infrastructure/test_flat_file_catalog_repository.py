# tests/test_catalog_domain/test_infrastructure/test_flat_file_catalog_repository.py
"""Tests for the flat-file catalog repository."""

import pytest

from src.catalog_domain.domain.entity_store import EntityStore
from src.catalog_domain.infrastructure.persistence.flat_file_catalog_repository import (
    NEXT_IDS_FILE,
    PRODUCTS_FILE,
    SUPPLIERS_FILE,
    TRANSACTIONS_FILE,
    FlatFileCatalogRepository,
)
from src.transaction_domain.domain.entities.transaction import (
    OrderType,
    Transaction,
    TransactionStatus,
)


@pytest.fixture
def catalog_repository(tmp_path) -> FlatFileCatalogRepository:
    return FlatFileCatalogRepository(data_dir=str(tmp_path))


@pytest.fixture
def populated_store(sample_catalog) -> EntityStore:
    """Sample catalog plus one completed transaction."""
    transaction_id = sample_catalog.next_transaction_id()
    sample_catalog.add_transaction(
        Transaction(
            id=transaction_id,
            supplier_id=1,
            retailer_id=1,
            product_id=1,
            transporter_id=1,
            quantity=100,
            product_cost=550.0,
            transport_cost=6.205,
            total_cost=556.205,
            timestamp="20261018:10:00",
            status=TransactionStatus.COMPLETED,
            order_type=OrderType.SEASONAL,
        )
    )
    return sample_catalog


def test_has_saved_data(catalog_repository, populated_store) -> None:
    assert catalog_repository.has_saved_data() is False
    catalog_repository.save_store(populated_store)
    assert catalog_repository.has_saved_data() is True


def test_save_and_load_store(catalog_repository, populated_store) -> None:
    """Everything saved, including id counters, comes back into a fresh store."""
    catalog_repository.save_store(populated_store)

    restored = EntityStore()
    catalog_repository.load_store(restored)

    assert restored.list_products() == populated_store.list_products()
    assert restored.list_suppliers() == populated_store.list_suppliers()
    assert restored.list_retailers() == populated_store.list_retailers()
    assert restored.list_transporters() == populated_store.list_transporters()
    assert restored.list_transactions() == populated_store.list_transactions()
    assert restored.next_ids() == populated_store.next_ids()


def test_file_formats(catalog_repository, populated_store, tmp_path) -> None:
    catalog_repository.save_store(populated_store)

    products = (tmp_path / PRODUCTS_FILE).read_text(encoding="utf-8").splitlines()
    suppliers = (tmp_path / SUPPLIERS_FILE).read_text(encoding="utf-8").splitlines()
    transactions = (tmp_path / TRANSACTIONS_FILE).read_text(encoding="utf-8").splitlines()
    next_ids = (tmp_path / NEXT_IDS_FILE).read_text(encoding="utf-8").splitlines()

    assert products[0] == "1|Rice|5.5|1000"
    assert suppliers[0].endswith("|3.168|101.708|1,2")
    assert transactions == ["1|1|1|1|1|100|550.0|6.205|556.205|20261018:10:00|Completed|Seasonal"]
    assert next_ids == ["4", "3", "4", "3", "2"]


def test_load_skips_malformed_lines(catalog_repository, tmp_path) -> None:
    """A bad record is skipped without losing the rest of the file."""
    (tmp_path / PRODUCTS_FILE).write_text(
        "1|Rice|5.5|1000\n2|Vegetables|not-a-price|800\n3|Fruits|4.75|600\n", encoding="utf-8"
    )

    store = EntityStore()
    catalog_repository.load_store(store)

    assert [p.name for p in store.list_products()] == ["Rice", "Fruits"]
    assert store.add_product("Grain", 2.0, 10).id == 4


def test_load_ignores_bad_next_id_values(catalog_repository, tmp_path) -> None:
    (tmp_path / PRODUCTS_FILE).write_text("1|Rice|5.5|1000\n", encoding="utf-8")
    (tmp_path / NEXT_IDS_FILE).write_text("10\nabc\n5\n", encoding="utf-8")

    store = EntityStore()
    catalog_repository.load_store(store)

    next_ids = store.next_ids()
    assert next_ids["product"] == 10
    assert next_ids["supplier"] == 1
    assert next_ids["retailer"] == 5


def test_load_tolerates_undecodable_bytes(catalog_repository, tmp_path) -> None:
    """Invalid UTF-8 costs only the affected record or counter."""
    (tmp_path / PRODUCTS_FILE).write_bytes(b"1|Rice|5.5|1000\n2|\xff\xfeBad|1.0|5\n3|Fruits|4.75|600\n")
    (tmp_path / NEXT_IDS_FILE).write_bytes(b"10\n\xff\n5\n")

    store = EntityStore()
    catalog_repository.load_store(store)

    assert [p.id for p in store.list_products()] == [1, 3]
    next_ids = store.next_ids()
    assert next_ids["product"] == 10
    assert next_ids["supplier"] == 1
    assert next_ids["retailer"] == 5


def test_load_replaces_existing_store_contents(catalog_repository, tmp_path, entity_store) -> None:
    (tmp_path / PRODUCTS_FILE).write_text("1|Rice|5.5|1000\n", encoding="utf-8")
    entity_store.add_product("Stale", 1.0, 1)
    entity_store.add_product("Stale too", 1.0, 1)

    catalog_repository.load_store(entity_store)

    assert [p.name for p in entity_store.list_products()] == ["Rice"]
