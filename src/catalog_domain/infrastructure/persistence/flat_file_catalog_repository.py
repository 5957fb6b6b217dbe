# src/catalog_domain/infrastructure/persistence/flat_file_catalog_repository.py
"""Flat-file implementation of the Catalog repository."""

import logging
import os

from src.catalog_domain.domain.entities.product import Product
from src.catalog_domain.domain.entities.retailer import Retailer
from src.catalog_domain.domain.entities.supplier import Supplier
from src.catalog_domain.domain.entities.transporter import Transporter
from src.catalog_domain.domain.entity_store import EntityStore
from src.catalog_domain.domain.repositories.catalog_repository import ICatalogRepository
from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import PersistenceError
from src.common.utils.flat_file_utils import read_records, write_records
from src.transaction_domain.domain.entities.transaction import Transaction

logger = logging.getLogger(__name__)

PRODUCTS_FILE = "products.dat"
SUPPLIERS_FILE = "suppliers.dat"
RETAILERS_FILE = "retailers.dat"
TRANSPORTERS_FILE = "transporters.dat"
TRANSACTIONS_FILE = "transactions.dat"
NEXT_IDS_FILE = "nextids.dat"

# Line order inside nextids.dat
NEXT_ID_ORDER = ("product", "supplier", "retailer", "transporter", "transaction")


class FlatFileCatalogRepository(ICatalogRepository):
    """One '|' delimited file per entity kind inside the data directory."""

    def __init__(self, data_dir: str | None = None) -> None:
        self.data_dir = data_dir or settings.DATA_DIR

    def _path(self, filename: str) -> str:
        return os.path.join(self.data_dir, filename)

    def has_saved_data(self) -> bool:
        return os.path.exists(self._path(PRODUCTS_FILE))

    def save_store(self, store: EntityStore) -> None:
        write_records(self._path(PRODUCTS_FILE), (p.to_record() for p in store.list_products()))
        write_records(self._path(SUPPLIERS_FILE), (s.to_record() for s in store.list_suppliers()))
        write_records(self._path(RETAILERS_FILE), (r.to_record() for r in store.list_retailers()))
        write_records(self._path(TRANSPORTERS_FILE), (t.to_record() for t in store.list_transporters()))
        write_records(self._path(TRANSACTIONS_FILE), (t.to_record() for t in store.list_transactions()))

        next_ids = store.next_ids()
        write_records(self._path(NEXT_IDS_FILE), (str(next_ids[kind]) for kind in NEXT_ID_ORDER))

        logger.info(
            f"Saved catalog to {self.data_dir}: {len(store.products)} products, {len(store.suppliers)} suppliers, "
            f"{len(store.retailers)} retailers, {len(store.transporters)} transporters, "
            f"{len(store.transactions)} transactions"
        )

    def load_store(self, store: EntityStore) -> None:
        store.clear()

        for product in read_records(self._path(PRODUCTS_FILE), Product.from_record, "product"):
            store.load_product(product)
        for supplier in read_records(self._path(SUPPLIERS_FILE), Supplier.from_record, "supplier"):
            store.load_supplier(supplier)
        for retailer in read_records(self._path(RETAILERS_FILE), Retailer.from_record, "retailer"):
            store.load_retailer(retailer)
        for transporter in read_records(self._path(TRANSPORTERS_FILE), Transporter.from_record, "transporter"):
            store.load_transporter(transporter)
        for transaction in read_records(self._path(TRANSACTIONS_FILE), Transaction.from_record, "transaction"):
            store.load_transaction(transaction)

        store.restore_next_ids(self._load_next_ids())

        logger.info(
            f"Loaded catalog from {self.data_dir}: {len(store.products)} products, {len(store.suppliers)} suppliers, "
            f"{len(store.retailers)} retailers, {len(store.transporters)} transporters, "
            f"{len(store.transactions)} transactions"
        )

    def _load_next_ids(self) -> dict[str, int]:
        path = self._path(NEXT_IDS_FILE)
        if not os.path.exists(path):
            return {}
        try:
            # Undecodable bytes become U+FFFD and fail int() below
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                values = [line.strip() for line in f if line.strip()]
        except OSError as e:
            raise PersistenceError(f"Could not read {path}", original_exception=e)

        next_ids: dict[str, int] = {}
        for kind, value in zip(NEXT_ID_ORDER, values):
            try:
                next_ids[kind] = int(value)
            except ValueError:
                logger.warning(f"Ignoring invalid next {kind} id {value!r} in {path}")
        return next_ids
