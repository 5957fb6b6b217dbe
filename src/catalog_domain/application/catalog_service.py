# src/catalog_domain/application/catalog_service.py
"""Application service for catalog maintenance."""

import logging

from src.catalog_domain.domain.entities.product import Product
from src.catalog_domain.domain.entities.retailer import Retailer
from src.catalog_domain.domain.entities.supplier import Supplier
from src.catalog_domain.domain.entities.transporter import Transporter
from src.catalog_domain.domain.entity_store import EntityStore
from src.catalog_domain.domain.repositories.catalog_repository import ICatalogRepository
from src.common.exceptions.custom_exceptions import EntityNotFoundError, ValidationError
from src.common.utils.flat_file_utils import FIELD_DELIMITER
from src.common.utils.geo_utils import is_valid_coordinate
from src.ledger_domain.domain.entities.ledger import Ledger

logger = logging.getLogger(__name__)


def _validate_text(field_name: str, value: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    if FIELD_DELIMITER in value or "\n" in value:
        raise ValidationError(f"{field_name} must not contain '{FIELD_DELIMITER}' or line breaks")


def _validate_coordinates(latitude: float, longitude: float) -> None:
    if not is_valid_coordinate(latitude, longitude):
        raise ValidationError(f"Invalid coordinates ({latitude}, {longitude}): latitude -90 to 90, longitude -180 to 180")


class CatalogApplicationService:
    """Adds catalog entities, records each addition in the ledger, and handles save/load/reset."""

    def __init__(self, store: EntityStore, ledger: Ledger, catalog_repo: ICatalogRepository) -> None:
        self.store = store
        self.ledger = ledger
        self.catalog_repo = catalog_repo

    def add_product(self, name: str, price: float, stock: int) -> Product:
        _validate_text("Product name", name)
        if price < 0:
            raise ValidationError("Invalid price")
        if stock < 0:
            raise ValidationError("Invalid stock")

        product = self.store.add_product(name, price, stock)
        self.ledger.append(f"Added Product | {product}")
        logger.info(f"Product added with ID: {product.id}")
        return product

    def add_supplier(
        self,
        name: str,
        location: str,
        branch: str,
        latitude: float,
        longitude: float,
        product_ids: tuple[int, ...] = (),
    ) -> Supplier:
        _validate_text("Supplier name", name)
        _validate_text("Location", location)
        _validate_text("Branch", branch)
        _validate_coordinates(latitude, longitude)
        for product_id in product_ids:
            if self.store.find_product(product_id) is None:
                raise EntityNotFoundError("Product", product_id)

        supplier = self.store.add_supplier(name, location, branch, latitude, longitude, tuple(product_ids))
        self.ledger.append(f"Added Supplier | {supplier}")
        logger.info(f"Supplier added with ID: {supplier.id}")
        return supplier

    def link_product_to_supplier(self, supplier_id: int, product_id: int) -> Supplier:
        supplier = self.store.find_supplier(supplier_id)
        if supplier is None:
            raise EntityNotFoundError("Supplier", supplier_id)
        if self.store.find_product(product_id) is None:
            raise EntityNotFoundError("Product", product_id)

        updated = supplier.with_product(product_id)
        self.store.save_supplier(updated)
        logger.info(f"Product {product_id} linked to supplier {supplier_id}")
        return updated

    def add_retailer(
        self,
        name: str,
        location: str,
        latitude: float,
        longitude: float,
        initial_credit: float,
        annual_credit: float,
    ) -> Retailer:
        _validate_text("Retailer name", name)
        _validate_text("Location", location)
        _validate_coordinates(latitude, longitude)
        if initial_credit < 0 or annual_credit < 0:
            raise ValidationError("Invalid credit amount")

        retailer = self.store.add_retailer(name, location, latitude, longitude, initial_credit, annual_credit)
        self.ledger.append(f"Added Retailer | {retailer}")
        logger.info(f"Retailer added with ID: {retailer.id}")
        return retailer

    def add_transporter(self, name: str, transport_type: str, cost_per_km: float, max_capacity: float) -> Transporter:
        _validate_text("Transporter name", name)
        _validate_text("Transport type", transport_type)
        if cost_per_km <= 0:
            raise ValidationError("Invalid cost")
        if max_capacity <= 0:
            raise ValidationError("Invalid capacity")

        transporter = self.store.add_transporter(name, transport_type, cost_per_km, max_capacity)
        self.ledger.append(f"Added Transporter | {transporter}")
        logger.info(f"Transporter added with ID: {transporter.id}")
        return transporter

    def top_up_credit(self, retailer_id: int, amount: float) -> Retailer:
        """Raises both the current and the annual balance by the same amount."""
        if amount <= 0:
            raise ValidationError("Top-up amount must be positive")
        retailer = self.store.find_retailer(retailer_id)
        if retailer is None:
            raise EntityNotFoundError("Retailer", retailer_id)

        updated = retailer.add_credit(amount)
        self.store.save_retailer(updated)
        self.ledger.append(f"Credit Top-Up | Amount: RM{amount:.2f} | {updated}")
        logger.info(f"Retailer {retailer_id} credit topped up by RM{amount:.2f}")
        return updated

    def list_products(self) -> list[Product]:
        return self.store.list_products()

    def list_suppliers(self) -> list[Supplier]:
        return self.store.list_suppliers()

    def list_retailers(self) -> list[Retailer]:
        return self.store.list_retailers()

    def list_transporters(self) -> list[Transporter]:
        return self.store.list_transporters()

    def load_sample_data(self) -> None:
        """Seeds the Klang Valley demo catalog."""
        rice = self.add_product("Rice", 5.50, 1000)
        vegetables = self.add_product("Vegetables", 3.20, 800)
        fruits = self.add_product("Fruits", 4.75, 600)

        self.add_supplier(
            "Malayan Agro",
            "Lot 348, Kampung Datuk Keramat, 50400 Kuala Lumpur",
            "Federal Territory of Kuala Lumpur",
            3.168,
            101.708,
            (rice.id, vegetables.id),
        )
        self.add_supplier(
            "Farm Fresh Produce",
            "Jalan Tun Razak, 55000 Kuala Lumpur",
            "Federal Territory of Kuala Lumpur",
            3.161,
            101.720,
            (vegetables.id, fruits.id),
        )

        self.add_retailer("SuperMart", "Bukit Bintang, 55100 Kuala Lumpur", 3.148, 101.698, 10000.0, 100000.0)
        self.add_retailer("FreshMart", "Petaling Jaya, 47800 Selangor", 3.107, 101.607, 8000.0, 80000.0)
        self.add_retailer("QuickMart", "Shah Alam, 40000 Selangor", 3.073, 101.518, 5000.0, 50000.0)

        self.add_transporter("FastTruck", "Ordinary Ground Transfer", 2.50, 2000.0)
        self.add_transporter("SpeedyDel", "Express Delivery", 3.75, 1500.0)

        logger.info("Sample data loaded")

    def reset_system(self) -> None:
        """Clears every entity and counter, starts a new chain, and reseeds the sample catalog."""
        self.store.clear()
        self.ledger.reset()
        self.load_sample_data()
        logger.warning("System reset: all data cleared and reinitialized")

    def save_catalog(self) -> None:
        self.catalog_repo.save_store(self.store)

    def load_catalog(self) -> bool:
        """Loads persisted entities. Returns False when nothing has been saved yet."""
        if not self.catalog_repo.has_saved_data():
            logger.warning("No saved catalog data found")
            return False
        self.catalog_repo.load_store(self.store)
        return True
