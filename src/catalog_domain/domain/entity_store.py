# src/catalog_domain/domain/entity_store.py
"""In-memory owner of every catalog entity and transaction, plus id counters."""

from typing import Optional

from src.catalog_domain.domain.entities.product import Product
from src.catalog_domain.domain.entities.retailer import Retailer
from src.catalog_domain.domain.entities.supplier import Supplier
from src.catalog_domain.domain.entities.transporter import Transporter
from src.common.exceptions.custom_exceptions import EntityNotFoundError
from src.transaction_domain.domain.entities.transaction import Transaction

ENTITY_KINDS = ("product", "supplier", "retailer", "transporter", "transaction")


class EntityStore:
    """
    Keyed maps (id -> entity) per kind. Entities are frozen, so callers update by
    storing back a modified copy under the same id.
    """

    def __init__(self) -> None:
        self.products: dict[int, Product] = {}
        self.suppliers: dict[int, Supplier] = {}
        self.retailers: dict[int, Retailer] = {}
        self.transporters: dict[int, Transporter] = {}
        self.transactions: dict[int, Transaction] = {}
        self._next_ids: dict[str, int] = {kind: 1 for kind in ENTITY_KINDS}

    def _allocate_id(self, kind: str) -> int:
        entity_id = self._next_ids[kind]
        self._next_ids[kind] += 1
        return entity_id

    def _bump_counter(self, kind: str, entity_id: int) -> None:
        if entity_id >= self._next_ids[kind]:
            self._next_ids[kind] = entity_id + 1

    # --- Products ---

    def add_product(self, name: str, price: float, stock: int) -> Product:
        product = Product(id=self._next_ids["product"], name=name, price=price, stock=stock)
        self._allocate_id("product")
        self.products[product.id] = product
        return product

    def find_product(self, product_id: int) -> Optional[Product]:
        return self.products.get(product_id)

    def list_products(self) -> list[Product]:
        return list(self.products.values())

    def save_product(self, product: Product) -> None:
        if product.id not in self.products:
            raise EntityNotFoundError("Product", product.id)
        self.products[product.id] = product

    # --- Suppliers ---

    def add_supplier(
        self,
        name: str,
        location: str,
        branch: str,
        latitude: float,
        longitude: float,
        product_ids: tuple[int, ...] = (),
    ) -> Supplier:
        supplier = Supplier(
            id=self._next_ids["supplier"],
            name=name,
            location=location,
            branch=branch,
            latitude=latitude,
            longitude=longitude,
            product_ids=tuple(product_ids),
        )
        self._allocate_id("supplier")
        self.suppliers[supplier.id] = supplier
        return supplier

    def find_supplier(self, supplier_id: int) -> Optional[Supplier]:
        return self.suppliers.get(supplier_id)

    def list_suppliers(self) -> list[Supplier]:
        return list(self.suppliers.values())

    def save_supplier(self, supplier: Supplier) -> None:
        if supplier.id not in self.suppliers:
            raise EntityNotFoundError("Supplier", supplier.id)
        self.suppliers[supplier.id] = supplier

    # --- Retailers ---

    def add_retailer(
        self,
        name: str,
        location: str,
        latitude: float,
        longitude: float,
        credit_balance: float,
        annual_credit_balance: float,
    ) -> Retailer:
        retailer = Retailer(
            id=self._next_ids["retailer"],
            name=name,
            location=location,
            latitude=latitude,
            longitude=longitude,
            credit_balance=credit_balance,
            annual_credit_balance=annual_credit_balance,
        )
        self._allocate_id("retailer")
        self.retailers[retailer.id] = retailer
        return retailer

    def find_retailer(self, retailer_id: int) -> Optional[Retailer]:
        return self.retailers.get(retailer_id)

    def list_retailers(self) -> list[Retailer]:
        return list(self.retailers.values())

    def save_retailer(self, retailer: Retailer) -> None:
        if retailer.id not in self.retailers:
            raise EntityNotFoundError("Retailer", retailer.id)
        self.retailers[retailer.id] = retailer

    # --- Transporters ---

    def add_transporter(self, name: str, transport_type: str, cost_per_km: float, max_capacity: float) -> Transporter:
        transporter = Transporter(
            id=self._next_ids["transporter"],
            name=name,
            transport_type=transport_type,
            cost_per_km=cost_per_km,
            max_capacity=max_capacity,
        )
        self._allocate_id("transporter")
        self.transporters[transporter.id] = transporter
        return transporter

    def find_transporter(self, transporter_id: int) -> Optional[Transporter]:
        return self.transporters.get(transporter_id)

    def list_transporters(self) -> list[Transporter]:
        return list(self.transporters.values())

    # --- Transactions ---

    def next_transaction_id(self) -> int:
        """Consumes a transaction id. Call only once a Transaction is about to be built."""
        return self._allocate_id("transaction")

    def add_transaction(self, transaction: Transaction) -> None:
        if transaction.id in self.transactions:
            raise ValueError(f"Transaction {transaction.id} is already stored.")
        self.transactions[transaction.id] = transaction
        self._bump_counter("transaction", transaction.id)

    def find_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self.transactions.get(transaction_id)

    def list_transactions(self) -> list[Transaction]:
        return list(self.transactions.values())

    # --- Bulk load / persistence support ---

    def load_product(self, product: Product) -> None:
        self.products[product.id] = product
        self._bump_counter("product", product.id)

    def load_supplier(self, supplier: Supplier) -> None:
        self.suppliers[supplier.id] = supplier
        self._bump_counter("supplier", supplier.id)

    def load_retailer(self, retailer: Retailer) -> None:
        self.retailers[retailer.id] = retailer
        self._bump_counter("retailer", retailer.id)

    def load_transporter(self, transporter: Transporter) -> None:
        self.transporters[transporter.id] = transporter
        self._bump_counter("transporter", transporter.id)

    def load_transaction(self, transaction: Transaction) -> None:
        self.transactions[transaction.id] = transaction
        self._bump_counter("transaction", transaction.id)

    def next_ids(self) -> dict[str, int]:
        return dict(self._next_ids)

    def restore_next_ids(self, next_ids: dict[str, int]) -> None:
        """Applies saved counters without ever moving one below an id already in use."""
        for kind, value in next_ids.items():
            if kind in self._next_ids:
                self._next_ids[kind] = max(self._next_ids[kind], value)

    def is_empty(self) -> bool:
        return not (self.products or self.suppliers or self.retailers or self.transporters)

    def clear(self) -> None:
        self.products.clear()
        self.suppliers.clear()
        self.retailers.clear()
        self.transporters.clear()
        self.transactions.clear()
        self._next_ids = {kind: 1 for kind in ENTITY_KINDS}
