"""Transaction entity."""

from dataclasses import dataclass
from enum import Enum

from src.common.exceptions.custom_exceptions import RecordFormatError
from src.common.utils.flat_file_utils import FIELD_DELIMITER, split_record


class TransactionStatus(str, Enum):
    PENDING = "Pending"  # Construction default, replaced before the transaction is stored
    COMPLETED = "Completed"
    FAILED = "Failed"


class OrderType(str, Enum):
    REGULAR = "Regular"
    SEASONAL = "Seasonal"


@dataclass(frozen=True)  # Stored transactions never change
class Transaction:
    """A costed movement of goods from a supplier to a retailer."""

    id: int
    supplier_id: int
    retailer_id: int
    product_id: int
    transporter_id: int
    quantity: int
    product_cost: float = 0.0
    transport_cost: float = 0.0
    total_cost: float = 0.0
    timestamp: str = ""
    status: TransactionStatus = TransactionStatus.PENDING
    order_type: OrderType = OrderType.REGULAR

    @property
    def is_completed(self) -> bool:
        return self.status == TransactionStatus.COMPLETED

    def block_data(self) -> str:
        """Summary written into ledger payloads."""
        return (
            f"Transaction ID: {self.id} | Supplier ID: {self.supplier_id} | Retailer ID: {self.retailer_id}"
            f" | Product ID: {self.product_id} | Quantity: {self.quantity}"
            f" | Total Cost: RM{self.total_cost:.2f} | Timestamp: {self.timestamp}"
            f" | Status: {self.status.value} | Order Type: {self.order_type.value}"
        )

    def to_record(self) -> str:
        return FIELD_DELIMITER.join(
            [
                str(self.id),
                str(self.supplier_id),
                str(self.retailer_id),
                str(self.product_id),
                str(self.transporter_id),
                str(self.quantity),
                repr(float(self.product_cost)),
                repr(float(self.transport_cost)),
                repr(float(self.total_cost)),
                self.timestamp,
                self.status.value,
                self.order_type.value,
            ]
        )

    @classmethod
    def from_record(cls, line: str) -> "Transaction":
        parts = split_record(line, "transaction", 12)
        try:
            return cls(
                id=int(parts[0]),
                supplier_id=int(parts[1]),
                retailer_id=int(parts[2]),
                product_id=int(parts[3]),
                transporter_id=int(parts[4]),
                quantity=int(parts[5]),
                product_cost=float(parts[6]),
                transport_cost=float(parts[7]),
                total_cost=float(parts[8]),
                timestamp=parts[9],
                status=TransactionStatus(parts[10]),
                order_type=OrderType(parts[11]),
            )
        except ValueError as e:
            raise RecordFormatError("transaction", line, str(e), original_exception=e)

    def __str__(self) -> str:
        return (
            f"Transaction ID: {self.id} | Supplier ID: {self.supplier_id} | Retailer ID: {self.retailer_id}"
            f" | Product ID: {self.product_id} | Transporter ID: {self.transporter_id} | Quantity: {self.quantity}"
            f" | Product Cost: RM{self.product_cost:.2f} | Transport Cost: RM{self.transport_cost:.2f}"
            f" | Total Cost: RM{self.total_cost:.2f} | Timestamp: {self.timestamp}"
            f" | Status: {self.status.value} | Order Type: {self.order_type.value}"
        )
