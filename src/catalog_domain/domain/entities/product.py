"""Product entity."""

from dataclasses import dataclass, replace

from src.common.exceptions.custom_exceptions import RecordFormatError
from src.common.utils.flat_file_utils import FIELD_DELIMITER, split_record


@dataclass(frozen=True)
class Product:
    """A stocked item with a unit price."""

    id: int
    name: str
    price: float
    stock: int

    def __post_init__(self) -> None:
        """Post-initialization for validation."""
        if self.id < 1:
            raise ValueError("Product ID must be positive.")
        if self.price < 0:
            raise ValueError("Price cannot be negative.")
        if self.stock < 0:
            raise ValueError("Stock cannot be negative.")

    def has_enough_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def with_stock_delta(self, delta: int) -> "Product":
        """Returns a copy with stock adjusted by delta; raises ValueError if it would go negative."""
        return replace(self, stock=self.stock + delta)

    def to_record(self) -> str:
        return FIELD_DELIMITER.join([str(self.id), self.name, repr(float(self.price)), str(self.stock)])

    @classmethod
    def from_record(cls, line: str) -> "Product":
        parts = split_record(line, "product", 4)
        try:
            return cls(id=int(parts[0]), name=parts[1], price=float(parts[2]), stock=int(parts[3]))
        except ValueError as e:
            raise RecordFormatError("product", line, str(e), original_exception=e)

    def __str__(self) -> str:
        return f"Product ID: {self.id} | Name: {self.name} | Price: RM{self.price:.2f} | Stock: {self.stock}"
