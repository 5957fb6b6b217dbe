"""Retailer entity."""

from dataclasses import dataclass, field, replace

from src.common.exceptions.custom_exceptions import RecordFormatError
from src.common.utils.flat_file_utils import FIELD_DELIMITER, format_id_list, parse_id_list, split_record
from src.common.utils.geo_utils import is_valid_coordinate


@dataclass(frozen=True)
class Retailer:
    """A buying outlet with a current and an annual credit line."""

    id: int
    name: str
    location: str
    latitude: float
    longitude: float
    credit_balance: float
    annual_credit_balance: float
    product_ids: tuple[int, ...] = field(default_factory=tuple)  # Not read by the transaction pipeline

    def __post_init__(self) -> None:
        if not is_valid_coordinate(self.latitude, self.longitude):
            raise ValueError(f"Invalid coordinates ({self.latitude}, {self.longitude}).")

    def has_enough_credit(self, amount: float) -> bool:
        return self.credit_balance >= amount

    def deduct_credit(self, amount: float) -> "Retailer":
        """Both balances move together."""
        return replace(
            self,
            credit_balance=self.credit_balance - amount,
            annual_credit_balance=self.annual_credit_balance - amount,
        )

    def add_credit(self, amount: float) -> "Retailer":
        return replace(
            self,
            credit_balance=self.credit_balance + amount,
            annual_credit_balance=self.annual_credit_balance + amount,
        )

    def to_record(self) -> str:
        return FIELD_DELIMITER.join(
            [
                str(self.id),
                self.name,
                self.location,
                repr(float(self.latitude)),
                repr(float(self.longitude)),
                repr(float(self.credit_balance)),
                repr(float(self.annual_credit_balance)),
                format_id_list(self.product_ids),
            ]
        )

    @classmethod
    def from_record(cls, line: str) -> "Retailer":
        parts = split_record(line, "retailer", 7)
        try:
            return cls(
                id=int(parts[0]),
                name=parts[1],
                location=parts[2],
                latitude=float(parts[3]),
                longitude=float(parts[4]),
                credit_balance=float(parts[5]),
                annual_credit_balance=float(parts[6]),
                product_ids=parse_id_list(parts[7]) if len(parts) > 7 else (),
            )
        except ValueError as e:
            raise RecordFormatError("retailer", line, str(e), original_exception=e)

    def __str__(self) -> str:
        return (
            f"Retailer ID: {self.id} | Name: {self.name} | Location: {self.location}"
            f" | Credit Balance: RM{self.credit_balance:.2f}"
            f" | Annual Credit Balance: RM{self.annual_credit_balance:.2f}"
        )
