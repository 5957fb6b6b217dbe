"""Supplier entity."""

from dataclasses import dataclass, field, replace

from src.common.exceptions.custom_exceptions import RecordFormatError
from src.common.utils.flat_file_utils import FIELD_DELIMITER, format_id_list, parse_id_list, split_record
from src.common.utils.geo_utils import is_valid_coordinate


@dataclass(frozen=True)
class Supplier:
    """A producer branch with coordinates and the products it can ship."""

    id: int
    name: str
    location: str
    branch: str
    latitude: float
    longitude: float
    product_ids: tuple[int, ...] = field(default_factory=tuple)  # Insertion order, duplicates allowed

    def __post_init__(self) -> None:
        if not is_valid_coordinate(self.latitude, self.longitude):
            raise ValueError(f"Invalid coordinates ({self.latitude}, {self.longitude}).")

    def supplies(self, product_id: int) -> bool:
        return product_id in self.product_ids

    def with_product(self, product_id: int) -> "Supplier":
        return replace(self, product_ids=self.product_ids + (product_id,))

    def to_record(self) -> str:
        return FIELD_DELIMITER.join(
            [
                str(self.id),
                self.name,
                self.location,
                self.branch,
                repr(float(self.latitude)),
                repr(float(self.longitude)),
                format_id_list(self.product_ids),
            ]
        )

    @classmethod
    def from_record(cls, line: str) -> "Supplier":
        parts = split_record(line, "supplier", 6)
        try:
            return cls(
                id=int(parts[0]),
                name=parts[1],
                location=parts[2],
                branch=parts[3],
                latitude=float(parts[4]),
                longitude=float(parts[5]),
                product_ids=parse_id_list(parts[6]) if len(parts) > 6 else (),
            )
        except ValueError as e:
            raise RecordFormatError("supplier", line, str(e), original_exception=e)

    def __str__(self) -> str:
        return f"Supplier ID: {self.id} | Name: {self.name} | Location: {self.location} | Branch: {self.branch}"
