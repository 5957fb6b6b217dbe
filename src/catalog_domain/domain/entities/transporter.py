"""Transporter entity."""

from dataclasses import dataclass

from src.common.exceptions.custom_exceptions import RecordFormatError
from src.common.utils.flat_file_utils import FIELD_DELIMITER, split_record


@dataclass(frozen=True)
class Transporter:
    id: int
    name: str
    transport_type: str
    cost_per_km: float
    max_capacity: float  # kg

    def __post_init__(self) -> None:
        if self.cost_per_km <= 0:
            raise ValueError("Cost per km must be positive.")
        if self.max_capacity <= 0:
            raise ValueError("Max capacity must be positive.")

    def calculate_transport_cost(self, distance_km: float) -> float:
        return distance_km * self.cost_per_km

    def to_record(self) -> str:
        return FIELD_DELIMITER.join(
            [str(self.id), self.name, self.transport_type, repr(float(self.cost_per_km)), repr(float(self.max_capacity))]
        )

    @classmethod
    def from_record(cls, line: str) -> "Transporter":
        parts = split_record(line, "transporter", 5)
        try:
            return cls(
                id=int(parts[0]),
                name=parts[1],
                transport_type=parts[2],
                cost_per_km=float(parts[3]),
                max_capacity=float(parts[4]),
            )
        except ValueError as e:
            raise RecordFormatError("transporter", line, str(e), original_exception=e)

    def __str__(self) -> str:
        return (
            f"Transporter ID: {self.id} | Name: {self.name} | Type: {self.transport_type}"
            f" | Cost/km: RM{self.cost_per_km:.2f} | Max Capacity: {self.max_capacity:g}kg"
        )
