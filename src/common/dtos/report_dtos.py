"""Data Transfer Objects for distribution analytics and reports."""

from dataclasses import dataclass, field


@dataclass
class RoutePlanDTO:
    """Visiting order produced by the nearest-neighbor heuristic. Not guaranteed optimal."""

    supplier_id: int
    retailer_ids: list[int] = field(default_factory=list)
    leg_distances_km: list[float] = field(default_factory=list)  # supplier->first, stop->stop..., last->supplier
    total_distance_km: float = 0.0
    transporter_id: int | None = None
    transport_cost: float | None = None


@dataclass
class RetailerAllocationDTO:
    """One retailer's row in an inventory allocation plan."""

    retailer_id: int
    retailer_name: str
    historical_demand: int
    allocation: int


@dataclass
class AllocationPlanDTO:
    """Advisory stock split for one product. The safety floor is best-effort once rescaled."""

    product_id: int
    total_stock: int
    total_demand: int
    allocations: list[RetailerAllocationDTO] = field(default_factory=list)
    rescaled: bool = False
    baseline_holding_cost: float = 0.0
    optimized_holding_cost: float = 0.0
    savings: float = 0.0

    @property
    def total_allocated(self) -> int:
        return sum(row.allocation for row in self.allocations)

    def allocation_for(self, retailer_id: int) -> int:
        for row in self.allocations:
            if row.retailer_id == retailer_id:
                return row.allocation
        return 0


@dataclass
class DistributionReportDTO:
    """Summary of the transaction history."""

    completed: int = 0
    failed: int = 0
    total_revenue: float = 0.0
    units_by_product: dict[str, int] = field(default_factory=dict)
