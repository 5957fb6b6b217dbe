# src/optimization_domain/domain/services/route_optimizer.py
"""Nearest-neighbor delivery route planning from one supplier through a set of retailers."""

from typing import Sequence

from src.catalog_domain.domain.entities.retailer import Retailer
from src.catalog_domain.domain.entities.supplier import Supplier
from src.common.dtos.report_dtos import RoutePlanDTO
from src.common.exceptions.custom_exceptions import RouteOptimizationError
from src.common.utils.geo_utils import planar_distance_km

MIN_RETAILERS_FOR_ROUTE = 2


def _distance(from_lat: float, from_lon: float, to: Retailer) -> float:
    return planar_distance_km(from_lat, from_lon, to.latitude, to.longitude)


def plan_nearest_neighbor_route(supplier: Supplier, retailers: Sequence[Retailer]) -> RoutePlanDTO:
    """
    Greedy tour: start at the supplier, always drive to the closest unvisited
    retailer, then return to the supplier. A heuristic, not an optimal tour.

    Ties go to the retailer that comes first in `retailers`.
    """
    if len(retailers) < MIN_RETAILERS_FOR_ROUTE:
        raise RouteOptimizationError(
            f"Need at least {MIN_RETAILERS_FOR_ROUTE} retailers for route optimization, got {len(retailers)}"
        )

    plan = RoutePlanDTO(supplier_id=supplier.id)
    unvisited = list(retailers)
    current_lat, current_lon = supplier.latitude, supplier.longitude

    while unvisited:
        nearest = unvisited[0]
        nearest_distance = _distance(current_lat, current_lon, nearest)
        for candidate in unvisited[1:]:
            candidate_distance = _distance(current_lat, current_lon, candidate)
            if candidate_distance < nearest_distance:
                nearest, nearest_distance = candidate, candidate_distance

        plan.retailer_ids.append(nearest.id)
        plan.leg_distances_km.append(nearest_distance)
        unvisited.remove(nearest)
        current_lat, current_lon = nearest.latitude, nearest.longitude

    # Return leg
    plan.leg_distances_km.append(planar_distance_km(current_lat, current_lon, supplier.latitude, supplier.longitude))
    plan.total_distance_km = sum(plan.leg_distances_km)
    return plan
