"""Distance helpers shared by the transaction pipeline and route planning."""

import math

# Degrees to kilometres, flat-earth approximation
KM_PER_DEGREE = 111.0


def planar_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Euclidean distance between two coordinates in degrees, scaled to km.

    Not geodesically accurate; swap for haversine if real road distances matter.
    """
    return math.hypot(lat2 - lat1, lon2 - lon1) * KM_PER_DEGREE


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0
