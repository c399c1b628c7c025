"""Great-circle operations on geographic paths.

This module provides the spherical math the projection engine is built on:
- Haversine distance between coordinates
- Initial bearing and forward destination
- Total length of a path
- Point at a distance along a path
- Nearest point on a path and the edge it lies on
- Sub-path between two points on a path

Coordinates are (longitude, latitude) pairs in degrees. Distances are in
kilometers on a sphere of the configured mean Earth radius.

All functions are pure and stateless.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from curbmap.config import GeometryConfig
from curbmap.domain import Coordinate
from curbmap.exceptions import ProjectionError

DEFAULT_GEOMETRY_CONFIG = GeometryConfig()
EARTH_RADIUS_KM = DEFAULT_GEOMETRY_CONFIG.earth_radius_km


@dataclass(frozen=True)
class PathLocation:
    """A point snapped onto a path.

    Attributes:
        point: Nearest point on the path
        edge_index: Index ``i`` of the edge ``path[i] -> path[i + 1]`` holding it
        distance_km: Distance from the query point to ``point``
        edge_offset_km: Distance from ``path[edge_index]`` to ``point``
    """

    point: Coordinate
    edge_index: int
    distance_km: float
    edge_offset_km: float


def _xy(coord: Sequence[float]) -> Coordinate:
    return (float(coord[0]), float(coord[1]))


def _check_coordinate(coord: Coordinate) -> None:
    if len(coord) < 2 or not (math.isfinite(coord[0]) and math.isfinite(coord[1])):
        raise ProjectionError(f"Invalid coordinate {coord!r}")


def _check_path(path: Sequence[Coordinate]) -> None:
    if len(path) < 2:
        raise ProjectionError(f"Path needs at least 2 vertices, got {len(path)}")
    for coord in path:
        _check_coordinate(coord)


def haversine_distance(
    a: Coordinate, b: Coordinate, radius_km: float = EARTH_RADIUS_KM
) -> float:
    """Great-circle distance between two coordinates.

    Args:
        a: First (longitude, latitude) pair
        b: Second (longitude, latitude) pair
        radius_km: Sphere radius

    Returns:
        Distance in kilometers

    Examples:
        >>> round(haversine_distance((0.0, 0.0), (0.0, 1.0)), 3)
        111.195
    """
    lat1 = math.radians(a[1])
    lat2 = math.radians(b[1])
    dlat = lat2 - lat1
    dlon = math.radians(b[0] - a[0])

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * radius_km * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def initial_bearing(a: Coordinate, b: Coordinate) -> float:
    """Initial bearing of the great circle from ``a`` to ``b``.

    Returns:
        Bearing in degrees, clockwise from north, in (-180, 180]
    """
    lat1 = math.radians(a[1])
    lat2 = math.radians(b[1])
    dlon = math.radians(b[0] - a[0])

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    return math.degrees(math.atan2(y, x))


def destination(
    origin: Coordinate,
    distance_km: float,
    bearing_deg: float,
    radius_km: float = EARTH_RADIUS_KM,
) -> Coordinate:
    """Point reached by travelling along a great circle.

    Args:
        origin: Starting (longitude, latitude) pair
        distance_km: Distance to travel
        bearing_deg: Initial bearing in degrees clockwise from north
        radius_km: Sphere radius

    Returns:
        Destination (longitude, latitude) pair
    """
    lon1 = math.radians(origin[0])
    lat1 = math.radians(origin[1])
    delta = distance_km / radius_km
    theta = math.radians(bearing_deg)

    sin_lat2 = math.sin(lat1) * math.cos(delta) + math.cos(lat1) * math.sin(delta) * math.cos(theta)
    lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
    lon2 = lon1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(lat1),
        math.cos(delta) - math.sin(lat1) * math.sin(lat2),
    )
    return (math.degrees(lon2), math.degrees(lat2))


def path_length(path: Sequence[Coordinate], radius_km: float = EARTH_RADIUS_KM) -> float:
    """Sum of great-circle distances between consecutive vertices."""
    return sum(haversine_distance(a, b, radius_km) for a, b in zip(path, path[1:]))


def along_path(
    path: Sequence[Coordinate],
    distance_km: float,
    config: GeometryConfig | None = None,
) -> Coordinate:
    """Find the coordinate at a distance from the start of a path.

    The point is found on the edge containing the distance by travelling
    along the great circle from the edge's first vertex, so long edges
    follow the Earth's curvature. Distances within epsilon of either end
    return that end's vertex.

    Args:
        path: Vertices of the path (at least 2)
        distance_km: Distance from the first vertex
        config: Geometry settings (defaults if None)

    Returns:
        (longitude, latitude) at that distance

    Raises:
        ProjectionError: If the path or the distance is unusable
    """
    config = config or DEFAULT_GEOMETRY_CONFIG
    _check_path(path)
    if not math.isfinite(distance_km):
        raise ProjectionError(f"Distance along path is not finite: {distance_km}")

    eps = config.distance_epsilon_km
    radius = config.earth_radius_km

    if distance_km <= eps:
        return _xy(path[0])

    total = path_length(path, radius)
    if distance_km >= total - eps:
        return _xy(path[-1])

    travelled = 0.0
    for start, end in zip(path, path[1:]):
        edge = haversine_distance(start, end, radius)
        if travelled + edge >= distance_km:
            remaining = distance_km - travelled
            if remaining <= eps:
                return _xy(start)
            if edge - remaining <= eps:
                return _xy(end)
            return destination(start, remaining, initial_bearing(start, end), radius)
        travelled += edge

    return _xy(path[-1])


def nearest_point_on_edge(
    point: Coordinate,
    start: Coordinate,
    end: Coordinate,
    radius_km: float = EARTH_RADIUS_KM,
) -> tuple[Coordinate, float, float]:
    """Find the closest point on a great-circle edge to a given point.

    Uses cross-track and along-track distances: the point is projected onto
    the great circle through the edge, then clamped to the edge endpoints.

    Args:
        point: The point to project
        start: First vertex of the edge
        end: Second vertex of the edge
        radius_km: Sphere radius

    Returns:
        Tuple of (nearest_point, distance_km, offset_km) where offset_km is
        the distance from ``start`` to ``nearest_point``
    """
    d13 = haversine_distance(start, point, radius_km) / radius_km
    d12 = haversine_distance(start, end, radius_km) / radius_km

    # Degenerate edge or point on the start vertex
    if d12 < 1e-15 or d13 < 1e-15:
        return _xy(start), haversine_distance(point, start, radius_km), 0.0

    theta12 = math.radians(initial_bearing(start, end))
    theta13 = math.radians(initial_bearing(start, point))
    diff = theta13 - theta12

    if math.cos(diff) <= 0:
        # Point lies behind the start of the edge
        return _xy(start), d13 * radius_km, 0.0

    # Napier: tan(along) = tan(d13) * cos(diff), stable for short edges
    along = math.atan2(math.sin(d13) * math.cos(diff), math.cos(d13))

    if along >= d12:
        return _xy(end), haversine_distance(point, end, radius_km), d12 * radius_km

    nearest = destination(start, along * radius_km, math.degrees(theta12), radius_km)
    return nearest, haversine_distance(point, nearest, radius_km), along * radius_km


def nearest_point_on_path(
    point: Coordinate,
    path: Sequence[Coordinate],
    radius_km: float = EARTH_RADIUS_KM,
) -> PathLocation:
    """Find the closest point on a path and the edge it lies on.

    Ties keep the earliest edge.

    Args:
        point: The point to locate
        path: Vertices of the path (at least 2)
        radius_km: Sphere radius

    Returns:
        PathLocation of the nearest point

    Raises:
        ProjectionError: If the path or the point is unusable
    """
    _check_path(path)
    _check_coordinate(point)

    best: PathLocation | None = None
    for i, (start, end) in enumerate(zip(path, path[1:])):
        nearest, distance, offset = nearest_point_on_edge(point, start, end, radius_km)
        if best is None or distance < best.distance_km:
            best = PathLocation(
                point=nearest,
                edge_index=i,
                distance_km=distance,
                edge_offset_km=offset,
            )

    if best is None:
        raise ProjectionError(f"Could not locate {point!r} on path")
    return best


def _snap_to_vertex(
    location: PathLocation,
    path: Sequence[Coordinate],
    eps: float,
    radius_km: float,
) -> Coordinate:
    for vertex in (path[location.edge_index], path[location.edge_index + 1]):
        if haversine_distance(location.point, vertex, radius_km) <= eps:
            return _xy(vertex)
    return location.point


def slice_between(
    path: Sequence[Coordinate],
    start_point: Coordinate,
    end_point: Coordinate,
    config: GeometryConfig | None = None,
) -> tuple[Coordinate, ...]:
    """Extract the part of a path between two points.

    Both points are snapped onto the path. The result is the first snapped
    point, every original vertex strictly between the two, and the second
    snapped point, running from ``start_point`` towards ``end_point`` even
    when that is against the path's direction. A snapped point within
    epsilon of a vertex is replaced by that vertex, and consecutive
    coincident coordinates are collapsed.

    Args:
        path: Vertices of the path (at least 2)
        start_point: First boundary
        end_point: Second boundary
        config: Geometry settings (defaults if None)

    Returns:
        Coordinates of the sub-path; a single coordinate when both
        boundaries coincide

    Raises:
        ProjectionError: If the path or either boundary is unusable
    """
    config = config or DEFAULT_GEOMETRY_CONFIG
    eps = config.distance_epsilon_km
    radius = config.earth_radius_km

    first = nearest_point_on_path(start_point, path, radius)
    second = nearest_point_on_path(end_point, path, radius)

    reverse = (second.edge_index, second.edge_offset_km) < (first.edge_index, first.edge_offset_km)
    if reverse:
        first, second = second, first

    coords: list[Coordinate] = [_snap_to_vertex(first, path, eps, radius)]
    for j in range(first.edge_index + 1, second.edge_index + 1):
        coords.append(_xy(path[j]))
    coords.append(_snap_to_vertex(second, path, eps, radius))

    result: list[Coordinate] = [coords[0]]
    for coord in coords[1:]:
        if haversine_distance(result[-1], coord, radius) > eps:
            result.append(coord)

    if reverse:
        result.reverse()
    return tuple(result)


def blockface_length_feet(
    path: Sequence[Coordinate], config: GeometryConfig | None = None
) -> float:
    """Geodesic length of a blockface path in whole feet.

    Args:
        path: Blockface vertices
        config: Geometry settings (defaults if None)

    Returns:
        Length in feet, rounded to the nearest foot
    """
    config = config or DEFAULT_GEOMETRY_CONFIG
    km = path_length(path, config.earth_radius_km)
    return float(round(km * config.feet_per_km))
