r"""
This submodule preprocesses the GeoJSON data to make it usable for building the lane network.
"""

import re

from shapely.geometry import shape

from exceptions import DataLoadError
from models.intersection import Intersection
from models.lane import Lane, LaneType

MOVEMENT_PATTERN = re.compile(r"^\s*Lane #(\d+)\s*->\s*Lane #(\d+)\s*$")


def parse_movement(movement):
    """
    Parse a movement string into the IDs of the lanes it connects.

    Args:
        movement (str): A movement in the form "Lane #<src> -> Lane #<dst>".

    Returns:
        tuple: (source lane ID, destination lane ID).

    Raises:
        DataLoadError: If the string is not a movement.

    Example:

    ::

        src, dst = parse_movement("Lane #18005 -> Lane #1")
    """
    match = MOVEMENT_PATTERN.match(movement)
    if match is None:
        raise DataLoadError(f"Can't parse movement {movement!r}")
    return int(match.group(1)), int(match.group(2))


def preprocess_lanes(lane_geojson):
    """
    Load the lanes from GeoJSON features.

    Every feature must be a LineString drawn from the source to the destination intersection,
    with the properties "id", "type", "src_i" and "dst_i".

    Args:
        lane_geojson (dict): GeoJSON data containing lane features.

    Returns:
        list: A list of Lane objects.

    Raises:
        DataLoadError: If a lane has an unknown type.

    Example:

    ::

        lanes = preprocess_lanes(load_geojson("map_files/lanes.geojson"))
    """
    lanes = []

    for feature in lane_geojson["features"]:
        properties = feature["properties"]
        try:
            lane_type = LaneType(properties["type"])
        except ValueError:
            raise DataLoadError(
                f"Lane {properties['id']} has unknown type {properties['type']!r}"
            ) from None

        lanes.append(
            Lane(
                id=properties["id"],
                lane_type=lane_type,
                src_i=properties["src_i"],
                dst_i=properties["dst_i"],
                geometry=shape(feature["geometry"]),
                length=properties.get("length"),
            )
        )

    return lanes


def preprocess_intersections(intersection_geojson):
    """
    Load intersections and their movements.

    Args:
        intersection_geojson (dict): GeoJSON data containing intersection features with the
            properties "id", "intersection_kind" and "turns".

    Returns:
        list: A list of Intersection objects.

    Example:

    ::

        intersections = preprocess_intersections(load_geojson("map_files/intersections.geojson"))
    """
    intersections = []

    for feature in intersection_geojson["features"]:
        properties = feature["properties"]
        movements = [parse_movement(m) for m in properties.get("turns", [])]
        intersections.append(
            Intersection(
                properties["id"],
                movements,
                shape(feature["geometry"]) if feature.get("geometry") else None,
                properties.get("intersection_kind", "StopSign"),
            )
        )

    return intersections
