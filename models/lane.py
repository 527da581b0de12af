r"""
This submodule contains the Lane class and the lane types.
"""

from enum import Enum

from shapely.geometry import Point

from geo_operations.geo_utils import find_line_length


class LaneType(Enum):
    """
    The kinds of lanes a road is made of. Values match the "type" property of the lane GeoJSON export.
    """

    DRIVING = "Driving"
    PARKING = "Parking"
    SIDEWALK = "Sidewalk"
    BIKING = "Biking"
    BUS = "Bus"
    LIGHT_RAIL = "LightRail"

    @property
    def is_bidirectional(self):
        """Only sidewalks can be walked against their nominal direction."""
        return self is LaneType.SIDEWALK


class Lane:
    """
    Represents one directed traversable strip of a road.

    Attributes:
        id (int): The unique identifier of the lane.
        lane_type (LaneType): What travels on the lane.
        src_i (int): The intersection the lane starts from.
        dst_i (int): The intersection the lane leads to.
        geometry (shapely.geometry.LineString): The center line of the lane, from src_i to dst_i.
        length (float): The length of the lane in meters.

    Example:

    ::

        lane = Lane(
            id=3,
            lane_type=LaneType.SIDEWALK,
            src_i=10,
            dst_i=11,
            geometry=LineString([(24.7450, 59.4370), (24.7461, 59.4372)]),
        )
    """

    def __init__(self, id, lane_type, src_i, dst_i, geometry, length=None):
        """
        Initialize a Lane instance.

        Args:
            id (int): The unique identifier of the lane.
            lane_type (LaneType): What travels on the lane.
            src_i (int): The intersection the lane starts from.
            dst_i (int): The intersection the lane leads to.
            geometry (shapely.geometry.LineString): The center line of the lane.
            length (float, optional): The length of the lane in meters.
                Calculated from the geometry if not given.
        """
        self.id = id
        self.lane_type = lane_type
        self.src_i = src_i
        self.dst_i = dst_i
        self.geometry = geometry
        self.length = find_line_length(geometry) if length is None else length

    def first_pt(self):
        return Point(self.geometry.coords[0])

    def last_pt(self):
        return Point(self.geometry.coords[-1])

    def endpoint(self, intersection_id):
        """
        Get the end of the lane touching the given intersection.

        Args:
            intersection_id (int): Either src_i or dst_i of the lane.

        Returns:
            shapely.geometry.Point: The first point for src_i, the last point for dst_i.
        """
        if intersection_id == self.dst_i:
            return self.last_pt()
        if intersection_id == self.src_i:
            return self.first_pt()
        raise ValueError(f"Lane {self.id} doesn't touch intersection {intersection_id}")

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        return isinstance(other, Lane) and self.id == other.id

    def __repr__(self):
        return f"Lane({self.id}, {self.lane_type.value}, {self.src_i} -> {self.dst_i})"
