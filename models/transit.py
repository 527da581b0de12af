r"""
This submodule contains the transit route records produced by the OSM import.
"""

import copy


class OriginalRoad:
    """
    A stretch of an OSM way between two intersections.

    The order of the intersections is the order of the way, so it also encodes the
    direction of the road.

    Attributes:
        osm_way_id (int): The OSM way the road was split from.
        i1 (int): The OSM node ID of the first intersection.
        i2 (int): The OSM node ID of the second intersection.
    """

    def __init__(self, osm_way_id, i1, i2):
        self.osm_way_id = osm_way_id
        self.i1 = i1
        self.i2 = i2

    def __hash__(self):
        return hash((self.osm_way_id, self.i1, self.i2))

    def __eq__(self, other):
        return isinstance(other, OriginalRoad) and (self.osm_way_id, self.i1, self.i2) == (
            other.osm_way_id,
            other.i1,
            other.i2,
        )

    def __repr__(self):
        return f"OriginalRoad(way {self.osm_way_id}, {self.i1} -> {self.i2})"


class RawBusStop:
    """
    A stop of a transit route, as listed in the route relation.

    Attributes:
        name (str): The name of the stop.
        vehicle_pos (tuple): (OSM node ID, shapely.geometry.Point) where the vehicle stops.
        ped_pos (shapely.geometry.Point or None): Where pedestrians wait, if a platform with the same name exists.
        matched_road (tuple or None): (OriginalRoad, forwards) once the stop has been snapped.
    """

    def __init__(self, name, vehicle_pos, ped_pos=None, matched_road=None):
        self.name = name
        self.vehicle_pos = vehicle_pos
        self.ped_pos = ped_pos
        self.matched_road = matched_road

    @property
    def node_id(self):
        return self.vehicle_pos[0]

    @property
    def point(self):
        return self.vehicle_pos[1]

    def __repr__(self):
        return f"RawBusStop({self.name!r}, node {self.node_id})"


class RawBusRoute:
    """
    A transit route imported from an OSM route relation.

    Attributes:
        full_name (str): The "name" tag of the relation.
        short_name (str): The "ref" tag of the relation, or the full name.
        is_bus (bool): True for buses, False for light rail.
        osm_rel_id (int): The OSM relation ID.
        gtfs_trip_marker (str or None): The "gtfs:trip_marker" tag, if present.
        stops (list): RawBusStop objects inside the boundary, in route order.
        all_pts (list): The OSM node IDs of the whole route, in travel order.
        border_start (object or None): Filled by a later stage of the import.
        border_end (object or None): Filled by a later stage of the import.
    """

    def __init__(
        self,
        full_name,
        short_name,
        is_bus,
        osm_rel_id,
        stops,
        all_pts,
        gtfs_trip_marker=None,
        border_start=None,
        border_end=None,
    ):
        self.full_name = full_name
        self.short_name = short_name
        self.is_bus = is_bus
        self.osm_rel_id = osm_rel_id
        self.stops = stops
        self.all_pts = all_pts
        self.gtfs_trip_marker = gtfs_trip_marker
        self.border_start = border_start
        self.border_end = border_end

    def copy(self):
        """Copy the route and its stops, the geometry is shared."""
        route = copy.copy(self)
        route.stops = [copy.copy(stop) for stop in self.stops]
        route.all_pts = list(self.all_pts)
        return route

    def __repr__(self):
        return f"RawBusRoute({self.short_name!r}, relation {self.osm_rel_id}, {len(self.stops)} stops)"
