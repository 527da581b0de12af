"""Shared pytest fixtures.

COORDINATE SYSTEM:
    Tests use (longitude, latitude) coordinates near the equator and the prime meridian,
    where 0.001 degrees is roughly 111 meters in both directions. Lanes start and end
    exactly on their intersection points, so turns have zero length.
"""

import pytest
from shapely.geometry import LineString, Point, box

from graph.builder import create_network
from models.intersection import Intersection
from models.lane import Lane, LaneType
from models.osm import Document, OsmID, OsmNode, OsmRelation, OsmWay

# Intersection ID -> (lon, lat)
INTERSECTIONS = {
    1: (0.000, 0.000),
    2: (0.001, 0.000),
    3: (0.002, 0.000),
    4: (0.001, 0.001),
    6: (0.003, 0.000),
    # A separate corner of the map, connected only through a bike lane
    7: (0.010, 0.000),
    8: (0.011, 0.000),
    9: (0.012, 0.000),
    10: (0.013, 0.000),
}


def make_lane(lane_id, lane_type, src_i, dst_i):
    geometry = LineString([INTERSECTIONS[src_i], INTERSECTIONS[dst_i]])
    return Lane(lane_id, lane_type, src_i, dst_i, geometry)


@pytest.fixture
def network():
    """
    Driving lanes:  1: 1->2, 2: 2->3, 3: 2->4, 4: 4->3, 6: 3->6 (dead end)
    Bike corner:    20: 7->8 (driving), 21: 8->9 (biking), 22: 9->10 (driving)
    Sidewalks:      30: 1->2, 31: 3->2 (drawn towards 2), 32: 2->4
    """
    lanes = [
        make_lane(1, LaneType.DRIVING, 1, 2),
        make_lane(2, LaneType.DRIVING, 2, 3),
        make_lane(3, LaneType.DRIVING, 2, 4),
        make_lane(4, LaneType.DRIVING, 4, 3),
        make_lane(6, LaneType.DRIVING, 3, 6),
        make_lane(20, LaneType.DRIVING, 7, 8),
        make_lane(21, LaneType.BIKING, 8, 9),
        make_lane(22, LaneType.DRIVING, 9, 10),
        make_lane(30, LaneType.SIDEWALK, 1, 2),
        make_lane(31, LaneType.SIDEWALK, 3, 2),
        make_lane(32, LaneType.SIDEWALK, 2, 4),
    ]
    movements = {
        2: [(1, 2), (1, 3), (30, 31), (31, 30), (31, 32)],
        3: [(2, 6), (4, 6)],
        4: [(3, 4)],
        8: [(20, 21)],
        9: [(21, 22)],
    }
    intersections = [
        Intersection(i, movements.get(i, []), Point(coords), "StopSign")
        for i, coords in INTERSECTIONS.items()
    ]
    return create_network(lanes, intersections)


# OSM node ID -> (lon, lat). Nodes 1-7 are a straight street, 101-106 are stops around it.
OSM_NODES = {i: (0.001 * i, 0.0) for i in range(1, 8)}
OSM_NODES.update(
    {
        10: (0.1, 0.1),
        11: (0.2, 0.1),
        101: (0.000, 0.0001),
        102: (0.001, 0.0001),
        103: (0.003, 0.0001),
        104: (0.004, 0.0001),
        105: (0.006, 0.0001),
        106: (0.0035, 0.0001),
    }
)


def make_way(way_id, nodes, tags=None):
    points = [Point(OSM_NODES[n]) for n in nodes]
    return OsmWay(way_id, nodes, points, tags if tags is not None else {"highway": "primary"})


@pytest.fixture
def doc():
    """
    Ways 1000: [1, 2, 3], 1001: [5, 4, 3] (drawn backwards), 1002: [5, 6, 7], 1003: [10, 11].
    Stop names are on nodes 2, 4 and 6.
    """
    document = Document()
    for node_id, coords in OSM_NODES.items():
        document.add_node(OsmNode(node_id, Point(coords)))
    document.node(2).tags["name"] = "Old Town"
    document.node(4).tags["name"] = "Harbour"
    document.node(6).tags["name"] = "Airport"

    document.add_way(make_way(1000, [1, 2, 3]))
    document.add_way(make_way(1001, [5, 4, 3]))
    document.add_way(make_way(1002, [5, 6, 7]))
    document.add_way(make_way(1003, [10, 11]))
    return document


def route_relation(rel_id, stops, ways, tags=None, platforms=()):
    members = [("stop", OsmID.node(n)) for n in stops]
    members += [("platform", member) for member in platforms]
    members += [("", OsmID.way(w)) for w in ways]
    if tags is None:
        tags = {"name": "Bus 5: Old Town => Airport", "ref": "5", "route": "bus"}
    return OsmRelation(rel_id, tags, members)


@pytest.fixture
def boundary():
    """Covers the whole street."""
    return box(-0.01, -0.01, 0.01, 0.01)
