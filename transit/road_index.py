r"""
This submodule splits OSM highways and light rail tracks into road segments between intersections, so transit
stops can be looked up by position.
"""

from collections import Counter

from models.osm import HIGHWAY, RAILWAY
from models.transit import OriginalRoad


class RoadIndex:
    """
    The intersections of the OSM road network and the road segment every point belongs to.

    Attributes:
        intersections (set): OSM node IDs of intersections.
        pt_to_road (dict): (x, y) of a point inside a road segment -> OriginalRoad.
        roads (list): Every OriginalRoad, in way order.
    """

    def __init__(self, intersections, pt_to_road, roads=None):
        self.intersections = intersections
        self.pt_to_road = pt_to_road
        self.roads = roads or []

    def intersection_exists(self, node_id):
        return node_id in self.intersections

    def road_at(self, point):
        """
        Find the road segment a point lies on.

        Args:
            point (shapely.geometry.Point): A point of an OSM way.

        Returns:
            OriginalRoad or None: The road, or None if the point isn't inside any road.
        """
        return self.pt_to_road.get((point.x, point.y))

    def __repr__(self):
        return f"RoadIndex({len(self.intersections)} intersections, {len(self.roads)} roads)"


def is_road(way):
    """True for highways and light rail tracks, the ways transit vehicles run on."""
    return HIGHWAY in way.tags or way.tags.get(RAILWAY) == "light_rail"


def build_road_index(doc):
    """
    Split every road of a document into segments at its intersections.

    Highways and light rail tracks are roads. A node is an intersection if it's the end of a
    road or if several roads use it. Ways with fewer than two nodes are ignored.

    Args:
        doc (Document): The OSM document.

    Returns:
        RoadIndex: The intersections and roads.

    Example:

    ::

        road_index = build_road_index(doc)
        road = road_index.road_at(stop.point)
    """
    road_ways = [way for _, way in sorted(doc.ways.items()) if is_road(way) and len(way.nodes) >= 2]

    counts = Counter()
    intersections = set()
    for way in road_ways:
        counts.update(way.nodes)
        intersections.add(way.nodes[0])
        intersections.add(way.nodes[-1])
    intersections.update(node for node, count in counts.items() if count > 1)

    roads = []
    pt_to_road = {}
    for way in road_ways:
        start = 0
        for idx in range(1, len(way.nodes)):
            if way.nodes[idx] not in intersections:
                continue
            road = OriginalRoad(way.id, way.nodes[start], way.nodes[idx])
            roads.append(road)
            for point in way.points[start + 1 : idx]:
                pt_to_road[(point.x, point.y)] = road
            start = idx

    return RoadIndex(intersections, pt_to_road, roads)
