r"""
This submodule contains the OSM document model: nodes, ways and relations read from an OSM XML file.
"""

from typing import NamedTuple

# Common OSM keys. Keys used in just one or two places don't need to be defined here.
NAME = "name"
REF = "ref"
ROUTE = "route"
HIGHWAY = "highway"
RAILWAY = "railway"
GTFS_TRIP_MARKER = "gtfs:trip_marker"


class OsmID(NamedTuple):
    """
    A reference to any OSM element.

    Attributes:
        kind (str): "node", "way" or "relation".
        id (int): The OSM identifier of the element.
    """

    kind: str
    id: int

    @classmethod
    def node(cls, id):
        return cls("node", id)

    @classmethod
    def way(cls, id):
        return cls("way", id)

    @classmethod
    def relation(cls, id):
        return cls("relation", id)

    def is_node(self):
        return self.kind == "node"

    def is_way(self):
        return self.kind == "way"


class OsmNode:
    """
    An OSM node.

    Attributes:
        id (int): The OSM node ID.
        point (shapely.geometry.Point): The position as (longitude, latitude).
        tags (dict): The OSM tags of the node.
    """

    def __init__(self, id, point, tags=None):
        self.id = id
        self.point = point
        self.tags = tags or {}

    def __repr__(self):
        return f"OsmNode({self.id})"


class OsmWay:
    """
    An OSM way.

    Attributes:
        id (int): The OSM way ID.
        nodes (list): The IDs of the nodes of the way, in order.
        points (list): The positions of those nodes (shapely.geometry.Point objects), in the same order.
        tags (dict): The OSM tags of the way.
    """

    def __init__(self, id, nodes, points, tags=None):
        self.id = id
        self.nodes = nodes
        self.points = points
        self.tags = tags or {}

    def __repr__(self):
        return f"OsmWay({self.id}, {len(self.nodes)} nodes)"


class OsmRelation:
    """
    An OSM relation.

    Attributes:
        id (int): The OSM relation ID.
        tags (dict): The OSM tags of the relation.
        members (list): (role, OsmID) pairs, in the order they are listed in the relation.
    """

    def __init__(self, id, tags=None, members=None):
        self.id = id
        self.tags = tags or {}
        self.members = members or []

    def __repr__(self):
        return f"OsmRelation({self.id}, {len(self.members)} members)"


class Document:
    """
    Everything read from one OSM file, indexed by OSM ID.

    Attributes:
        nodes (dict): OSM node ID -> OsmNode.
        ways (dict): OSM way ID -> OsmWay.
        relations (dict): OSM relation ID -> OsmRelation.

    Example:

    ::

        doc = load_osm_document("map_files/osm.xml")
        stop_position = doc.node(4560936658).point
    """

    def __init__(self, nodes=None, ways=None, relations=None):
        self.nodes = nodes or {}
        self.ways = ways or {}
        self.relations = relations or {}

    def node(self, id):
        return self.nodes[id]

    def way(self, id):
        return self.ways[id]

    def add_node(self, node):
        self.nodes[node.id] = node

    def add_way(self, way):
        self.ways[way.id] = way

    def add_relation(self, relation):
        self.relations[relation.id] = relation
