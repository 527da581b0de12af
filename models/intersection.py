r"""
This submodule contains the Intersection class.
"""


class Intersection:
    """
    Represents an intersection with its unique ID, the turns allowed inside it, geometry, and type.

    Attributes:
        id (int): The unique identifier of the intersection.
        movements (list): A list of (source lane ID, destination lane ID) pairs that can be turned between.
        geometry (shapely.geometry.base.BaseGeometry): A Shapely geometry object representing the intersection,
            which can be a Polygon, Point, or any geometry derived from Shapely's BaseGeometry class.
        int_type (str): The kind of the intersection ("StopSign", "TrafficSignal", "MapEdge", ...).

    Example:

    ::

        intersection = Intersection(
            id=0,
            movements=[(18005, 1), (18005, 11508)],
            geometry=some_polygon,
            int_type="StopSign"
        )
    """

    def __init__(self, id, movements, geometry, int_type):
        """
        Initialize an Intersection instance.

        Args:
            id (int): The unique identifier of the intersection.
            movements (list): A list of (source lane ID, destination lane ID) pairs.
            geometry (shapely.geometry.base.BaseGeometry): A Shapely geometry object representing the intersection.
            int_type (str): The kind of the intersection.
        """
        self.id = id
        self.movements = movements
        self.geometry = geometry
        self.int_type = int_type

    def __hash__(self):
        """
        Generate a hash for the intersection based on its unique ID.
        """
        return hash(self.id)

    def __eq__(self, other):
        """
        Intersections are equal if their IDs are equal.
        """
        return isinstance(other, Intersection) and self.id == other.id

    def __repr__(self):
        return f"Intersection({self.id}, {self.int_type}, {len(self.movements)} movements)"
