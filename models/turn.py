r"""
This submodule contains the Turn class.
"""

from typing import NamedTuple

from shapely.geometry import Point


class TurnID(NamedTuple):
    """A turn is identified by the intersection it belongs to and the two lanes it connects."""

    parent: int
    src: int
    dst: int


class Turn:
    """
    Represents a directed connection between two lanes at a shared intersection.

    Attributes:
        id (TurnID): The identifier of the turn.
        geometry (shapely.geometry.LineString): The line from the end of the source lane
            to the start of the destination lane.

    Example:

    ::

        turn = Turn(TurnID(parent=11, src=3, dst=4), LineString([(24.7461, 59.4372), (24.7462, 59.4373)]))
    """

    def __init__(self, id, geometry):
        self.id = id
        self.geometry = geometry

    @property
    def parent(self):
        return self.id.parent

    @property
    def src(self):
        return self.id.src

    @property
    def dst(self):
        return self.id.dst

    def first_pt(self):
        return Point(self.geometry.coords[0])

    def last_pt(self):
        return Point(self.geometry.coords[-1])

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        return isinstance(other, Turn) and self.id == other.id

    def __repr__(self):
        return f"Turn(Lane #{self.src} -> Lane #{self.dst} at {self.parent})"
