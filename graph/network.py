r"""
This submodule contains the read-only view of the lane network used by the pathfinding.
"""

import networkx as nx

from exceptions import DataLoadError


class RoadNetwork:
    """
    Lanes and the turns between them.

    Lanes are the nodes of a directed multigraph and turns are its edges, keyed by TurnID,
    so two lanes can be connected by several turns at different intersections.

    Attributes:
        G (networkx.MultiDiGraph): Lane ID -> lane ID edges, each carrying its Turn as the "turn" attribute.
        intersections (dict): Intersection ID -> Intersection, if the network was built from intersection data.

    Example:

    ::

        network = RoadNetwork(lanes, turns)
        for turn, next_lane in network.turns_from(lane_id):
            print(turn.parent, next_lane.id)
    """

    def __init__(self, lanes, turns, intersections=None):
        """
        Initialize a RoadNetwork instance.

        Args:
            lanes (iterable): Lane objects.
            turns (iterable): Turn objects, connecting lanes from the `lanes` argument.
            intersections (iterable, optional): Intersection objects.

        Raises:
            DataLoadError: If a turn refers to a lane that isn't in the network.
        """
        self.G = nx.MultiDiGraph()
        self._turns = {}
        self.intersections = {i.id: i for i in intersections or []}
        self._lane_ends = set()

        for lane in lanes:
            self.G.add_node(lane.id, lane=lane)
            self._lane_ends.update((lane.src_i, lane.dst_i))

        for turn in turns:
            if turn.src not in self.G or turn.dst not in self.G:
                raise DataLoadError(f"{turn} refers to a lane that isn't in the network")
            self._turns[turn.id] = turn
            self.G.add_edge(turn.src, turn.dst, key=turn.id, turn=turn)

    def lane(self, lane_id):
        return self.G.nodes[lane_id]["lane"]

    def turn(self, turn_id):
        return self._turns[turn_id]

    def lanes(self):
        return [data["lane"] for _, data in self.G.nodes(data=True)]

    def turns(self):
        return list(self._turns.values())

    def turns_from(self, lane_id):
        """
        Get every turn leaving a lane, together with the lane it leads to.

        Sidewalks can be left from either end, so their turns may belong to both of their intersections.

        Args:
            lane_id (int): The ID of the lane.

        Returns:
            list: (Turn, Lane) tuples, in the order the turns were added to the network.
        """
        return [
            (data["turn"], self.lane(dst))
            for _, dst, data in self.G.out_edges(lane_id, data=True)
        ]

    def intersection_exists(self, intersection_id):
        """
        Check if an ID belongs to an intersection of the network, either a known
        Intersection or an endpoint of some lane.
        """
        return intersection_id in self.intersections or intersection_id in self._lane_ends

    def __repr__(self):
        return f"RoadNetwork({self.G.number_of_nodes()} lanes, {self.G.number_of_edges()} turns)"
