r"""
This submodule finds routes between two positions on the lane network.

The search runs over lanes: turns are only used to know which lanes follow which.
Once the goal lane is reached, the chain of lanes is converted into the steps of a Path.
"""

import heapq
import logging
from typing import Protocol

from exceptions import InvalidRequestError, InvariantViolation, MissingTurnError
from geo_operations.geo_utils import find_points_distance
from models.lane import LaneType
from models.path import Path, PathStep

logger = logging.getLogger(__name__)


class TraversalPolicy(Protocol):
    """
    Decides which lanes the search may continue to, what that costs, and how far a lane
    is estimated to be from the goal.
    """

    def expand(self, network, current):
        """Return (next lane ID, cost) pairs for the lanes reachable from the current lane."""
        ...

    def heuristic(self, network, lane_id):
        """Return an estimate of the cost from the lane to the goal that never overestimates."""
        ...


class ShortestDistance:
    """
    Cost is the length of the lanes travelled, the heuristic is the straight-line distance
    from the start of a lane to the goal. Bike lanes are only used by bikes.
    """

    def __init__(self, goal_pt, is_bike=False):
        self.goal_pt = goal_pt
        self.is_bike = is_bike

    def expand(self, network, current):
        current_length = network.lane(current).length
        return [
            (next_lane.id, current_length)
            for _, next_lane in network.turns_from(current)
            if self.is_bike or next_lane.lane_type != LaneType.BIKING
        ]

    def heuristic(self, network, lane_id):
        return find_points_distance(network.lane(lane_id).first_pt(), self.goal_pt)


class UsingTransit:
    """
    Cost is the distance spent walking. Riding a vehicle between two stops is meant to
    be free, which is unrealistic, but a good way to start exercising pedestrians using transit.

    There's no heuristic, because with free edges it's hard to make one admissible.
    """

    def expand(self, network, current):
        current_length = network.lane(current).length
        # TODO Add the sidewalks of connected bus stops here once PathStep can express riding a bus.
        return [(next_lane.id, current_length) for _, next_lane in network.turns_from(current)]

    def heuristic(self, network, lane_id):
        return 0.0


class Pathfinder:
    """
    A* search over the lanes of a network.

    Example:

    ::

        path = Pathfinder.shortest_distance(network, start=3, start_dist=5.0, end=42, end_dist=10.0)
        if path is None:
            print("No route")
    """

    def __init__(self, network, policy):
        """
        Initialize a Pathfinder instance.

        Args:
            network (graph.network.RoadNetwork): The network to search.
            policy (TraversalPolicy): How lanes are expanded and estimated.
        """
        self.network = network
        self.policy = policy

    @classmethod
    def shortest_distance(cls, network, start, start_dist, end, end_dist, is_bike=False):
        """
        Find the shortest route between two positions on lanes.

        Args:
            network (graph.network.RoadNetwork): The network to search.
            start (int): The ID of the lane to start from.
            start_dist (float): How far along the start lane the route begins, in meters.
            end (int): The ID of the lane to end on.
            end_dist (float): How far along the end lane the route ends, in meters.
            is_bike (bool, optional): If True, bike lanes can be used. Default is False.

        Returns:
            Path or None: The route, or None if the end can't be reached.
        """
        goal_pt = network.lane(end).first_pt()
        return cls(network, ShortestDistance(goal_pt, is_bike)).pathfind(
            start, start_dist, end, end_dist
        )

    @classmethod
    def using_transit(cls, network, start, start_dist, end, end_dist):
        """
        Find the route between two positions on sidewalks that needs the least walking.

        Args are the same as in shortest_distance, without is_bike.

        Returns:
            Path or None: The route, or None if the end can't be reached.
        """
        return cls(network, UsingTransit()).pathfind(start, start_dist, end, end_dist)

    def pathfind(self, start, start_dist, end, end_dist):
        """
        Run the search.

        Args:
            start (int): The ID of the lane to start from.
            start_dist (float): How far along the start lane the route begins, in meters.
            end (int): The ID of the lane to end on.
            end_dist (float): How far along the end lane the route ends, in meters.

        Returns:
            Path or None: The route, inclusive of the start and end lanes, or None if there's no route.

        Raises:
            InvalidRequestError: If the start and end lanes are of different types, or if the route
                would have to go backwards along a lane that isn't a sidewalk.
        """
        start_lane = self.network.lane(start)
        end_lane = self.network.lane(end)
        if start_lane.lane_type != end_lane.lane_type:
            raise InvalidRequestError(
                f"Can't route from {start_lane} to {end_lane}, the lane types differ"
            )

        if start == end:
            if start_dist > end_dist:
                if not start_lane.lane_type.is_bidirectional:
                    raise InvalidRequestError(
                        f"Can't go backwards from {start_dist} to {end_dist} on {start_lane}"
                    )
                return Path(self.network, [PathStep.contraflow_lane(start)])
            return Path(self.network, [PathStep.lane(start)])

        # Ties on cost are broken by the lane ID, so the result is deterministic.
        queue = [(0.0, start, 0.0)]
        backrefs = {start: None}
        expanded = 0

        while queue:
            _, current, cost_sofar = heapq.heappop(queue)

            # Found it, now produce the path
            if current == end:
                logger.debug(
                    "Found route from lane %s to lane %s after expanding %d lanes",
                    start,
                    end,
                    expanded,
                )
                return lanes_to_path(self.network, self._follow_backrefs(backrefs, end))

            expanded += 1
            for next_lane, cost in self.policy.expand(self.network, current):
                if next_lane not in backrefs:
                    backrefs[next_lane] = current
                    next_cost = cost_sofar + cost
                    priority = next_cost + self.policy.heuristic(self.network, next_lane)
                    heapq.heappush(queue, (priority, next_lane, next_cost))

        logger.debug("No route from lane %s to lane %s", start, end)
        return None

    @staticmethod
    def _follow_backrefs(backrefs, end):
        lanes = []
        lookup = end
        while lookup is not None:
            lanes.append(lookup)
            lookup = backrefs[lookup]
        lanes.reverse()
        return lanes


def lanes_to_path(network, lanes):
    """
    Convert a chain of lanes found by the search into the steps of a path.

    Every pair of consecutive lanes is connected by a turn. A lane is crossed against its
    direction when the turn into it arrives at its destination end. When the turn out of a
    lane belongs to the same intersection as the turn into it, the lane isn't crossed at all.

    Args:
        network (graph.network.RoadNetwork): The network the lanes belong to.
        lanes (list): At least two lane IDs, from start to end.

    Returns:
        Path: The validated path.

    Raises:
        InvariantViolation: If the chain is too short.
        MissingTurnError: If two consecutive lanes aren't connected by a turn.

    Example:

    ::

        path = lanes_to_path(network, [3, 4, 9])
    """
    if len(lanes) < 2:
        raise InvariantViolation(f"Can't make a path out of the lane chain {lanes}")

    first_lane = network.lane(lanes[0])
    current_turn = pick_turn(network, first_lane.id, lanes[1], first_lane.dst_i)
    if current_turn is None and first_lane.lane_type.is_bidirectional:
        current_turn = pick_turn(network, first_lane.id, lanes[1], first_lane.src_i)
    if current_turn is None:
        raise MissingTurnError(f"No turn from {first_lane.id} to {lanes[1]}")

    steps = [lane_step(first_lane.id, contraflow=current_turn.parent != first_lane.dst_i)]
    steps.append(PathStep.turn(current_turn.id))

    for next_lane in lanes[2:]:
        lane = network.lane(current_turn.dst)

        next_turn = pick_turn(network, lane.id, next_lane, current_turn.parent)
        if next_turn is None:
            contraflow = leads_to_end_of_lane(current_turn, lane)
            endpoint = lane.src_i if contraflow else lane.dst_i
            next_turn = pick_turn(network, lane.id, next_lane, endpoint)
            if next_turn is None:
                raise MissingTurnError(f"No turn from {lane.id} ({endpoint} end) to {next_lane}")
            steps.append(lane_step(lane.id, contraflow))
        # Otherwise both turns are at the same intersection, so don't even cross the lane!
        steps.append(PathStep.turn(next_turn.id))

        current_turn = next_turn

    last_lane = network.lane(current_turn.dst)
    steps.append(lane_step(last_lane.id, leads_to_end_of_lane(current_turn, last_lane)))

    return Path(network, steps)


def pick_turn(network, from_lane, to_lane, endpoint):
    """
    Find the turn from one lane to another at a given intersection.

    Returns:
        Turn or None: The turn, or None if the lanes aren't connected there.
    """
    for turn, _ in network.turns_from(from_lane):
        if turn.parent == endpoint and turn.dst == to_lane:
            return turn
    return None


def leads_to_end_of_lane(turn, lane):
    """True if the turn enters the lane at its destination end, so the lane is walked backwards."""
    return turn.parent != lane.src_i


def lane_step(lane_id, contraflow):
    return PathStep.contraflow_lane(lane_id) if contraflow else PathStep.lane(lane_id)
