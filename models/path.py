r"""
This submodule contains the Path class, one concrete route through the lane network,
and the steps it is made of.
"""

from collections import deque
from enum import Enum
from typing import NamedTuple

from shapely.geometry import LineString

from config import POINT_EQUALITY_TOLERANCE
from exceptions import PathValidationError
from geo_operations.geo_utils import join_lines, points_match


class StepKind(Enum):
    LANE = "Lane"
    # Sidewalks only!
    CONTRAFLOW_LANE = "ContraflowLane"
    TURN = "Turn"


class PathStep(NamedTuple):
    """
    One atomic unit of travel: a lane in its original direction, a lane against
    its direction, or a turn.

    Example:

    ::

        steps = [PathStep.lane(3), PathStep.turn(TurnID(11, 3, 4)), PathStep.contraflow_lane(4)]
    """

    kind: StepKind
    id: object

    @classmethod
    def lane(cls, lane_id):
        return cls(StepKind.LANE, lane_id)

    @classmethod
    def contraflow_lane(cls, lane_id):
        return cls(StepKind.CONTRAFLOW_LANE, lane_id)

    @classmethod
    def turn(cls, turn_id):
        return cls(StepKind.TURN, turn_id)

    def is_contraflow(self):
        return self.kind is StepKind.CONTRAFLOW_LANE

    def is_turn(self):
        return self.kind is StepKind.TURN

    def as_turn(self):
        if not self.is_turn():
            raise ValueError(f"{self} isn't a turn")
        return self.id

    def entry_pt(self, network):
        """Where an agent is when it starts this step."""
        if self.kind is StepKind.LANE:
            return network.lane(self.id).first_pt()
        if self.kind is StepKind.CONTRAFLOW_LANE:
            return network.lane(self.id).last_pt()
        return network.turn(self.id).first_pt()

    def exit_pt(self, network):
        """Where an agent is when it finishes this step."""
        if self.kind is StepKind.LANE:
            return network.lane(self.id).last_pt()
        if self.kind is StepKind.CONTRAFLOW_LANE:
            return network.lane(self.id).first_pt()
        return network.turn(self.id).last_pt()

    def geometry(self, network):
        """The line an agent follows during this step, in travel order."""
        if self.kind is StepKind.TURN:
            return network.turn(self.id).geometry
        line = network.lane(self.id).geometry
        if self.kind is StepKind.CONTRAFLOW_LANE:
            return LineString(list(line.coords)[::-1])
        return line

    def __repr__(self):
        return f"{self.kind.value}({self.id})"


def validate_steps(network, steps):
    """
    Make sure every step ends where the next one begins.

    Args:
        network (graph.network.RoadNetwork): The network the steps refer to.
        steps (list): A list of PathStep objects.

    Raises:
        PathValidationError: If a step doesn't start where the previous one ended. That is
            a bug in the pathfinding, not bad input.
    """
    for step1, step2 in zip(steps, steps[1:]):
        from_pt = step1.exit_pt(network)
        to_pt = step2.entry_pt(network)
        if not points_match(from_pt, to_pt, POINT_EQUALITY_TOLERANCE):
            raise PathValidationError(
                f"pathfind() returned path that warps {from_pt.distance(to_pt)} "
                f"from {step1} to {step2}"
            )


class Path:
    """
    An ordered sequence of PathSteps, consumed from the front by whoever travels along it.

    A path is never empty when created, and it starts and ends with a lane step.

    Example:

    ::

        path = Path(network, [PathStep.lane(3), PathStep.turn(TurnID(11, 3, 4)), PathStep.lane(4)])
        while path.isnt_last_step():
            step = path.shift()
    """

    def __init__(self, network, steps):
        """
        Initialize a Path instance. The steps are validated against the network.

        Args:
            network (graph.network.RoadNetwork): The network the steps refer to.
            steps (list): A list of PathStep objects.
        """
        if not steps:
            raise PathValidationError("pathfind() returned an empty path")
        validate_steps(network, steps)
        self.steps = deque(steps)

    def num_lanes(self):
        return sum(1 for step in self.steps if not step.is_turn())

    def is_last_step(self):
        return len(self.steps) == 1

    def isnt_last_step(self):
        return len(self.steps) > 1

    def shift(self):
        """Remove and return the current step."""
        return self.steps.popleft()

    def add(self, step):
        self.steps.append(step)

    def current_step(self):
        return self.steps[0]

    def next_step(self):
        return self.steps[1]

    def last_step(self):
        return self.steps[-1]

    def trace(self, network):
        """
        Build the line covering the remaining steps of the path.

        Args:
            network (graph.network.RoadNetwork): The network the steps refer to.

        Returns:
            shapely.geometry.LineString: The geometry of the whole remaining route.
        """
        return join_lines([step.geometry(network) for step in self.steps])

    def __len__(self):
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    def __eq__(self, other):
        return isinstance(other, Path) and list(self.steps) == list(other.steps)

    def __repr__(self):
        return f"Path({list(self.steps)})"
