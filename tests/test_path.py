"""Tests for the Path model and its validation."""

import pytest

from exceptions import PathValidationError
from models.path import Path, PathStep, validate_steps
from models.turn import TurnID


@pytest.fixture
def path(network):
    return Path(
        network,
        [
            PathStep.lane(1),
            PathStep.turn(TurnID(2, 1, 2)),
            PathStep.lane(2),
            PathStep.turn(TurnID(3, 2, 6)),
            PathStep.lane(6),
        ],
    )


class TestPathStep:
    def test_contraflow_swaps_entry_and_exit(self, network) -> None:
        step = PathStep.contraflow_lane(30)
        assert step.is_contraflow()
        assert step.entry_pt(network).equals(network.lane(30).last_pt())
        assert step.exit_pt(network).equals(network.lane(30).first_pt())

    def test_as_turn(self) -> None:
        assert PathStep.turn(TurnID(2, 1, 2)).as_turn() == TurnID(2, 1, 2)
        with pytest.raises(ValueError):
            PathStep.lane(1).as_turn()


class TestValidation:
    def test_discontinuous_steps_are_rejected(self, network) -> None:
        """Lane 1 ends at intersection 2, lane 6 starts at intersection 3."""
        with pytest.raises(PathValidationError):
            Path(network, [PathStep.lane(1), PathStep.lane(6)])

    def test_wrong_direction_is_rejected(self, network) -> None:
        with pytest.raises(PathValidationError):
            validate_steps(
                network,
                [PathStep.lane(30), PathStep.turn(TurnID(2, 30, 31)), PathStep.lane(31)],
            )

    def test_empty_path_is_rejected(self, network) -> None:
        with pytest.raises(PathValidationError):
            Path(network, [])


class TestPath:
    def test_shift_consumes_from_the_front(self, path) -> None:
        assert path.shift() == PathStep.lane(1)
        assert path.current_step() == PathStep.turn(TurnID(2, 1, 2))
        assert path.next_step() == PathStep.lane(2)
        assert len(path) == 4

    def test_last_step(self, path) -> None:
        while path.isnt_last_step():
            path.shift()
        assert path.is_last_step()
        assert path.current_step() == path.last_step() == PathStep.lane(6)

    def test_num_lanes(self, path) -> None:
        assert path.num_lanes() == 3

    def test_add(self, network) -> None:
        path = Path(network, [PathStep.lane(1)])
        path.add(PathStep.turn(TurnID(2, 1, 2)))
        assert path.last_step() == PathStep.turn(TurnID(2, 1, 2))

    def test_trace(self, path, network) -> None:
        trace = path.trace(network)
        assert list(trace.coords) == [(0.0, 0.0), (0.001, 0.0), (0.002, 0.0), (0.003, 0.0)]

    def test_trace_of_contraflow_lane_runs_backwards(self, network) -> None:
        path = Path(network, [PathStep.contraflow_lane(30)])
        assert list(path.trace(network).coords) == [(0.001, 0.0), (0.0, 0.0)]
