r"""
This module contains the exceptions raised by the pathfinding and transit import code.
"""


class RoutingError(Exception):
    """Base exception for the routing engine."""

    pass


class InvalidRequestError(RoutingError):
    """Raised when a pathfinding request breaks a precondition the caller is responsible for."""

    pass


class InvariantViolation(RoutingError):
    """Raised when the search or the route reconstruction produced something impossible."""

    pass


class PathValidationError(InvariantViolation):
    """Raised when two consecutive path steps don't touch."""

    pass


class MissingTurnError(InvariantViolation):
    """Raised when no turn connects two lanes that are adjacent in a searched lane chain."""

    pass


class TransitRouteError(RoutingError):
    """
    Raised when a transit route can't be imported. The route should be skipped,
    the rest of the import can continue.
    """

    pass


class GlueRouteError(TransitRouteError):
    """Raised when the ways of a route relation can't be stitched into one node chain."""

    pass


class StopSnapError(TransitRouteError):
    """Raised when a stop of a route can't be matched to a road segment and direction."""

    pass


class DataLoadError(RoutingError):
    """Raised when an input file is malformed."""

    pass
