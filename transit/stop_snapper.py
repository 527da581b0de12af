r"""
This submodule matches the stops of a transit route to the road segments they are on.
"""

import logging

from exceptions import StopSnapError

logger = logging.getLogger(__name__)


def snap_bus_stops(route, road_index):
    """
    For every stop, figure out what road segment and direction it matches up to.

    The nearest intersections before and after the stop are looked up in the node chain
    of the route. The road the stop lies on is travelled forwards if its intersections
    come in the same order, backwards if they come reversed.

    Args:
        route (RawBusRoute): The route, as returned by extract_route.
        road_index (transit.road_index.RoadIndex): Knows the intersections and which road a point lies on.

    Returns:
        RawBusRoute: A copy of the route with matched_road set on every stop.

    Raises:
        StopSnapError: If a stop is right at an intersection, isn't on the route or on any road,
            or if the road doesn't connect the intersections around the stop.

    Example:

    ::

        route = snap_bus_stops(route, build_road_index(doc))
        road, forwards = route.stops[0].matched_road
    """
    route = route.copy()

    for stop in route.stops:
        # TODO Handle stops placed on an intersection node, example https://www.openstreetmap.org/node/4560936658
        if road_index.intersection_exists(stop.node_id):
            raise StopSnapError(
                f"{route.osm_rel_id} has a stop {stop.node_id} right at an intersection, skipping"
            )

        try:
            idx_in_route = route.all_pts.index(stop.node_id)
        except ValueError:
            raise StopSnapError(
                f"{route.osm_rel_id} has a stop {stop.node_id} that isn't along the route"
            ) from None

        # Scan backwards and forwards in the route for the nearest intersections.
        i1 = next(
            (i for i in reversed(route.all_pts[: idx_in_route + 1]) if road_index.intersection_exists(i)),
            None,
        )
        i2 = next(
            (i for i in route.all_pts[idx_in_route:] if road_index.intersection_exists(i)),
            None,
        )
        if i1 is None or i2 is None:
            raise StopSnapError(
                f"{route.osm_rel_id} has a stop {stop.node_id} with no intersection on one side"
            )

        road = road_index.road_at(stop.point)
        if road is None:
            raise StopSnapError(f"{route.osm_rel_id} has a stop {stop.node_id} that isn't on any road")

        if (road.i1, road.i2) == (i1, i2):
            fwds = True
        elif (road.i1, road.i2) == (i2, i1):
            fwds = False
        else:
            raise StopSnapError(
                f"Can't figure out where {stop.node_id} is along route. {i1}, {i2}. "
                f"{idx_in_route} of {len(route.all_pts)}"
            )

        stop.matched_road = (road, fwds)
        logger.debug("%s matched to %s, fwds=%s", stop.node_id, road, fwds)

    return route
