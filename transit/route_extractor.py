r"""
This submodule turns OSM route relations into transit routes.
"""

import logging

from config import IRRELEVANT_ROUTE_TYPES
from exceptions import GlueRouteError, InvariantViolation, StopSnapError
from geo_operations.geo_utils import get_points_center
from models.osm import GTFS_TRIP_MARKER, NAME, REF, ROUTE
from models.transit import RawBusRoute, RawBusStop
from transit.stop_snapper import snap_bus_stops

logger = logging.getLogger(__name__)


def extract_route(rel_id, rel, doc, boundary):
    """
    Build a transit route from an OSM route relation.

    Stops are kept in relation order. Platforms are matched to stops by name only, so a
    platform named differently from its stop is ignored, and when several stops share a
    name only the first gets the platform. Stops outside the boundary are removed: once the
    first stop inside the boundary is found, the following in-bound stops are kept until the
    route leaves the boundary again, everything after that is dropped, even if the route
    comes back in. This avoids leaving gaps in the route.

    Args:
        rel_id (int): The OSM ID of the relation.
        rel (OsmRelation): The relation.
        doc (Document): The OSM document the relation members are looked up in.
        boundary (shapely.geometry.Polygon): The boundary of the imported area.

    Returns:
        RawBusRoute or None: The route, or None if the relation isn't a usable bus or light rail route.

    Example:

    ::

        route = extract_route(rel_id, doc.relations[rel_id], doc, boundary)
    """
    full_name = rel.tags.get(NAME)
    if not full_name:
        return None
    short_name = rel.tags.get(REF) or full_name

    route_type = rel.tags.get(ROUTE)
    if route_type is None:
        return None
    if route_type == "bus":
        is_bus = True
    elif route_type == "light_rail":
        is_bus = False
    else:
        if route_type not in IRRELEVANT_ROUTE_TYPES:
            logger.info("Skipping route %s of unknown type %s: %s", full_name, route_type, rel_id)
        return None

    # Gather stops in order. Platforms may exist or not; match them up by name.
    stops = []
    platforms = {}
    all_ways = []
    for role, member in rel.members:
        if role == "stop":
            if member.is_node() and member.id in doc.nodes:
                node = doc.node(member.id)
                stops.append(
                    RawBusStop(
                        name=node.tags.get(NAME, f"stop #{len(stops) + 1}"),
                        vehicle_pos=(member.id, node.point),
                    )
                )
        elif role == "platform":
            if member.is_node() and member.id in doc.nodes:
                node = doc.node(member.id)
                platforms[node.tags.get(NAME, f"stop #{len(platforms) + 1}")] = node.point
            elif member.is_way() and member.id in doc.ways:
                way = doc.way(member.id)
                platforms[way.tags.get(NAME, f"stop #{len(platforms) + 1}")] = get_points_center(
                    way.points
                )
        elif member.is_way():
            all_ways.append(member.id)

    for stop in stops:
        stop.ped_pos = platforms.pop(stop.name, None)

    try:
        all_pts = glue_route(all_ways, doc)
    except GlueRouteError as err:
        logger.warning("Skipping route %s (%s): %s", rel_id, full_name, err)
        return None

    keep_stops = []
    for stop in stops:
        if boundary.contains(stop.point):
            keep_stops.append(stop)
        elif keep_stops:
            # That's the end of them
            break
    logger.info("Kept %d / %d contiguous stops from route %s", len(keep_stops), len(stops), rel_id)

    # Routes with only 1 stop are pretty much useless, and make matching the route to the border confusing.
    if len(keep_stops) < 2:
        return None

    return RawBusRoute(
        full_name=full_name,
        short_name=short_name,
        is_bus=is_bus,
        osm_rel_id=rel_id,
        stops=keep_stops,
        all_pts=all_pts,
        gtfs_trip_marker=rel.tags.get(GTFS_TRIP_MARKER),
    )


def glue_route(all_ways, doc):
    """
    Figure out the actual order of nodes in a route.

    The ways are assumed to be listed in order, but each of them may be drawn in either
    direction. Every pair of neighbouring ways is matched up by their endpoints.

    Args:
        all_ways (list): The OSM way IDs of the route, in relation order.
        doc (Document): The OSM document the ways are looked up in.

    Returns:
        list: The OSM node IDs of the route, in travel order. The node where two ways meet
            appears once.

    Raises:
        GlueRouteError: If there are fewer than two ways, a way is missing from the document
            or has no nodes, or two neighbouring ways don't share an endpoint.

    Example:

    ::

        nodes = glue_route([way_a, way_b, way_c], doc)
    """
    if not all_ways:
        raise GlueRouteError("route has no ways")
    if len(all_ways) == 1:
        raise GlueRouteError(f"route only has one way: {all_ways[0]}")
    for way_id in all_ways:
        if way_id not in doc.ways:
            raise GlueRouteError(f"way {way_id} is missing from the document")
        if not doc.way(way_id).nodes:
            raise GlueRouteError(f"way {way_id} has no nodes")

    nodes = []
    extra = []
    for way_id1, way_id2 in zip(all_ways, all_ways[1:]):
        nodes1, nodes2 = _orient_pair(doc.way(way_id1).nodes, doc.way(way_id2).nodes)
        if nodes1 is None:
            raise GlueRouteError(f"gap between {way_id1} and {way_id2}")

        if nodes:
            last = nodes.pop()
            if last != nodes1[0]:
                raise GlueRouteError(
                    f"{way_id1} and {way_id2} match up, but last piece was {last}"
                )
        nodes.extend(nodes1)
        extra = nodes2

    # And the last lil bit
    if nodes.pop() != extra[0]:
        raise InvariantViolation(f"The last ways of {all_ways} don't meet")
    nodes.extend(extra)
    return nodes


def _orient_pair(nodes1, nodes2):
    """
    Orient two ways so the first one ends where the second one starts.

    Returns:
        tuple: The oriented node lists, or (None, None) if the ways don't share an endpoint.
    """
    if nodes1[0] == nodes2[0]:
        return nodes1[::-1], list(nodes2)
    if nodes1[0] == nodes2[-1]:
        return nodes1[::-1], nodes2[::-1]
    if nodes1[-1] == nodes2[0]:
        return list(nodes1), list(nodes2)
    if nodes1[-1] == nodes2[-1]:
        return list(nodes1), nodes2[::-1]
    return None, None


def extract_all_routes(doc, boundary, road_index):
    """
    Extract every transit route of a document and snap their stops to roads.

    Routes that can't be glued or snapped are logged and skipped.

    Args:
        doc (Document): The OSM document.
        boundary (shapely.geometry.Polygon): The boundary of the imported area.
        road_index (transit.road_index.RoadIndex): The roads the stops are snapped to.

    Returns:
        tuple: A tuple containing:
            - routes (list): The snapped RawBusRoute objects, in relation ID order.
            - skipped (int): How many transit routes were dropped because they couldn't be snapped.

    Example:

    ::

        routes, skipped = extract_all_routes(doc, boundary, build_road_index(doc))
    """
    routes = []
    skipped = 0

    for rel_id in sorted(doc.relations):
        route = extract_route(rel_id, doc.relations[rel_id], doc, boundary)
        if route is None:
            continue
        try:
            routes.append(snap_bus_stops(route, road_index))
        except StopSnapError as err:
            logger.warning("Skipping route %s (%s): %s", rel_id, route.full_name, err)
            skipped += 1

    return routes, skipped
