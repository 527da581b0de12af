r"""
This submodule creates the lane network.
"""

from shapely.geometry import LineString

from exceptions import DataLoadError
from file_io.loader import load_geojson
from graph.data_preprocessor import preprocess_intersections, preprocess_lanes
from graph.network import RoadNetwork
from models.turn import Turn, TurnID


def make_turn(parent, src_lane, dst_lane):
    """
    Create the turn between two lanes at an intersection.

    The turn starts where the source lane touches the intersection and ends where the
    destination lane touches it.

    Args:
        parent (int): The ID of the intersection.
        src_lane (Lane): The lane the turn leaves.
        dst_lane (Lane): The lane the turn enters.

    Returns:
        Turn: The turn.

    Raises:
        DataLoadError: If one of the lanes doesn't touch the intersection.

    Example:

    ::

        turn = make_turn(11, lane_3, lane_4)
    """
    try:
        start = src_lane.endpoint(parent)
        end = dst_lane.endpoint(parent)
    except ValueError as err:
        raise DataLoadError(f"Can't turn from {src_lane} to {dst_lane} at {parent}: {err}") from err

    return Turn(TurnID(parent, src_lane.id, dst_lane.id), LineString([start, end]))


def create_network(lanes, intersections):
    """
    Create the lane network, with one turn for every movement of every intersection.

    Args:
        lanes (list): A list of Lane objects.
        intersections (list): A list of Intersection objects.

    Returns:
        RoadNetwork: The network.

    Raises:
        DataLoadError: If a movement refers to an unknown lane.
    """
    lanes_by_id = {lane.id: lane for lane in lanes}
    turns = []

    for intersection in intersections:
        for src, dst in intersection.movements:
            if src not in lanes_by_id or dst not in lanes_by_id:
                raise DataLoadError(
                    f"Intersection {intersection.id} has a movement Lane #{src} -> Lane #{dst} "
                    "between unknown lanes"
                )
            turns.append(make_turn(intersection.id, lanes_by_id[src], lanes_by_id[dst]))

    return RoadNetwork(lanes, turns, intersections)


def build_road_network(lane_geojson_file, intersection_geojson_file):
    """
    Build the lane network from GeoJSON files.

    Args:
        lane_geojson_file (str): Path to the GeoJSON file containing lane data.
        intersection_geojson_file (str): Path to the GeoJSON file containing intersection data.

    Returns:
        RoadNetwork: The network.
    """
    lanes = preprocess_lanes(load_geojson(lane_geojson_file))
    intersections = preprocess_intersections(load_geojson(intersection_geojson_file))

    return create_network(lanes, intersections)
