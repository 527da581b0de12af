r"""
This submodule is for spatial calculations (distances, geometry handling).
"""

from shapely.geometry import LineString, MultiPoint

from geopy.distance import geodesic


def find_lane_distance(node_coords):
    """
    Calculate the geodesic distance between two nodes (representing the start and end of a lane).

    Args:
        node_coords (tuple): A tuple containing two coordinates, where each coordinate is a tuple (latitude, longitude).
            Example: [(lat1, lon1), (lat2, lon2)].

    Returns:
        float: The geodesic distance between the two points in meters.

    Example:

    ::

        distance = find_lane_distance([(52.2296756, 21.0122287), (41.8919300, 12.5113300)])
    """
    start_node = node_coords[0]
    next_node = node_coords[1]
    return geodesic(start_node, next_node).meters


def find_points_distance(point1, point2):
    """
    Calculate the geodesic distance between two shapely points given as (longitude, latitude).

    Args:
        point1 (shapely.geometry.Point): The first point.
        point2 (shapely.geometry.Point): The second point.

    Returns:
        float: The distance between the points in meters.

    Example:

    ::

        distance = find_points_distance(lane.first_pt(), goal_pt)
    """
    # Flip latitude and longitude positions, geodesic expects (lat, lon)
    return find_lane_distance([(point1.y, point1.x), (point2.y, point2.x)])


def find_line_length(line):
    """
    Calculate the geodesic length of a polyline given in (longitude, latitude) coordinates.

    Args:
        line (shapely.geometry.LineString): The polyline.

    Returns:
        float: The length of the polyline in meters.

    Example:

    ::

        length = find_line_length(LineString([(24.74, 59.43), (24.75, 59.43)]))
    """
    coords = list(line.coords)
    return sum(
        find_lane_distance([(lat1, lon1), (lat2, lon2)])
        for (lon1, lat1), (lon2, lat2) in zip(coords, coords[1:])
    )


def get_points_center(points):
    """
    Find the average of a list of points.

    Args:
        points (list): A list of shapely.geometry.Point objects.

    Returns:
        shapely.geometry.Point: The point in the middle of all the given points.
    """
    return MultiPoint(points).centroid


def points_match(point1, point2, tolerance):
    """
    Check if two points are the same point, allowing for floating point noise.

    Args:
        point1 (shapely.geometry.Point): The first point.
        point2 (shapely.geometry.Point): The second point.
        tolerance (float): The maximum allowed difference per coordinate.

    Returns:
        bool: True if the points coincide.
    """
    return point1.equals_exact(point2, tolerance)


def join_lines(lines):
    """
    Concatenate polylines that touch end to start into one polyline.
    Repeated consecutive points are only kept once.

    Args:
        lines (list): A list of shapely.geometry.LineString objects.

    Returns:
        shapely.geometry.LineString: The joined polyline.
    """
    coords = []
    for line in lines:
        for coord in line.coords:
            if not coords or coords[-1] != coord:
                coords.append(coord)

    # A single point can't make a LineString
    if len(coords) == 1:
        coords.append(coords[0])
    return LineString(coords)
