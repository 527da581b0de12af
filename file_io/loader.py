r"""
This submodule deals with loading the files.
"""

import logging
import os
import xml.etree.ElementTree as ET

import geojson
from shapely.geometry import MultiPolygon, Point, Polygon, shape

from exceptions import DataLoadError
from models.osm import Document, OsmID, OsmNode, OsmRelation, OsmWay

logger = logging.getLogger(__name__)


def _read_tags(elem):
    return {tag.get("k"): tag.get("v") for tag in elem.findall("tag")}


def load_osm_document(file_path):
    """
    Load and parse an OSM XML file into a Document of nodes, ways and relations.

    Ways referencing nodes that are not in the file are dropped, which happens when the
    file is a clipped extract.

    Args:
        file_path (str): The path to the OSM XML file to be parsed.

    Returns:
        Document: Every node, way and relation of the file, indexed by OSM ID.

    Example:

    ::

        doc = load_osm_document("path/to/osm_file.xml")
    """
    doc = Document()
    dropped_ways = 0

    # Use `iterparse` to load the XML incrementally
    context = ET.iterparse(file_path, events=("end",))
    for _, elem in context:
        if elem.tag == "node":
            node_id = int(elem.get("id"))
            point = Point(float(elem.get("lon")), float(elem.get("lat")))
            doc.add_node(OsmNode(node_id, point, _read_tags(elem)))
        elif elem.tag == "way":
            way_id = int(elem.get("id"))
            node_ids = [int(nd.get("ref")) for nd in elem.findall("nd")]
            if len(node_ids) >= 2 and all(n in doc.nodes for n in node_ids):
                points = [doc.nodes[n].point for n in node_ids]
                doc.add_way(OsmWay(way_id, node_ids, points, _read_tags(elem)))
            else:
                dropped_ways += 1
        elif elem.tag == "relation":
            members = [
                (member.get("role", ""), OsmID(member.get("type"), int(member.get("ref"))))
                for member in elem.findall("member")
            ]
            doc.add_relation(OsmRelation(int(elem.get("id")), _read_tags(elem), members))
        else:
            continue
        # Clear the element from memory to save space
        elem.clear()

    if dropped_ways:
        logger.debug("Dropped %d ways with too few nodes or nodes missing from %s", dropped_ways, file_path)

    return doc


def load_geojson(file_path):
    """
    Load and parse a GeoJSON file.

    Args:
        file_path (str): The path to the GeoJSON file to be loaded.

    Returns:
        dict: The parsed GeoJSON data as a dictionary.

    Example:

    ::

        geojson_data = load_geojson("path/to/geojson/file.geojson")
    """
    with open(file_path, "r") as f:
        return geojson.load(f)


def load_boundary(file_path):
    """
    Load the boundary of the imported area from a GeoJSON file.

    The first Polygon or MultiPolygon feature is used.

    Args:
        file_path (str): The path to the GeoJSON file.

    Returns:
        shapely.geometry.Polygon or shapely.geometry.MultiPolygon: The boundary.

    Raises:
        DataLoadError: If the file has no polygon.

    Example:

    ::

        boundary = load_boundary("map_files/boundary.geojson")
        boundary.contains(stop.point)
    """
    data = load_geojson(file_path)
    features = data["features"] if "features" in data else [data]

    for feature in features:
        geometry = feature.get("geometry")
        if geometry is None:
            continue
        boundary = shape(geometry)
        if isinstance(boundary, (Polygon, MultiPolygon)):
            return boundary

    raise DataLoadError(f"{file_path} has no polygon to use as the boundary")


def check_file_exists(file_path):
    """
    Check if a file exists at the specified path.

    Args:
        file_path (str): The path to the file to check.

    Returns:
        bool: True if the file exists, False otherwise.

    Example:

    ::

        if check_file_exists("path/to/file.txt"):
            print("File exists!")
        else:
            print("File not found!")
    """
    return os.path.isfile(file_path)
