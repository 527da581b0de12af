# Configuration file for file paths and constants used throughout the application.

import os

# Paths, from where to load the input files (recommended to leave the folder names as they are).
# Folder "map_files" is expected to hold an OSM extract, the boundary of the imported area,
# and the lane / intersection GeoJSON exports of the road network.
OSM_XML_FILE_PATH = "map_files/osm.xml"
BOUNDARY_GEOJSON_FILE_PATH = "map_files/boundary.geojson"
LANES_GEOJSON_FILE_PATH = "map_files/lanes.geojson"
INTERSECTIONS_GEOJSON_FILE_PATH = "map_files/intersections.geojson"

# Two path step endpoints closer than this (in coordinate units) are considered the same point.
POINT_EQUALITY_TOLERANCE = 1e-9

# Relation route types that are not transit, skipped without a notice.
IRRELEVANT_ROUTE_TYPES = {"road", "bicycle", "foot", "railway"}

# Logging level for the batch entry point, can be overridden from the environment.
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
