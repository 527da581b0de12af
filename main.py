import logging
import time

from config import (
    BOUNDARY_GEOJSON_FILE_PATH,
    INTERSECTIONS_GEOJSON_FILE_PATH,
    LANES_GEOJSON_FILE_PATH,
    LOG_LEVEL,
    OSM_XML_FILE_PATH,
)

from file_io.loader import check_file_exists, load_boundary, load_osm_document

from graph.builder import build_road_network

from transit.road_index import build_road_index
from transit.route_extractor import extract_all_routes


def main():
    """
    Main entry point for the program. This function orchestrates loading the map data,
    importing the transit routes and building the lane network.

    Steps:
    1. Check if the required files exist.
    2. Load the OSM document and the boundary of the area.
    3. Split the highways into roads to know where the intersections are.
    4. Extract every bus and light rail route and snap its stops to roads.
    5. Build the lane network, if its GeoJSON files are present.
    6. Print a summary.
    """
    logging.basicConfig(
        level=LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Start timer to measure execution time
    timer = time.time()

    print("\nINIT\n")

    # Check if required files exist (OSM XML and boundary GeoJSON)
    if not (check_file_exists(OSM_XML_FILE_PATH) and check_file_exists(BOUNDARY_GEOJSON_FILE_PATH)):
        # If any file is missing, print an error message and exit
        print("Error: One or more required files are missing.")
        return

    doc = load_osm_document(OSM_XML_FILE_PATH)
    print("OSM XML LOADED")
    boundary = load_boundary(BOUNDARY_GEOJSON_FILE_PATH)
    print("BOUNDARY LOADED")

    road_index = build_road_index(doc)
    print("ROADS SPLIT")

    routes, skipped = extract_all_routes(doc, boundary, road_index)
    print("ROUTES EXTRACTED")

    network = None
    if check_file_exists(LANES_GEOJSON_FILE_PATH) and check_file_exists(
        INTERSECTIONS_GEOJSON_FILE_PATH
    ):
        network = build_road_network(LANES_GEOJSON_FILE_PATH, INTERSECTIONS_GEOJSON_FILE_PATH)
        print("LANE NETWORK BUILT")

    # Calculate execution time (in minutes)
    time_spent = round((time.time() - timer) / 60, 4)

    print()
    print(f"Program execution completed in {time_spent} minutes.")
    print(f"Roads: {len(road_index.roads)} ;; Intersections: {len(road_index.intersections)}")
    print(f"Transit routes: {len(routes)} kept ;; {skipped} skipped while snapping stops")
    for route in routes:
        kind = "bus" if route.is_bus else "light rail"
        print(f"  {route.short_name} ({kind}): {len(route.stops)} stops")
    if network is not None:
        print(f"Lanes: {len(network.lanes())} ;; Turns: {len(network.turns())}")

    print("PROCESS COMPLETED\n")


if __name__ == "__main__":
    main()
