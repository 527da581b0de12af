"""Tests for splitting highways into roads and snapping transit stops onto them."""

import pytest
from conftest import make_way, route_relation

from exceptions import StopSnapError
from models.osm import OsmWay
from models.transit import OriginalRoad
from transit.road_index import RoadIndex, build_road_index
from transit.route_extractor import extract_all_routes, extract_route
from transit.stop_snapper import snap_bus_stops


@pytest.fixture
def road_index(doc):
    return build_road_index(doc)


@pytest.fixture
def route(doc, boundary):
    return extract_route(1, route_relation(1, [2, 4, 6], [1000, 1001, 1002]), doc, boundary)


class TestBuildRoadIndex:
    def test_intersections_are_way_ends_and_shared_nodes(self, road_index) -> None:
        assert road_index.intersections == {1, 3, 5, 7, 10, 11}
        assert road_index.intersection_exists(3)
        assert not road_index.intersection_exists(2)

    def test_roads_follow_way_order(self, road_index) -> None:
        assert OriginalRoad(1001, 5, 3) in road_index.roads
        assert OriginalRoad(1001, 3, 5) not in road_index.roads

    def test_way_split_at_shared_node(self, doc) -> None:
        doc.add_way(make_way(1006, [2, 11], {"highway": "service"}))
        index = build_road_index(doc)
        assert index.intersection_exists(2)
        assert OriginalRoad(1000, 1, 2) in index.roads
        assert OriginalRoad(1000, 2, 3) in index.roads

    def test_only_highways_and_light_rail(self, doc) -> None:
        doc.add_way(make_way(1007, [1, 7], {"railway": "rail"}))
        doc.add_way(make_way(1008, [1, 7], {"railway": "light_rail"}))
        index = build_road_index(doc)
        assert all(road.osm_way_id != 1007 for road in index.roads)
        assert OriginalRoad(1008, 1, 7) in index.roads

    def test_way_without_nodes_is_ignored(self, doc) -> None:
        doc.add_way(OsmWay(1009, [], [], {"highway": "service"}))
        index = build_road_index(doc)
        assert all(road.osm_way_id != 1009 for road in index.roads)
        assert index.intersections == {1, 3, 5, 7, 10, 11}

    def test_road_at(self, road_index, doc) -> None:
        assert road_index.road_at(doc.node(4).point) == OriginalRoad(1001, 5, 3)
        assert road_index.road_at(doc.node(101).point) is None


class TestSnapBusStops:
    def test_forwards_and_backwards(self, route, road_index) -> None:
        snapped = snap_bus_stops(route, road_index)
        assert [stop.matched_road for stop in snapped.stops] == [
            (OriginalRoad(1000, 1, 3), True),
            (OriginalRoad(1001, 5, 3), False),
            (OriginalRoad(1002, 5, 7), True),
        ]

    def test_input_route_is_left_alone(self, route, road_index) -> None:
        snap_bus_stops(route, road_index)
        assert all(stop.matched_road is None for stop in route.stops)

    def test_stop_at_intersection(self, route, road_index, doc) -> None:
        route.stops[1].vehicle_pos = (3, doc.node(3).point)
        with pytest.raises(StopSnapError, match="right at an intersection"):
            snap_bus_stops(route, road_index)

    def test_stop_at_intersection_wins_over_everything_else(self, route, doc) -> None:
        index = RoadIndex({2}, {})
        with pytest.raises(StopSnapError, match="has a stop 2 right at an intersection"):
            snap_bus_stops(route, index)

    def test_road_not_between_surrounding_intersections(self, route, road_index, doc) -> None:
        point = doc.node(2).point
        road_index.pt_to_road[(point.x, point.y)] = OriginalRoad(1000, 1, 5)
        with pytest.raises(StopSnapError, match="Can't figure out where 2 is along route"):
            snap_bus_stops(route, road_index)

    def test_stop_not_along_route(self, route, road_index, doc) -> None:
        route.stops[0].vehicle_pos = (101, doc.node(101).point)
        with pytest.raises(StopSnapError, match="isn't along the route"):
            snap_bus_stops(route, road_index)

    def test_stop_not_on_a_road(self, route, road_index, doc) -> None:
        point = doc.node(6).point
        del road_index.pt_to_road[(point.x, point.y)]
        with pytest.raises(StopSnapError, match="isn't on any road"):
            snap_bus_stops(route, road_index)

    def test_light_rail_route_on_railway_tracks(self, doc, boundary) -> None:
        for way_id in (1000, 1001, 1002):
            doc.way(way_id).tags = {"railway": "light_rail"}
        rel = route_relation(1, [2, 4, 6], [1000, 1001, 1002], {"name": "Tram 1", "route": "light_rail"})
        doc.add_relation(rel)

        routes, skipped = extract_all_routes(doc, boundary, build_road_index(doc))

        assert skipped == 0
        assert not routes[0].is_bus
        assert [stop.matched_road for stop in routes[0].stops] == [
            (OriginalRoad(1000, 1, 3), True),
            (OriginalRoad(1001, 5, 3), False),
            (OriginalRoad(1002, 5, 7), True),
        ]
