"""Unit tests for itinerary search."""

import logging
from unittest.mock import MagicMock

import pytest

from src.exceptions import InvalidArgumentError, StationNotFoundError
from src.search.fare_service import FareCalculator
from src.search.schemas import DirectItinerary, Leg, TransferItinerary
from src.search.service import (
    AVAILABLE_NOTE, PLACEHOLDER_TIME, DistanceAggregator, ItineraryRanker, SearchService
)


def make_itinerary(price, duration, train_id=1):
    leg = Leg(
        train_id=train_id,
        train_name=f"Train {train_id}",
        from_station="X",
        to_station="Y",
        depart_time="09:00",
        arrive_time="10:00",
        distance_km=0,
        price=price,
        duration_min=duration,
    )
    return DirectItinerary(legs=[leg], total_distance_km=0, total_price=price, total_duration_min=duration)


class TestDistanceAggregator:
    """Test memoized distance aggregation."""

    def test_distance_is_queried_once_per_leg(self):
        store = MagicMock()
        store.sum_distance.return_value = 42
        distances = DistanceAggregator(store)

        assert distances.distance(1, 0, 3) == 42
        assert distances.distance(1, 0, 3) == 42
        store.sum_distance.assert_called_once_with(1, 0, 3)

    def test_empty_range_is_zero_without_query(self):
        store = MagicMock()
        assert DistanceAggregator(store).distance(1, 3, 3) == 0
        store.sum_distance.assert_not_called()

    def test_never_negative(self):
        store = MagicMock()
        store.sum_distance.return_value = -5
        assert DistanceAggregator(store).distance(1, 0, 1) == 0


class TestDirectSearch:
    """Test single-train itineraries."""

    def test_single_direct_train(self, example_network):
        results = SearchService(example_network).search("Chennai", "Bangalore")

        assert len(results) == 1
        itinerary = results[0]
        assert itinerary.kind == "direct"
        assert itinerary.total_distance_km == 370
        assert itinerary.total_duration_min == 390
        assert itinerary.total_price == 462.50
        leg = itinerary.legs[0]
        assert leg.train_name == "Train A"
        assert (leg.from_station, leg.to_station) == ("Chennai", "Bangalore")
        assert (leg.depart_time, leg.arrive_time) == ("09:00", "15:30")
        assert leg.distance_km == 370

    def test_distance_matches_segment_sum(self, example_network):
        results = SearchService(example_network).search("Vellore", "Mangalore")
        direct = [i for i in results if i.kind == "direct"]
        assert [i.total_distance_km for i in direct] == [200 + 120 + 300]

    def test_duration_wraps_past_midnight(self, add_train, db_session):
        add_train("Night Mail", ("Delhi", 0, "22:30"), ("Agra", 200, "01:15"))

        results = SearchService(db_session).search("Delhi", "Agra")

        assert len(results) == 1
        assert results[0].total_duration_min == 165
        assert results[0].legs[0].duration_min == 165

    def test_loop_route_yields_every_forward_pairing(self, add_train, db_session):
        add_train(
            "Loop",
            ("Chennai", 0, "06:00"),
            ("Vellore", 50, "07:00"),
            ("Chennai", 50, "08:00"),
            ("Vellore", 60, "09:00"),
        )

        results = SearchService(db_session).search("Chennai", "Vellore")

        assert all(i.kind == "direct" for i in results)
        assert sorted((i.total_distance_km, i.total_duration_min) for i in results) == [
            (50, 60), (60, 60), (160, 180)
        ]

    def test_zero_distance_leg_is_kept(self, add_train, db_session):
        add_train("Shuttle", ("North", 0, "10:00"), ("South", 0, "10:05"))

        results = SearchService(db_session).search("North", "South")

        assert len(results) == 1
        assert results[0].total_price == 0


class TestTransferSearch:
    """Test one-change itineraries."""

    def test_transfer_via_shared_station(self, example_network):
        results = SearchService(example_network).search("Chennai", "Mangalore")
        transfers = [i for i in results if i.kind == "transfer"]

        assert len(transfers) == 1
        itinerary = transfers[0]
        assert isinstance(itinerary, TransferItinerary)
        assert itinerary.transfer_station == "Bangalore"
        assert [leg.train_name for leg in itinerary.legs] == ["Train A", "Train C"]
        assert itinerary.total_distance_km == 370 + 430
        assert itinerary.total_price == 1000.0
        assert itinerary.total_duration_min == 885

    def test_second_leg_departs_after_first_arrives(self, example_network):
        results = SearchService(example_network).search("Bangalore", "Mangalore")
        for itinerary in results:
            if itinerary.kind == "transfer":
                first, second = itinerary.legs
                assert second.depart_time > first.arrive_time

    def test_connection_at_same_minute_is_rejected(self, add_train, db_session):
        add_train("First", ("P", 0, "08:00"), ("Q", 10, "09:00"))
        add_train("Second", ("Q", 0, "09:00"), ("R", 10, "10:00"))

        assert SearchService(db_session).search("P", "R") == []

    def test_no_overnight_transfer(self, add_train, db_session):
        add_train("Evening", ("Chennai", 0, "09:00"), ("Bangalore", 370, "15:30"))
        add_train("Morning", ("Bangalore", 0, "09:00"), ("Mangalore", 430, "17:30"))

        assert SearchService(db_session).search("Chennai", "Mangalore") == []

    def test_transfer_duration_wraps_past_midnight(self, add_train, db_session):
        add_train("Late", ("P", 0, "22:00"), ("Q", 10, "23:00"))
        add_train("Owl", ("Q", 0, "23:30"), ("R", 10, "01:00"))

        results = SearchService(db_session).search("P", "R")

        assert len(results) == 1
        itinerary = results[0]
        assert itinerary.kind == "transfer"
        assert itinerary.transfer_station == "Q"
        assert itinerary.total_duration_min == 180
        assert [leg.duration_min for leg in itinerary.legs] == [60, 90]

    def test_total_price_is_rounded_once(self, add_train, db_session):
        add_train("First", ("P", 0, "08:00"), ("Q", 1, "09:00"))
        add_train("Second", ("Q", 0, "10:00"), ("R", 1, "11:00"))

        results = SearchService(db_session, fares=FareCalculator("0.125")).search("P", "R")

        assert len(results) == 1
        itinerary = results[0]
        assert [leg.price for leg in itinerary.legs] == [0.13, 0.13]
        assert itinerary.total_price == 0.25
        assert itinerary.total_price != sum(leg.price for leg in itinerary.legs)

    def test_station_cap_limits_fan_out(self, example_network, caplog):
        with caplog.at_level(logging.WARNING, logger="src.search.service"):
            results = SearchService(example_network, max_transfer_stations=0).search("Chennai", "Mangalore")

        assert [i.kind for i in results] == ["direct"]
        assert "limited to 0 of 4 intermediate stations" in caplog.text

    def test_worker_pool_finds_the_same_itineraries(self, example_network):
        sequential = SearchService(example_network, workers=1).search("Chennai", "Mangalore")
        parallel = SearchService(example_network, workers=4).search("Chennai", "Mangalore")

        assert [i.model_dump() for i in parallel] == [i.model_dump() for i in sequential]


class TestFallbackSearch:
    """Test degraded results when no ordered itinerary exists."""

    def test_out_of_order_train_is_reported_available(self, add_train, db_session):
        add_train("Reverse", ("Mysuru", 0, "08:00"), ("Chennai", 480, "16:00"))

        results = SearchService(db_session).search("Chennai", "Mysuru")

        assert len(results) == 1
        itinerary = results[0]
        assert itinerary.kind == "available"
        assert itinerary.note == AVAILABLE_NOTE
        assert itinerary.total_price == 0
        assert itinerary.total_distance_km == 0
        assert itinerary.total_duration_min == 0
        assert itinerary.legs[0].depart_time == PLACEHOLDER_TIME
        assert itinerary.legs[0].train_name == "Reverse"

    def test_fallback_skipped_when_structured_results_exist(self, example_network):
        results = SearchService(example_network).search("Chennai", "Mangalore")
        assert all(i.kind != "available" for i in results)

    def test_unconnected_stations_give_empty_result(self, add_train, db_session):
        add_train("West", ("A", 0, "08:00"), ("B", 10, "09:00"))
        add_train("East", ("C", 0, "08:00"), ("D", 10, "09:00"))

        assert SearchService(db_session).search("A", "D") == []


class TestRanking:
    """Test ordering of results."""

    def test_sort_by_price_is_stable(self, example_network):
        results = SearchService(example_network).search("Bangalore", "Mangalore", "price")

        assert [i.total_price for i in results] == [525.0, 537.5, 537.5, 537.5]
        assert [i.kind for i in results] == ["direct", "direct", "direct", "transfer"]
        assert [i.legs[0].train_name for i in results[1:3]] == ["Train B", "Train C"]

    def test_sort_by_duration(self, example_network):
        results = SearchService(example_network).search("Bangalore", "Mangalore", "duration")
        assert [i.total_duration_min for i in results] == [375, 465, 510, 885]

    def test_ranker_keeps_discovery_order_on_ties(self):
        first = make_itinerary(10.0, 30, train_id=1)
        second = make_itinerary(5.0, 30, train_id=2)
        third = make_itinerary(10.0, 20, train_id=3)

        by_price = ItineraryRanker.rank([first, second, third], "price")
        by_duration = ItineraryRanker.rank([first, second, third], "duration")

        assert [i.legs[0].train_id for i in by_price] == [2, 1, 3]
        assert [i.legs[0].train_id for i in by_duration] == [3, 1, 2]

    def test_ranker_does_not_reorder_legs(self, example_network):
        results = SearchService(example_network).search("Chennai", "Mangalore", "duration")
        transfer = next(i for i in results if i.kind == "transfer")
        assert [leg.from_station for leg in transfer.legs] == ["Chennai", "Bangalore"]


class TestSearchErrors:
    """Test request rejection."""

    @pytest.mark.parametrize("from_ref,to_ref", [(None, "Chennai"), ("Chennai", ""), ("  ", "Chennai")])
    def test_missing_station_rejected_before_store_access(self, from_ref, to_ref):
        db = MagicMock()
        with pytest.raises(InvalidArgumentError):
            SearchService(db).search(from_ref, to_ref)
        db.query.assert_not_called()

    @pytest.mark.parametrize("sort_by", ["comfort", "Price", "DURATION", ""])
    def test_unknown_sort_key_ranks_by_price(self, example_network, sort_by):
        results = SearchService(example_network).search("Bangalore", "Mangalore", sort_by)

        assert [i.total_price for i in results] == [525.0, 537.5, 537.5, 537.5]
        assert [i.total_duration_min for i in results] == [375, 510, 465, 885]

    def test_unknown_station_rejected_before_finders(self, example_network, monkeypatch):
        finder = MagicMock()
        monkeypatch.setattr("src.search.service.DirectFinder.find", finder)

        with pytest.raises(StationNotFoundError) as excinfo:
            SearchService(example_network).search("Atlantis", "Chennai")

        assert excinfo.value.reference == "Atlantis"
        finder.assert_not_called()

    @pytest.mark.parametrize("reference", ["²", "99999999999999999999"])
    def test_unresolvable_numeric_reference_is_not_found(self, example_network, reference):
        with pytest.raises(StationNotFoundError):
            SearchService(example_network).search(reference, "Chennai")
