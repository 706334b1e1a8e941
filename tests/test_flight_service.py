import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import date

import pytest

from flights_api.app.core.exceptions import BadInputError, ConflictError, NotFoundError
from flights_api.app.services.flight_service import FlightService
from tests.factories import make_flight

SEED_DEFAULT_ORDER = [9, 5, 4, 1, 2, 7, 3, 10, 8, 6]


def ids(flights):
    return [f.id for f in flights]


# create

def test_create_assigns_next_id(service):
    created = service.create_flight(make_flight("X1"))
    assert created.id == 11
    assert service.get_flight(11) == created


@pytest.mark.parametrize("name", ["H001-V", "h001-v", "H001-v"])
def test_create_duplicate_name_conflicts(service, name):
    with pytest.raises(ConflictError):
        service.create_flight(make_flight(name))


def test_create_none_is_bad_input(service):
    with pytest.raises(BadInputError, match="Invalid data"):
        service.create_flight(None)


@pytest.mark.parametrize(
    "field, value",
    [
        ("flight_name", None),
        ("flight_name", "  "),
        ("company", ""),
        ("departure_place", None),
        ("arrival_place", " "),
        ("departure_date", None),
        ("arrival_date", None),
    ],
)
def test_create_missing_field_is_bad_input(service, field, value):
    flight = replace(make_flight("X1"), **{field: value})
    with pytest.raises(BadInputError, match="Invalid data"):
        service.create_flight(flight)
    assert len(service.store.list_all()) == 10


def test_create_departure_after_arrival_is_bad_input(service):
    flight = make_flight("X1", departure_date=date(2025, 5, 5), arrival_date=date(2025, 5, 1))
    with pytest.raises(BadInputError, match="departureDate cannot be after arrivalDate"):
        service.create_flight(flight)


def test_create_same_day_flight(service):
    created = service.create_flight(
        make_flight("X1", departure_date=date(2025, 5, 1), arrival_date=date(2025, 5, 1))
    )
    assert created.departure_date == created.arrival_date


def test_concurrent_creates_with_same_name_admit_one(empty_store):
    service = FlightService(empty_store)
    workers = 8
    barrier = threading.Barrier(workers)

    def attempt(_):
        barrier.wait()
        try:
            service.create_flight(make_flight("RACE-1"))
            return "created"
        except ConflictError:
            return "conflict"

    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(attempt, range(workers)))

    assert outcomes.count("created") == 1
    assert outcomes.count("conflict") == workers - 1
    assert len(empty_store.list_all()) == 1


def test_readers_never_see_a_half_applied_update(service):
    versions = [
        make_flight("FLIP-A", company="Alpha", departure_place="Oslo", arrival_place="Rome",
                    departure_date=date(2025, 1, 1), arrival_date=date(2025, 1, 2)),
        make_flight("FLIP-B", company="Beta", departure_place="Lima", arrival_place="Quito",
                    departure_date=date(2026, 6, 10), arrival_date=date(2026, 6, 20)),
    ]
    expected = [replace(v, id=1) for v in versions]
    service.update_flight(1, versions[0])
    stop = threading.Event()
    torn = []

    def writer():
        i = 0
        while not stop.is_set():
            service.update_flight(1, versions[i % 2])
            i += 1

    def reader():
        for _ in range(2000):
            for flight in service.list_flights():
                if flight.id == 1 and flight not in expected:
                    torn.append(flight)
            if service.get_flight(1) not in expected:
                torn.append(service.get_flight(1))

    writer_thread = threading.Thread(target=writer)
    writer_thread.start()
    try:
        with ThreadPoolExecutor(max_workers=2) as pool:
            list(pool.map(lambda _: reader(), range(2)))
    finally:
        stop.set()
        writer_thread.join()

    assert torn == []


def test_update_returns_a_detached_record(service):
    updated = service.update_flight(1, make_flight("NEW-1"))
    updated.company = "CHANGED"
    assert service.get_flight(1).company == "Acme"


# get

def test_get_unknown_id_not_found(service):
    with pytest.raises(NotFoundError, match="Flight not found"):
        service.get_flight(999)


# list

def test_list_default_order_is_departure_date_then_id(service):
    assert ids(service.list_flights()) == SEED_DEFAULT_ORDER


def test_list_default_order_breaks_ties_by_id(empty_store):
    service = FlightService(empty_store)
    service.create_flight(make_flight("LATE", departure_date=date(2025, 6, 2), arrival_date=date(2025, 6, 3)))
    service.create_flight(make_flight("EARLY-1", departure_date=date(2025, 6, 1), arrival_date=date(2025, 6, 3)))
    service.create_flight(make_flight("EARLY-2", departure_date=date(2025, 6, 1), arrival_date=date(2025, 6, 3)))
    assert ids(service.list_flights()) == [2, 3, 1]


def test_list_by_company_iberia(service):
    flights = service.list_flights(company="Iberia")
    assert ids(flights) == [9, 1]


def test_list_company_filter_is_case_insensitive_and_trimmed(service):
    assert ids(service.list_flights(company="  iBeRiA ")) == [9, 1]


def test_list_filters_are_exact_matches(service):
    assert service.list_flights(arrival_place="Mad") == []
    assert ids(service.list_flights(arrival_place="madrid")) == [3]


def test_list_blank_filters_are_ignored(service):
    assert ids(service.list_flights(company=" ", arrival_place="")) == SEED_DEFAULT_ORDER


def test_list_filters_are_conjunctive(service):
    flights = service.list_flights(company="Turkish", arrival_place="New York")
    assert ids(flights) == [2]
    flights = service.list_flights(company="turkish", departure_date=date(2025, 3, 13))
    assert ids(flights) == [10]
    assert service.list_flights(company="Iberia", departure_date=date(2025, 3, 13)) == []


def test_list_by_departure_date(service):
    assert ids(service.list_flights(departure_date=date(2025, 3, 10))) == [1, 2]


def test_list_sort_by_company(service):
    companies = [f.company for f in service.list_flights(sort_by="company")]
    assert companies == sorted(companies, key=str.casefold)
    assert companies[0] == "Air Europa"


def test_list_sort_by_arrival_place(service):
    places = [f.arrival_place for f in service.list_flights(sort_by="arrivalPlace")]
    assert places == sorted(places, key=str.casefold)
    assert places[0] == "Berlin"


def test_list_sort_by_departure_date(service):
    flights = service.list_flights(sort_by="departureDate")
    departures = [f.departure_date for f in flights]
    assert departures == sorted(departures)


def test_list_invalid_sort_key_names_valid_options(service):
    with pytest.raises(BadInputError) as exc_info:
        service.list_flights(sort_by="invalid")
    for key in ("company", "arrivalPlace", "departureDate"):
        assert key in exc_info.value.message


def test_list_does_not_mutate_store(service):
    before = ids(service.store.list_all())
    service.list_flights(company="Iberia", sort_by="company")
    assert ids(service.store.list_all()) == before


# update

def test_update_overwrites_fields_and_keeps_id(service):
    updated = service.update_flight(1, make_flight("NEW-1", company="Acme"))
    assert updated.id == 1
    assert updated.flight_name == "NEW-1"
    assert service.get_flight(1).company == "Acme"


def test_update_may_keep_own_name(service):
    updated = service.update_flight(1, make_flight("h001-v"))
    assert updated.flight_name == "h001-v"


def test_update_to_other_flights_name_conflicts(service):
    with pytest.raises(ConflictError, match="flightName already in use"):
        service.update_flight(1, make_flight("T100-V"))
    assert service.get_flight(1).flight_name == "H001-V"


def test_update_unknown_id_not_found(service):
    with pytest.raises(NotFoundError):
        service.update_flight(999, make_flight("X1"))


def test_update_departure_after_arrival_is_bad_input(service):
    data = make_flight("H001-V", departure_date=date(2025, 5, 5), arrival_date=date(2025, 5, 1))
    with pytest.raises(BadInputError):
        service.update_flight(1, data)
    assert service.get_flight(1).departure_date == date(2025, 3, 10)


def test_update_missing_field_is_bad_input(service):
    with pytest.raises(BadInputError, match="Invalid data"):
        service.update_flight(1, replace(make_flight("X1"), company=None))


# delete

def test_delete_then_delete_again_not_found(service):
    service.delete_flight(4)
    with pytest.raises(NotFoundError, match="not found or already removed"):
        service.delete_flight(4)
    with pytest.raises(NotFoundError):
        service.get_flight(4)


def test_delete_unknown_id_not_found(service):
    with pytest.raises(NotFoundError):
        service.delete_flight(999)
