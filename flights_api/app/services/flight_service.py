"""
Business logic for flights.

``FlightService`` validates incoming flight data, rejects duplicate
flight names, composes the list filters and picks the sort order.  It
keeps no flight state of its own: every call goes to the
``FlightStore`` passed to the constructor.

Rule violations are raised as ``BadInputError``, ``NotFoundError`` or
``ConflictError`` and are never caught here; the API layer maps them to
HTTP responses.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional

from flights_api.app.core import dates
from flights_api.app.core.exceptions import BadInputError, ConflictError, NotFoundError
from flights_api.app.core.store import Flight, FlightStore

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class FlightService:
    """Service class for managing flights."""

    def __init__(self, store: FlightStore) -> None:
        self.store = store

    def create_flight(self, flight: Optional[Flight]) -> Flight:
        """Validate ``flight`` and persist it with a freshly assigned id."""
        self._validate(flight)
        with self.store.lock:
            if self.store.exists_by_name(flight.flight_name):
                logger.warning("Rejected duplicate flight name '%s'", flight.flight_name)
                raise ConflictError("Flight already exists (duplicate flightName)")
            created = self.store.insert(flight)
        logger.info("Created flight %s (%s)", created.id, created.flight_name)
        return created

    def get_flight(self, flight_id: int) -> Flight:
        flight = self.store.find_by_id(flight_id)
        if flight is None:
            raise NotFoundError("Flight not found")
        return flight

    def list_flights(
        self,
        company: Optional[str] = None,
        arrival_place: Optional[str] = None,
        departure_date: Optional[date] = None,
        sort_by: Optional[str] = None,
    ) -> List[Flight]:
        """Return flights matching every given filter, sorted.

        - ``company`` and ``arrival_place``: case‑insensitive exact
          match after trimming; blank values are ignored.
        - ``departure_date``: exact date match.
        - ``sort_by``: ``departureDate``, ``company`` or
          ``arrivalPlace``.  When omitted, flights are ordered by
          departure date and then by id.

        The sort key is resolved before filtering, so an unknown key is
        rejected even when no flight matches.
        """
        sort_key = self._sort_key(sort_by)
        flights = self.store.list_all()

        if not _is_blank(company):
            wanted_company = company.strip().casefold()
            flights = [
                f for f in flights if f.company is not None and f.company.casefold() == wanted_company
            ]
        if not _is_blank(arrival_place):
            wanted_place = arrival_place.strip().casefold()
            flights = [
                f
                for f in flights
                if f.arrival_place is not None and f.arrival_place.casefold() == wanted_place
            ]
        if departure_date is not None:
            flights = [f for f in flights if f.departure_date == departure_date]

        return sorted(flights, key=sort_key)

    def update_flight(self, flight_id: int, data: Optional[Flight]) -> Flight:
        """Overwrite every mutable field of an existing flight.

        The id is preserved.  A flight may keep its own name; taking
        the name of another flight raises ``ConflictError``.
        """
        with self.store.lock:
            self.get_flight(flight_id)
            self._validate(data)
            if self.store.exists_by_name(data.flight_name, exclude_id=flight_id):
                logger.warning(
                    "Rejected rename of flight %s to duplicate name '%s'", flight_id, data.flight_name
                )
                raise ConflictError("flightName already in use")
            updated = self.store.update(flight_id, data)
        logger.info("Updated flight %s", flight_id)
        return updated

    def delete_flight(self, flight_id: int) -> None:
        if not self.store.delete_by_id(flight_id):
            raise NotFoundError("Flight not found or already removed")
        logger.info("Deleted flight %s", flight_id)

    @staticmethod
    def _validate(flight: Optional[Flight]) -> None:
        """Check required fields and the departure/arrival order."""
        if flight is None:
            raise BadInputError("Invalid data")
        required_text = (
            flight.flight_name,
            flight.company,
            flight.departure_place,
            flight.arrival_place,
        )
        if (
            any(_is_blank(value) for value in required_text)
            or flight.departure_date is None
            or flight.arrival_date is None
        ):
            raise BadInputError("Invalid data")
        dates.validate_range(flight.departure_date, flight.arrival_date)

    @staticmethod
    def _sort_key(sort_by: Optional[str]) -> Callable[[Flight], object]:
        if _is_blank(sort_by):
            return lambda f: (f.departure_date, f.id)
        key = sort_by.strip()
        if key == "departureDate":
            return lambda f: f.departure_date
        if key == "company":
            return lambda f: f.company.casefold()
        if key == "arrivalPlace":
            return lambda f: f.arrival_place.casefold()
        raise BadInputError("Invalid sortBy. Use company, arrivalPlace or departureDate")
