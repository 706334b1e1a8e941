"""
In‑memory flight storage.

``FlightStore`` plays the role a database would otherwise play: it
owns the canonical collection of ``Flight`` records for the lifetime
of the process (or of a test fixture) and hands out sequential ids.
One store instance is created per application in ``create_app`` and
attached to ``app.state``; there is no module‑level store.

All access goes through ``lock``, a re‑entrant lock scoped to the
instance.  Services that need a check‑then‑write sequence (duplicate
name check followed by an insert or update) hold the same lock for the
whole sequence.  Reads return copies taken under the lock, so a caller
never observes a record halfway through an update.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, fields, replace
from datetime import date
from typing import Dict, List, Optional


@dataclass
class Flight:
    """A scheduled flight.

    ``id`` is ``None`` until the flight has been inserted into a store.
    """

    flight_name: Optional[str] = None
    company: Optional[str] = None
    departure_place: Optional[str] = None
    arrival_place: Optional[str] = None
    departure_date: Optional[date] = None
    arrival_date: Optional[date] = None
    id: Optional[int] = None


MUTABLE_FIELDS = tuple(f.name for f in fields(Flight) if f.name != "id")


SAMPLE_FLIGHTS = [
    ("H001-V", "Iberia", "Madrid", "Buenos Aires", date(2025, 3, 10), date(2025, 3, 11)),
    ("T100-V", "Turkish", "Istanbul", "New York", date(2025, 3, 10), date(2025, 3, 11)),
    ("E777-V", "Emirates", "Dubai", "Madrid", date(2025, 3, 12), date(2025, 3, 12)),
    ("A320-V", "Vueling", "Barcelona", "Paris", date(2025, 3, 9), date(2025, 3, 9)),
    ("AF500-V", "Air France", "Paris", "Rome", date(2025, 3, 8), date(2025, 3, 8)),
    ("LH220-V", "Lufthansa", "Frankfurt", "Lisbon", date(2025, 3, 15), date(2025, 3, 15)),
    ("AZ900-V", "ITA Airways", "Rome", "Istanbul", date(2025, 3, 11), date(2025, 3, 11)),
    ("UX010-V", "Air Europa", "Madrid", "New York", date(2025, 3, 14), date(2025, 3, 15)),
    ("IB999-V", "Iberia", "Madrid", "London", date(2025, 3, 7), date(2025, 3, 7)),
    ("TK333-V", "Turkish", "Istanbul", "Berlin", date(2025, 3, 13), date(2025, 3, 13)),
]


class FlightStore:
    """Keyed collection of flights with sequential id assignment."""

    def __init__(self, seed: bool = True) -> None:
        self.lock = threading.RLock()
        self._flights: Dict[int, Flight] = {}
        self._next_id = 1
        if seed:
            for name, company, origin, destination, departure, arrival in SAMPLE_FLIGHTS:
                self.insert(
                    Flight(
                        flight_name=name,
                        company=company,
                        departure_place=origin,
                        arrival_place=destination,
                        departure_date=departure,
                        arrival_date=arrival,
                    )
                )

    def insert(self, flight: Flight) -> Flight:
        """Store a copy of ``flight`` under the next id and return that record.

        Ids start at 1 and are never reused, even after a deletion.
        """
        with self.lock:
            stored = replace(flight, id=self._next_id)
            self._next_id += 1
            self._flights[stored.id] = stored
            return replace(stored)

    def list_all(self) -> List[Flight]:
        """Return copies of all stored flights."""
        with self.lock:
            return [replace(flight) for flight in self._flights.values()]

    def find_by_id(self, flight_id: int) -> Optional[Flight]:
        with self.lock:
            flight = self._flights.get(flight_id)
            return replace(flight) if flight is not None else None

    def update(self, flight_id: int, data: Flight) -> Optional[Flight]:
        """Overwrite every mutable field of the stored flight in place.

        The id is kept.  Returns a copy of the updated record, or
        ``None`` if no flight has that id.
        """
        with self.lock:
            stored = self._flights.get(flight_id)
            if stored is None:
                return None
            for field in MUTABLE_FIELDS:
                setattr(stored, field, getattr(data, field))
            return replace(stored)

    def exists_by_name(self, name: Optional[str], exclude_id: Optional[int] = None) -> bool:
        """Return ``True`` if another flight already uses ``name``.

        Names are compared case‑insensitively.  The flight whose id is
        ``exclude_id`` is ignored, which lets an update keep its own
        name; with ``exclude_id=None`` every match counts.
        """
        if name is None:
            return False
        wanted = name.casefold()
        with self.lock:
            return any(
                flight.flight_name is not None
                and flight.flight_name.casefold() == wanted
                and flight.id != exclude_id
                for flight in self._flights.values()
            )

    def delete_by_id(self, flight_id: int) -> bool:
        """Remove a flight.  Returns ``False`` if no such id was stored."""
        with self.lock:
            return self._flights.pop(flight_id, None) is not None
