"""
Pydantic schemas for flight data.

Flights are exchanged with camelCase keys (``flightName``,
``departureDate``...).  ``FlightRequest`` is the body accepted by the
create and update endpoints; ``FlightRead`` is what the API returns and
carries the computed ``durationDays``.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from flights_api.app.core.dates import duration_days, parse_or_fail
from flights_api.app.core.exceptions import BadInputError
from flights_api.app.core.store import Flight


class FlightBase(BaseModel):
    flight_name: str = Field(..., examples=["IB123-V"])
    company: str = Field(..., examples=["Iberia"])
    departure_place: str = Field(..., examples=["Madrid"])
    arrival_place: str = Field(..., examples=["Buenos Aires"])
    departure_date: date = Field(..., examples=["2025-03-10"])
    arrival_date: date = Field(..., examples=["2025-03-11"])

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FlightRequest(FlightBase):
    """Schema for creating or replacing a flight."""

    @field_validator("flight_name", "company", "departure_place", "arrival_place")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("departure_date", "arrival_date", mode="before")
    @classmethod
    def iso_date_only(cls, value: Any, info: ValidationInfo) -> Any:
        # Same yyyy-MM-dd rule as the departureDate query parameter.
        if isinstance(value, date) or value is None:
            return value
        if not isinstance(value, str):
            raise ValueError("must be a yyyy-MM-dd string")
        try:
            return parse_or_fail(value, to_camel(info.field_name))
        except BadInputError as exc:
            raise ValueError(exc.message) from exc

    def to_flight(self) -> Flight:
        return Flight(
            flight_name=self.flight_name,
            company=self.company,
            departure_place=self.departure_place,
            arrival_place=self.arrival_place,
            departure_date=self.departure_date,
            arrival_date=self.arrival_date,
        )


class FlightRead(FlightBase):
    """Schema for reading a flight from the API."""

    id: int
    duration_days: int

    @classmethod
    def from_flight(cls, flight: Flight) -> "FlightRead":
        """Build the response payload, computing ``durationDays`` afresh."""
        return cls(
            id=flight.id,
            flight_name=flight.flight_name,
            company=flight.company,
            departure_place=flight.departure_place,
            arrival_place=flight.arrival_place,
            departure_date=flight.departure_date,
            arrival_date=flight.arrival_date,
            duration_days=duration_days(flight.departure_date, flight.arrival_date),
        )
