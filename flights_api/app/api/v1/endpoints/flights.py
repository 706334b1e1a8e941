"""
Flight endpoints for API v1.

These routes expose CRUD operations for flights.  Handlers only
translate between HTTP and ``FlightService``: query parameters are
parsed here, business rules live in the service, and errors raised by
either propagate to the exception handlers registered in
``main.create_app``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from flights_api.app.core.dates import parse_or_fail
from flights_api.app.schemas.flight import FlightRead, FlightRequest
from flights_api.app.schemas.response import ApiResponse
from flights_api.app.services.flight_service import FlightService

router = APIRouter()


def get_flight_service(request: Request) -> FlightService:
    """Bind a service to the store owned by the running application."""
    return FlightService(request.app.state.flight_store)


@router.get("", response_model=ApiResponse[List[FlightRead]])
async def list_flights(
    company: Optional[str] = Query(None),
    arrival_place: Optional[str] = Query(None, alias="arrivalPlace"),
    departure_date: Optional[str] = Query(None, alias="departureDate", description="yyyy-MM-dd"),
    sort_by: Optional[str] = Query(
        None, alias="sortBy", description="company, arrivalPlace or departureDate"
    ),
    service: FlightService = Depends(get_flight_service),
) -> ApiResponse[List[FlightRead]]:
    """List flights with combinable filters.

    - **company**, **arrivalPlace** — case‑insensitive exact match.
    - **departureDate** — exact departure date (``yyyy-MM-dd``).
    - **sortBy** — ``company``, ``arrivalPlace`` or ``departureDate``;
      by default flights are ordered by departure date, then id.
    """
    parsed_date = parse_or_fail(departure_date, "departureDate")
    flights = service.list_flights(
        company=company,
        arrival_place=arrival_place,
        departure_date=parsed_date,
        sort_by=sort_by,
    )
    return ApiResponse[List[FlightRead]](
        success=True,
        message="Flight list",
        data=[FlightRead.from_flight(f) for f in flights],
    )


@router.get("/{flight_id}", response_model=ApiResponse[FlightRead])
async def get_flight(
    flight_id: int,
    service: FlightService = Depends(get_flight_service),
) -> ApiResponse[FlightRead]:
    """Retrieve a single flight by its ID.  Returns 404 if it does not exist."""
    flight = service.get_flight(flight_id)
    return ApiResponse[FlightRead](
        success=True, message="Flight found by ID", data=FlightRead.from_flight(flight)
    )


@router.post("", response_model=ApiResponse[FlightRead], status_code=status.HTTP_201_CREATED)
async def create_flight(
    flight_in: FlightRequest,
    service: FlightService = Depends(get_flight_service),
) -> ApiResponse[FlightRead]:
    """Create a new flight.

    Fails with 400 on incoherent dates and 409 if another flight already
    uses the same name (case‑insensitive).
    """
    flight = service.create_flight(flight_in.to_flight())
    return ApiResponse[FlightRead](
        success=True, message="Flight created successfully", data=FlightRead.from_flight(flight)
    )


@router.put("/{flight_id}", response_model=ApiResponse[FlightRead])
async def update_flight(
    flight_id: int,
    flight_in: FlightRequest,
    service: FlightService = Depends(get_flight_service),
) -> ApiResponse[FlightRead]:
    """Replace every field of an existing flight; the id is kept."""
    flight = service.update_flight(flight_id, flight_in.to_flight())
    return ApiResponse[FlightRead](
        success=True, message="Flight updated successfully", data=FlightRead.from_flight(flight)
    )


@router.delete("/{flight_id}", response_model=ApiResponse[None])
async def delete_flight(
    flight_id: int,
    service: FlightService = Depends(get_flight_service),
) -> ApiResponse[None]:
    """Delete a flight.  The envelope's ``data`` is ``null`` on success."""
    service.delete_flight(flight_id)
    return ApiResponse[None](success=True, message="Flight deleted successfully", data=None)
