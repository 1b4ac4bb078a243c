import logging
from datetime import datetime
from typing import List

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

# Load environment variables from .env file
load_dotenv()

from src.itinerary_aggregator.application import FlightAggregator
from src.itinerary_aggregator.config import AggregatorConfig
from src.itinerary_aggregator.exceptions import (
    DecodeError,
    NotFoundError,
    QueryCancelledError,
    TransportError,
)
from src.itinerary_aggregator.services.health_service import HealthService
from src.itinerary_aggregator.services.ranking_service import SortOrder

# Configure logging for console output
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

config = AggregatorConfig.from_env()
aggregator = FlightAggregator(config)
health_service = HealthService(config, aggregator.fetcher)

app = FastAPI(title="Itinerary Aggregator API")


# --- Pydantic Schemas (The JSON Contract) ---
# Field names match the dataclass attributes; aliases give the wire names.


class TotalSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    amount: float
    currency: str


class SegmentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    flight_number: str = Field(serialization_alias="flightNumber")
    departure: str = Field(serialization_alias="from")
    arrival: str = Field(serialization_alias="to")
    depart_time: datetime = Field(serialization_alias="depart")
    arrive_time: datetime = Field(serialization_alias="arrive")


class FlightSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    status: str
    passenger_name: str = Field(serialization_alias="passengerName")
    segments: List[SegmentSchema]
    total: TotalSchema
    source: str


class HealthSchema(BaseModel):
    status: int
    message: str


# --- Error mapping ---
# NotFound means "no such itinerary"; decode/transport mean "upstream broken".


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(TransportError)
async def transport_error_handler(request: Request, exc: TransportError):
    return JSONResponse(status_code=502, content={"detail": f"fetch flights: {exc}"})


@app.exception_handler(DecodeError)
async def decode_error_handler(request: Request, exc: DecodeError):
    return JSONResponse(status_code=502, content={"detail": f"decode flights: {exc}"})


@app.exception_handler(QueryCancelledError)
async def cancelled_handler(request: Request, exc: QueryCancelledError):
    return JSONResponse(status_code=504, content={"detail": str(exc)})


# --- API Endpoints ---


@app.get("/health", response_model=HealthSchema)
def get_health():
    logger.info("[GET] /health")
    result = health_service.check(aggregator.new_token())
    return JSONResponse(
        status_code=result.status,
        content={"status": result.status, "message": result.message},
    )


@app.get("/flights", response_model=List[FlightSchema])
def get_flights():
    logger.info("[GET] /flights")
    return aggregator.list_flights(aggregator.new_token())


@app.get("/flights/sorted", response_model=List[FlightSchema])
def get_flights_sorted(sort_type: str = Query("", alias="type")):
    """
    Return all flights in one of the named orderings.

    Supported types: price; time/timetravel/duration;
    departure/depart/departure_date.
    """
    logger.info("[GET] /flights/sorted?type=%s", sort_type)
    try:
        order = SortOrder.parse(sort_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return aggregator.sorted_flights(order, aggregator.new_token())


@app.get("/flights/id/{flight_id}", response_model=FlightSchema)
def get_flight_by_id(flight_id: str):
    logger.info("[GET] /flights/id/%s", flight_id)
    return aggregator.find_by_id(flight_id, aggregator.new_token())


@app.get("/flights/number/{number}", response_model=FlightSchema)
def get_flight_by_number(number: str):
    logger.info("[GET] /flights/number/%s", number)
    return aggregator.find_by_number(number, aggregator.new_token())


@app.get("/flights/passenger/{passenger_name}", response_model=List[FlightSchema])
def get_flights_by_passenger(passenger_name: str):
    logger.info("[GET] /flights/passenger/%s", passenger_name)
    return aggregator.find_by_passenger(passenger_name, aggregator.new_token())


@app.get("/flights/destination", response_model=List[FlightSchema])
def get_flights_by_destination(departure: str, arrival: str):
    logger.info("[GET] /flights/destination?departure=%s&arrival=%s", departure, arrival)
    return aggregator.find_by_destination(departure, arrival, aggregator.new_token())


@app.get("/flights/price/{price}", response_model=List[FlightSchema])
def get_flights_by_price(price: float):
    logger.info("[GET] /flights/price/%s", price)
    return aggregator.find_by_price(price, aggregator.new_token())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=config.server_port)
