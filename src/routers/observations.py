import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter, ValidationError

from core.errors import StoreError
from core.services.observation_manager import observation_manager
from routers.hydra import DEFAULT_PAGE, DEFAULT_SIZE, collection_response
from schemas import ObservationModel, SensorObservationModel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/observations", tags=["observations"])

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_timestamp = TypeAdapter(datetime)


def parse_time(value: Optional[str], default: datetime, name: str) -> datetime:
    """Parse an RFC 3339 query value, naive times are taken as UTC."""
    if not value:
        return default
    try:
        ts = _timestamp.validate_python(value)
    except ValidationError:
        raise HTTPException(status_code=400, detail=f"Invalid {name}: {value}. Expected an RFC 3339 timestamp")
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


@router.get("", responses={
    400: {
        "description": "Missing sensor_id or a time in the wrong format.",
        "content": {
            "application/json": {
                "example": {"detail": "sensor_id is required"}
            }
        }
    },
    500: {"description": "Observations could not be loaded."},
})
def get_observations(
    request: Request,
    sensor_id: Optional[str] = None,
    starting: Optional[str] = Query(None, alias="hasObservationTime[starting]"),
    ending: Optional[str] = Query(None, alias="hasObservationTime[ending]"),
    page: int = Query(DEFAULT_PAGE, ge=0),
    size: int = Query(DEFAULT_SIZE, ge=1),
) -> JSONResponse:
    """
    Get observations for a sensor, oldest first.
    The time range is inclusive and defaults to everything up to now.
    """
    if not sensor_id:
        raise HTTPException(status_code=400, detail="sensor_id is required")

    starting_time = parse_time(starting, EPOCH, "hasObservationTime[starting]")
    ending_time = parse_time(ending, datetime.now(timezone.utc), "hasObservationTime[ending]")

    try:
        total, observations = observation_manager.get_observations(sensor_id, starting_time, ending_time, page, size)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    members = [ObservationModel.from_observation(o) for o in observations]
    return collection_response(request, members, total, page, size)


@router.post("", status_code=201, responses={
    400: {"description": "The body is not a valid sensor observation."},
    500: {"description": "The observations could not be stored."},
})
def create_observation(body: SensorObservationModel) -> Response:
    """
    Store observations reported by a device.
    Unchanged values within the dedup window are silently skipped.
    """
    try:
        observation_manager.add_observation(body.to_sensor_observation())
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(status_code=201)
