"""
CloudEvents webhook (HTTP protocol binding, binary and structured mode).
message.accepted and function.updated events are decoded into observations.
"""
import logging

from cloudevents.exceptions import GenericException
from cloudevents.http import from_http
from fastapi import APIRouter, HTTPException, Request, Response
from starlette.concurrency import run_in_threadpool

from core.errors import StoreError
from core.processing.decoders import decode_event
from core.services.observation_manager import observation_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cloudevents", tags=["cloudevents"])


@router.post("", status_code=201, responses={
    400: {
        "description": "Not a CloudEvent, unsupported event type, or the event could not be mapped to observations.",
        "content": {
            "application/json": {
                "example": {"detail": "Failed to map function.updated event to observations"}
            }
        }
    },
    500: {"description": "The observations could not be stored."},
})
async def handle_cloudevent(request: Request) -> Response:
    """Decode an incoming event and store the resulting observations."""
    body = await request.body()
    try:
        event = from_http(dict(request.headers), body)
    except GenericException as e:
        logger.error(f"Failed to parse CloudEvent from request: {e}")
        raise HTTPException(status_code=400, detail="Request is not a valid CloudEvent")

    event_type = event["type"]
    if not isinstance(event.data, dict):
        logger.error(f"Failed to parse {event_type} in CloudEvent: data is not a JSON object")
        raise HTTPException(status_code=400, detail=f"{event_type} event data must be a JSON object")

    sensor_observation, ok = decode_event(event_type, event.data)
    if not ok:
        raise HTTPException(status_code=400, detail=f"Failed to map {event_type} event to observations")

    try:
        await run_in_threadpool(observation_manager.add_observation, sensor_observation)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return Response(status_code=201)
