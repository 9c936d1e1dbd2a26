"""
Decoders turning inbound event envelopes into canonical observations.

Decoders never raise on bad input. They return (SensorObservation, ok) and a
rejected envelope yields ok == False with no observations at all.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

from pydantic import ValidationError

from core.models.events import (
    FUNCTION_UPDATED,
    MESSAGE_ACCEPTED,
    BuildingUpdated,
    CounterUpdated,
    FunctionUpdated,
    LevelUpdated,
    MessageAccepted,
    PresenceUpdated,
    TimerUpdated,
    WaterQualityUpdated,
    function_updated_adapter,
)
from core.models.observation import Observation, SensorObservation
from core.models.quantity_kind import QuantityKind
from core.processing.normalizer import DEFAULT_DIGITS, TEMPERATURE_DIGITS, round_value
from core.processing.quantity_mapper import map_quantity_kind

logger = logging.getLogger(__name__)

LIFEBUOY_SUBTYPE = "lifebuoy"
NANOSECONDS_PER_SECOND = 1_000_000_000

Decoded = Tuple[SensorObservation, bool]


def _rejected(device_id: str = "") -> Decoded:
    return SensorObservation(device_id=device_id), False


def _as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _from_epoch(base_time: float) -> datetime:
    return datetime.fromtimestamp(int(base_time), tz=timezone.utc)


def decode_message_accepted(message: MessageAccepted) -> Decoded:
    """
    Map a SenML pack to a single observation.
    Record 0 holds the sensor id (vs), base time (bt) and object type (bn),
    record 1 holds the value and the record name used to tell apart
    sub-types of the same object.
    """
    if len(message.pack) < 2:
        logger.warning(f"Rejected message from {message.sensor_id}: pack has {len(message.pack)} record(s)")
        return _rejected(message.sensor_id)

    header, record = message.pack[0], message.pack[1]
    sensor_id = header.string_value
    quantity_kind = map_quantity_kind(header.base_name, record.name)

    if sensor_id == "" or quantity_kind == "":
        logger.warning(f"Rejected message from {message.sensor_id}: missing sensor id or quantity kind")
        return _rejected(message.sensor_id)

    try:
        observation_time = _from_epoch(header.base_time)
    except (OverflowError, OSError, ValueError):
        logger.warning(f"Rejected message from {message.sensor_id}: invalid base time {header.base_time}")
        return _rejected(message.sensor_id)

    digits = TEMPERATURE_DIGITS if quantity_kind == QuantityKind.TEMPERATURE else DEFAULT_DIGITS

    observation = Observation(
        sensor_id=sensor_id,
        observation_time=observation_time,
        quantity_kind=quantity_kind,
        value=round_value(record.value, digits),
        # an empty vs means no string value at all
        value_string=record.string_value or None,
        value_boolean=record.bool_value,
    )
    return SensorObservation(device_id=message.sensor_id, observations=[observation]), True


def decode_function_updated(function: FunctionUpdated, now: Optional[datetime] = None) -> Decoded:
    """
    Map a function.updated envelope to its observations.
    Building emits energy and power, every other function emits one observation.
    """
    ts = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    device_id = f"{function.type}:{function.sub_type}:{function.id}"
    result = SensorObservation(device_id=device_id)

    def emit(quantity_kind: str, observation_time: datetime = ts, **values: Any) -> None:
        result.observations.append(Observation(
            sensor_id=function.id,
            observation_time=observation_time,
            quantity_kind=quantity_kind,
            **values,
        ))

    if isinstance(function, BuildingUpdated):
        emit(QuantityKind.ENERGY, value=function.building.energy)
        emit(QuantityKind.POWER, value=function.building.power)

    elif isinstance(function, CounterUpdated):
        emit(QuantityKind.LEVEL, value=float(function.counter.counter), value_boolean=function.counter.state)

    elif isinstance(function, LevelUpdated):
        emit(QuantityKind.LEVEL, value=function.level.current)

    elif isinstance(function, PresenceUpdated):
        kind = QuantityKind.LIFEBUOY if function.sub_type == LIFEBUOY_SUBTYPE else QuantityKind.PRESENCE
        emit(kind, value_boolean=function.presence.state)

    elif isinstance(function, TimerUpdated):
        timer = function.timer
        if timer.end_time is None or timer.duration is None:
            logger.warning(f"Rejected timer {device_id}: endTime and duration are required")
            return _rejected(device_id)
        emit(
            QuantityKind.TIMER,
            observation_time=_as_utc(timer.end_time),
            value=timer.duration / NANOSECONDS_PER_SECOND,
            value_boolean=timer.state,
        )

    elif isinstance(function, WaterQualityUpdated):
        emit(
            QuantityKind.TEMPERATURE,
            observation_time=_as_utc(function.waterquality.timestamp),
            value=round_value(function.waterquality.temperature, TEMPERATURE_DIGITS),
        )

    else:
        logger.warning(f"Rejected function {device_id}: unsupported type")
        return _rejected(device_id)

    return result, True


def decode_event(event_type: str, data: Any) -> Decoded:
    """Validate a raw event payload and run the decoder matching its event type."""
    try:
        if event_type == MESSAGE_ACCEPTED:
            return decode_message_accepted(MessageAccepted.model_validate(data))
        if event_type == FUNCTION_UPDATED:
            return decode_function_updated(function_updated_adapter.validate_python(data))
    except ValidationError as e:
        logger.warning(f"Rejected {event_type} event: {e.error_count()} validation error(s)")
        return _rejected()

    logger.warning(f"Rejected event of unsupported type {event_type!r}")
    return _rejected()
