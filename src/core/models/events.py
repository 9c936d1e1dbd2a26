"""
Inbound event envelopes.

message.accepted carries a SenML pack from a device, function.updated carries
the state of a higher level function (counter, level, timer...) as a tagged
union keyed by the "type" field.
"""
from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

MESSAGE_ACCEPTED = "message.accepted"
FUNCTION_UPDATED = "function.updated"


class _Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SenMLRecord(_Envelope):
    """One SenML record (RFC 8428), JSON labels as aliases."""
    base_name: str = Field("", alias="bn")
    base_time: float = Field(0.0, alias="bt")
    base_unit: str = Field("", alias="bu")
    base_value: Optional[float] = Field(None, alias="bv")
    name: str = Field("", alias="n")
    unit: str = Field("", alias="u")
    time: float = Field(0.0, alias="t")
    update_time: float = Field(0.0, alias="ut")
    value: Optional[float] = Field(None, alias="v")
    string_value: str = Field("", alias="vs")
    bool_value: Optional[bool] = Field(None, alias="vb")
    data_value: str = Field("", alias="vd")
    sum: Optional[float] = Field(None, alias="s")


class MessageAccepted(_Envelope):
    sensor_id: str = Field("", alias="sensorID")
    pack: List[SenMLRecord] = Field(default_factory=list)
    timestamp: Optional[datetime] = None


class BuildingPayload(_Envelope):
    energy: float = 0.0
    power: float = 0.0


class CounterPayload(_Envelope):
    counter: int = 0
    state: bool = False


class LevelPayload(_Envelope):
    current: float = 0.0
    percent: Optional[float] = None
    offset: Optional[float] = None


class PresencePayload(_Envelope):
    state: bool = False


class TimerPayload(_Envelope):
    start_time: Optional[datetime] = Field(None, alias="startTime")
    end_time: Optional[datetime] = Field(None, alias="endTime")
    # nanoseconds
    duration: Optional[int] = None
    state: bool = False


class WaterQualityPayload(_Envelope):
    temperature: float = 0.0
    timestamp: datetime


class _FunctionUpdated(_Envelope):
    id: str
    sub_type: str = Field("", alias="subType")


class BuildingUpdated(_FunctionUpdated):
    type: Literal["building"]
    building: BuildingPayload


class CounterUpdated(_FunctionUpdated):
    type: Literal["counter"]
    counter: CounterPayload


class LevelUpdated(_FunctionUpdated):
    type: Literal["level"]
    level: LevelPayload


class PresenceUpdated(_FunctionUpdated):
    type: Literal["presence"]
    presence: PresencePayload


class TimerUpdated(_FunctionUpdated):
    type: Literal["timer"]
    timer: TimerPayload


class WaterQualityUpdated(_FunctionUpdated):
    type: Literal["waterquality"]
    waterquality: WaterQualityPayload


FunctionUpdated = Annotated[
    Union[BuildingUpdated, CounterUpdated, LevelUpdated, PresenceUpdated, TimerUpdated, WaterQualityUpdated],
    Field(discriminator="type"),
]

function_updated_adapter: TypeAdapter = TypeAdapter(FunctionUpdated)
