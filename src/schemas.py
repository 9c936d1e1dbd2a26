from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.models.entity import Entity, Property
from core.models.observation import OBSERVATION_FORMAT, Observation, SensorObservation

HYDRA_CONTEXT = "http://www.w3.org/ns/hydra/context.jsonld"


class AppHealthOK(BaseModel):
    status: str
    app: str


class MessageResponse(BaseModel):
    message: str


class _Aliased(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PropertyModel(_Aliased):
    id: str = Field(alias="@id")
    type: str = Field(alias="@type")


class EntityModel(_Aliased):
    context: str = Field(alias="@context")
    id: str = Field(alias="@id")
    type: str = Field(alias="@type")
    is_part_of: Optional[PropertyModel] = Field(None, alias="isPartOf")

    def to_entity(self) -> Entity:
        part_of = None
        if self.is_part_of is not None:
            part_of = Property(id=self.is_part_of.id, type=self.is_part_of.type)
        return Entity(context=self.context, id=self.id, type=self.type, is_part_of=part_of)

    @classmethod
    def from_entity(cls, entity: Entity) -> "EntityModel":
        part_of = None
        if entity.is_part_of is not None:
            part_of = PropertyModel(id=entity.is_part_of.id, type=entity.is_part_of.type)
        return cls(context=entity.context, id=entity.id, type=entity.type, is_part_of=part_of)


class ObservationModel(_Aliased):
    observation_time: datetime = Field(alias="observationTime")
    value: Optional[float] = None
    value_string: Optional[str] = Field(None, alias="valueString")
    value_boolean: Optional[bool] = Field(None, alias="valueBoolean")
    quantity_kind: str = Field(alias="quantityKind")
    sensor_id: str = Field(alias="sensorId")

    def to_observation(self) -> Observation:
        return Observation(
            sensor_id=self.sensor_id,
            observation_time=self.observation_time,
            quantity_kind=self.quantity_kind,
            value=self.value,
            value_string=self.value_string,
            value_boolean=self.value_boolean,
        )

    @classmethod
    def from_observation(cls, observation: Observation) -> "ObservationModel":
        return cls(
            observation_time=observation.observation_time,
            value=observation.value,
            value_string=observation.value_string,
            value_boolean=observation.value_boolean,
            quantity_kind=observation.quantity_kind,
            sensor_id=observation.sensor_id,
        )


class SensorObservationModel(_Aliased):
    format: str = OBSERVATION_FORMAT
    device_id: str = Field(alias="deviceId")
    observations: List[ObservationModel] = Field(default_factory=list)

    def to_sensor_observation(self) -> SensorObservation:
        return SensorObservation(
            device_id=self.device_id,
            observations=[o.to_observation() for o in self.observations],
            format=self.format,
        )


class PartialCollectionView(_Aliased):
    id: str = Field(alias="@id")
    type: str = Field("hydra:PartialCollectionView", alias="@type")
    first: Optional[str] = None
    previous: Optional[str] = None
    next: Optional[str] = None
    last: Optional[str] = None


class HydraCollection(_Aliased):
    context: str = Field(HYDRA_CONTEXT, alias="@context")
    id: str = Field(alias="@id")
    type: str = Field("hydra:Collection", alias="@type")
    total_items: int = Field(alias="hydra:totalItems")
    member: List[Any] = Field(default_factory=list, alias="hydra:member")
    view: Optional[PartialCollectionView] = Field(None, alias="hydra:view")
