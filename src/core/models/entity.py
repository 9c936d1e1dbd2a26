"""RealEstateCore entity types and the entity model."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EntityType(Enum):
    """Entity types stored in the hierarchy, keyed by their short type name."""
    SPACE = ("space", "dtmi:org:w3id:rec:Space;1", "https://dev.realestatecore.io/contexts/Space.jsonld")
    BUILDING = ("building", "dtmi:org:w3id:rec:Building;1", "https://dev.realestatecore.io/contexts/Building.jsonld")
    SENSOR = ("sensor", "dtmi:org:brickschema:schema:Brick:Sensor;1", "https://dev.realestatecore.io/contexts/Sensor.jsonld")
    OBSERVATION_EVENT = (
        "observationevent",
        "dtmi:org:w3id:rec:ObservationEvent;1",
        "https://dev.realestatecore.io/contexts/ObservationEvent.jsonld",
    )

    def __init__(self, type_name: str, iri: str, context: str):
        self.type_name = type_name
        self.iri = iri
        self.context = context


def type_from_type_name(type_name: str) -> str:
    """Return the type IRI for a short type name, or an empty string if unknown."""
    for entity_type in EntityType:
        if entity_type.type_name == type_name.lower():
            return entity_type.iri
    return ""


@dataclass
class Property:
    id: str
    type: str


@dataclass
class Entity:
    context: str
    id: str
    type: str
    is_part_of: Optional[Property] = None
