"""
Seeds the entity hierarchy from a ';' separated file with the columns
space;building;sensor and a header row.
"""
import csv
import logging
from pathlib import Path
from typing import Iterable, List, NamedTuple, TextIO

from core.models.entity import Entity, EntityType, Property
from core.services.entity_manager import entity_manager

logger = logging.getLogger(__name__)


class RecRow(NamedTuple):
    space: str
    building: str
    sensor: str


def read_rows(reader: TextIO) -> List[RecRow]:
    """Parse the input, an unreadable file yields no rows at all."""
    try:
        rows = list(csv.reader(reader, delimiter=";"))
    except csv.Error as e:
        logger.error(f"Failed to read REC input: {e}")
        return []

    recs = []
    for line, row in enumerate(rows[1:], start=2):
        if len(row) < 3:
            logger.warning(f"Skipping line {line}: expected space;building;sensor")
            continue
        recs.append(RecRow(*row[:3]))
    return recs


def seed(rows: Iterable[RecRow]) -> int:
    """Create spaces, buildings and sensors. Returns the number of sensors seeded."""
    last_space = ""
    last_building = ""
    count = 0

    for row in rows:
        if row.space != last_space:
            entity_manager.add_entity(Entity(
                context=EntityType.SPACE.context,
                id=row.space,
                type=EntityType.SPACE.iri,
            ))
            last_space = row.space

        if row.building != last_building:
            entity_manager.add_entity(Entity(
                context=EntityType.BUILDING.context,
                id=row.building,
                type=EntityType.BUILDING.iri,
                is_part_of=Property(id=row.space, type=EntityType.SPACE.iri),
            ))
            last_building = row.building

        entity_manager.add_entity(Entity(
            context=EntityType.SENSOR.context,
            id=row.sensor,
            type=EntityType.SENSOR.iri,
            is_part_of=Property(id=row.building, type=EntityType.BUILDING.iri),
        ))
        count += 1

    return count


def seed_file(path: str) -> int:
    with open(Path(path), "r", newline="") as f:
        count = seed(read_rows(f))
    logger.info(f"Seeded {count} sensor(s) from {path}")
    return count
