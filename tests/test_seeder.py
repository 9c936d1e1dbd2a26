import io

from core.models.entity import EntityType
from core.service_manager import service_manager
from core.services.entity_manager import entity_manager
from core.services.seeder import RecRow, read_rows, seed, seed_file


def test_read_rows_skips_header():
    rows = read_rows(io.StringIO("space;building;sensor\ns1;b1;x1\ns1;b1;x2\n"))
    assert rows == [RecRow("s1", "b1", "x1"), RecRow("s1", "b1", "x2")]


def test_read_rows_skips_short_lines():
    rows = read_rows(io.StringIO("space;building;sensor\ns1;b1\ns1;b1;x1\n"))
    assert rows == [RecRow("s1", "b1", "x1")]


def test_read_rows_empty_input():
    assert read_rows(io.StringIO("")) == []


def test_seed_creates_hierarchy(rec_csv):
    assert seed_file(str(rec_csv)) == 3

    assert entity_manager.get_entities(EntityType.SPACE.iri)[0] == 1
    assert entity_manager.get_entities(EntityType.BUILDING.iri)[0] == 2
    assert entity_manager.get_entities(EntityType.SENSOR.iri)[0] == 3

    building = entity_manager.get_entity("building-2", EntityType.BUILDING.iri)
    assert building.is_part_of.id == "space-1"


def test_seed_twice_is_harmless(rec_csv):
    seed_file(str(rec_csv))
    seed_file(str(rec_csv))
    assert entity_manager.get_entities(EntityType.SENSOR.iri)[0] == 3


def test_seed_nothing():
    assert seed([]) == 0


def test_start_services_seeds_when_file_exists(rec_csv):
    service_manager.start_services("sqlite://", str(rec_csv), 60)
    assert entity_manager.get_entities(EntityType.SENSOR.iri)[0] == 3


def test_start_services_without_file(tmp_path):
    service_manager.start_services("sqlite://", str(tmp_path / "missing.csv"), 60)
    assert entity_manager.get_entities(EntityType.SENSOR.iri)[0] == 0
