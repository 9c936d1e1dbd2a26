"""
Tests for the CloudEvents webhook POST /api/cloudevents.
"""
import base64
import json

import pytest
from fastapi.testclient import TestClient

from main import app

client = TestClient(app)

MESSAGE = {
    "sensorID": "device-1",
    "pack": [
        {"bn": "urn:oma:lwm2m:ext:3303", "bt": 1700000000, "n": "0", "vs": "S1"},
        {"n": "5700", "v": 12.345678},
    ],
    "timestamp": "2023-11-14T22:13:21Z",
}


def binary(event_type: str, data, event_id: str = "1") -> int:
    headers = {
        "ce-specversion": "1.0",
        "ce-id": event_id,
        "ce-source": "iot-core",
        "ce-type": event_type,
        "content-type": "application/json",
    }
    return client.post("/api/cloudevents", content=json.dumps(data), headers=headers).status_code


def members(sensor_id: str, query: str = ""):
    response = client.get(f"/api/observations?sensor_id={sensor_id}&hasObservationTime[ending]=2030-01-01T00:00:00Z{query}")
    return response.json()["hydra:member"]


def test_message_accepted_binary_mode():
    assert binary("message.accepted", MESSAGE) == 201

    stored = members("S1")
    assert len(stored) == 1
    assert stored[0]["value"] == 12.3
    assert stored[0]["quantityKind"] == "Temperature"
    assert stored[0]["observationTime"].startswith("2023-11-14T22:13:20")


def test_message_accepted_structured_mode():
    event = {
        "specversion": "1.0",
        "id": "2",
        "source": "iot-core",
        "type": "message.accepted",
        "datacontenttype": "application/json",
        "data": MESSAGE,
    }
    response = client.post(
        "/api/cloudevents",
        content=json.dumps(event),
        headers={"content-type": "application/cloudevents+json"},
    )
    assert response.status_code == 201
    assert len(members("S1")) == 1


def test_function_updated_building():
    data = {"id": "b1", "type": "building", "subType": "", "building": {"energy": 10.0, "power": 5.0}}
    assert binary("function.updated", data) == 201

    stored = members("b1")
    assert sorted(m["quantityKind"] for m in stored) == ["Energy", "Power"]
    assert stored[0]["observationTime"] == stored[1]["observationTime"]


def test_repeated_event_is_deduplicated():
    assert binary("message.accepted", MESSAGE, "1") == 201
    assert binary("message.accepted", MESSAGE, "2") == 201
    assert len(members("S1")) == 1


def test_rejected_envelope():
    data = dict(MESSAGE, pack=[{"bn": "urn:oma:lwm2m:ext:3303", "bt": 1700000000, "vs": ""}, {"v": 1.0}])
    assert binary("message.accepted", data) == 400


def test_unknown_function_type():
    assert binary("function.updated", {"id": "x", "type": "stopwatch"}) == 400


def test_timer_without_end_time():
    data = {"id": "t1", "type": "timer", "timer": {"startTime": "2024-05-01T10:00:00Z", "state": True}}
    assert binary("function.updated", data) == 400


def test_unsupported_event_type():
    assert binary("device.statusUpdated", {"deviceID": "x"}) == 400


@pytest.mark.parametrize("headers, body", [
    ({"content-type": "application/json"}, json.dumps(MESSAGE)),
    ({"ce-specversion": "1.0", "ce-id": "1", "ce-source": "s", "ce-type": "message.accepted",
      "content-type": "application/json"}, "{not json"),
    ({"content-type": "application/cloudevents+json"}, json.dumps({"type": "message.accepted"})),
])
def test_not_a_cloudevent(headers: dict, body: str):
    response = client.post("/api/cloudevents", content=body, headers=headers)
    assert response.status_code == 400


def structured(event: dict) -> int:
    response = client.post(
        "/api/cloudevents",
        content=json.dumps(event),
        headers={"content-type": "application/cloudevents+json"},
    )
    return response.status_code


def test_structured_mode_base64_data():
    event = {
        "specversion": "1.0",
        "id": "3",
        "source": "iot-core",
        "type": "message.accepted",
        "data_base64": base64.b64encode(json.dumps(MESSAGE).encode()).decode(),
    }
    assert structured(event) == 201
    assert len(members("S1")) == 1


@pytest.mark.parametrize("data", [
    {"data_base64": 123},
    {"data_base64": "not base64!"},
    {"data": "plain text"},
    {"data": [1, 2, 3]},
    {},
])
def test_malformed_structured_event(data: dict):
    event = {"specversion": "1.0", "id": "4", "source": "iot-core", "type": "message.accepted", **data}
    assert structured(event) == 400
    assert members("S1") == []


def test_unknown_specversion():
    event = {"specversion": "0.1", "id": "5", "source": "iot-core", "type": "message.accepted", "data": MESSAGE}
    assert structured(event) == 400


def test_store_failure_is_a_server_error(failing_second_insert):
    data = {"id": "b1", "type": "building", "subType": "", "building": {"energy": 10.0, "power": 5.0}}
    assert binary("function.updated", data) == 500
    assert members("b1") == []
