"""
Canonical observation models.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

OBSERVATION_FORMAT = "rec3.1.1"


@dataclass
class Observation:
    """
    A single normalized time-series reading from one sensor.
    Any combination of value, value_string and value_boolean may be set.
    """
    sensor_id: str
    observation_time: datetime
    quantity_kind: str
    value: Optional[float] = None
    value_string: Optional[str] = None
    value_boolean: Optional[bool] = None

    def values(self) -> tuple:
        return (self.value, self.value_string, self.value_boolean)


@dataclass
class SensorObservation:
    """A batch of observations reported by one device."""
    device_id: str
    observations: List[Observation] = field(default_factory=list)
    format: str = OBSERVATION_FORMAT
