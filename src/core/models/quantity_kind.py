"""LwM2M object codes and the canonical quantity kinds they map to."""
from enum import Enum
from types import MappingProxyType

LWM2M_PREFIX = "urn:oma:lwm2m:ext:"

# SenML record name marking a concentration reading on the air quality object
CONCENTRATION_NAME = "17"


class Lwm2mType(Enum):
    """Known LwM2M object types reported by devices."""
    AIR_QUALITY = LWM2M_PREFIX + "3428"
    CONDUCTIVITY = LWM2M_PREFIX + "3327"
    DIGITAL_INPUT = LWM2M_PREFIX + "3200"
    DISTANCE = LWM2M_PREFIX + "3330"
    ENERGY = LWM2M_PREFIX + "3331"
    HUMIDITY = LWM2M_PREFIX + "3304"
    ILLUMINANCE = LWM2M_PREFIX + "3301"
    POWER = LWM2M_PREFIX + "3328"
    PRESENCE = LWM2M_PREFIX + "3302"
    PRESSURE = LWM2M_PREFIX + "3323"
    TEMPERATURE = LWM2M_PREFIX + "3303"
    WATERMETER = LWM2M_PREFIX + "3424"


class QuantityKind:
    """Canonical quantity kind names used in stored observations."""
    AIR_QUALITY = "diwise:AirQuality"
    CONCENTRATION = "Concentration"
    CONDUCTIVITY = "Conductivity"
    DIGITAL_INPUT = "diwise:DigitalInput"
    DISTANCE = "Distance"
    ENERGY = "Energy"
    ILLUMINANCE = "Illuminance"
    LEVEL = "diwise:Level"
    LIFEBUOY = "diwise:Lifebuoy"
    POWER = "Power"
    PRESENCE = "diwise:Presence"
    PRESSURE = "Pressure"
    RELATIVE_HUMIDITY = "RelativeHumidity"
    TEMPERATURE = "Temperature"
    TIMER = "diwise:Timer"
    VOLUME = "Volume"


# Air quality is resolved separately since it depends on the record name.
QUANTITY_KINDS = MappingProxyType({
    Lwm2mType.CONDUCTIVITY.value: QuantityKind.CONDUCTIVITY,
    Lwm2mType.DIGITAL_INPUT.value: QuantityKind.DIGITAL_INPUT,
    Lwm2mType.DISTANCE.value: QuantityKind.DISTANCE,
    Lwm2mType.ENERGY.value: QuantityKind.ENERGY,
    Lwm2mType.HUMIDITY.value: QuantityKind.RELATIVE_HUMIDITY,
    Lwm2mType.ILLUMINANCE.value: QuantityKind.ILLUMINANCE,
    Lwm2mType.POWER.value: QuantityKind.POWER,
    Lwm2mType.PRESENCE.value: QuantityKind.PRESENCE,
    Lwm2mType.PRESSURE.value: QuantityKind.PRESSURE,
    Lwm2mType.TEMPERATURE.value: QuantityKind.TEMPERATURE,
    Lwm2mType.WATERMETER.value: QuantityKind.VOLUME,
})
