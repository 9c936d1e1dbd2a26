from core.models.quantity_kind import CONCENTRATION_NAME, QUANTITY_KINDS, Lwm2mType, QuantityKind


def map_quantity_kind(vendor_code: str, disambiguator: str) -> str:
    """
    Translate an LwM2M object type into a canonical quantity kind.
    Unknown codes are returned unchanged so new device types are still stored.
    """
    code = vendor_code.lower()
    if code == Lwm2mType.AIR_QUALITY.value:
        if disambiguator == CONCENTRATION_NAME:
            return QuantityKind.CONCENTRATION
        return QuantityKind.AIR_QUALITY
    return QUANTITY_KINDS.get(code, vendor_code)
