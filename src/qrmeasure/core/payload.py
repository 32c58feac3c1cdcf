"""Marker payload parsing.

A calibration marker encodes its printed size as a JSON object, e.g.
``{"width": 5, "height": 5, "units": "cm"}``. Marker content is untrusted
input, so decoding goes through a strict schema: numbers must be numbers,
the unit must be a string, and anything else is a parse failure.
"""

from dataclasses import dataclass

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from qrmeasure.core.errors import PayloadParseError


@dataclass(frozen=True)
class MarkerPhysicalSize:
    """Printed size of a calibration marker.

    The unit is an opaque label; it is echoed back in measurements and
    never converted.
    """

    width: float
    height: float
    unit: str


class _MarkerPayloadSchema(BaseModel):
    """Wire shape of the JSON encoded in a marker."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    width: float = Field(allow_inf_nan=False)
    height: float = Field(allow_inf_nan=False)
    units: str = Field(min_length=1)


def decode_payload(text: str | None) -> MarkerPhysicalSize:
    """Decode marker text into a MarkerPhysicalSize.

    Raises PayloadParseError if the text is absent, is not a JSON object,
    or lacks a numeric ``width``/``height`` or a non-empty string ``units``.
    """
    if text is None:
        raise PayloadParseError("Marker has no payload")
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PayloadParseError(f"Payload is not UTF-8: {e}") from e
    if not isinstance(text, str):
        raise PayloadParseError(f"Payload must be text, got {type(text).__name__}")

    try:
        schema = _MarkerPayloadSchema.model_validate_json(text)
    except ValidationError as e:
        reasons = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'payload'}: {err['msg']}"
            for err in e.errors()
        )
        raise PayloadParseError(f"Invalid marker payload ({reasons})") from e

    return MarkerPhysicalSize(
        width=float(schema.width),
        height=float(schema.height),
        unit=schema.units,
    )


def parse_payload(text: str | None) -> MarkerPhysicalSize | None:
    """Parse marker text, returning None when it is not a usable payload."""
    try:
        return decode_payload(text)
    except PayloadParseError as e:
        logger.debug(f"Ignoring marker payload {text!r}: {e}")
        return None
