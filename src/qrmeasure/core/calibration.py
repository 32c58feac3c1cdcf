"""Calibration and measurement engine.

Calibration turns a detected marker into a scale factor in pixels per
physical unit. Measurement divides any rectangle's pixel width and height
by that factor. All rectangles are in the photo's native pixel space.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple

from loguru import logger

from qrmeasure.core.errors import DegenerateCalibrationError
from qrmeasure.core.geometry import Rectangle
from qrmeasure.core.payload import MarkerPhysicalSize

UNCALIBRATED_UNIT_LABEL = "px"
DEFAULT_LABEL_DECIMALS = 2


@dataclass(frozen=True)
class CalibrationState:
    """Pixels per physical unit, and the unit those values are in.

    Always replaced as a whole. The uncalibrated state has a scale of 1.0
    and reports raw pixels.
    """

    scale_factor: float = 1.0
    unit_label: str = UNCALIBRATED_UNIT_LABEL

    @classmethod
    def uncalibrated(cls, config=None) -> "CalibrationState":
        """Default state, optionally taken from the ``calibration`` config group.

        Unusable config values (a scale that is not a positive number, an
        empty or non-text unit label) fall back to the built-in defaults.
        """
        if config is None:
            return cls()

        raw_scale = config.get("calibration", "default_scale_factor", 1.0)
        try:
            scale_factor = float(raw_scale)
        except (TypeError, ValueError):
            scale_factor = math.nan
        if not math.isfinite(scale_factor) or scale_factor <= 0:
            logger.warning(f"Invalid default_scale_factor {raw_scale!r} in config, using 1.0")
            scale_factor = 1.0

        unit_label = config.get("calibration", "uncalibrated_unit_label", UNCALIBRATED_UNIT_LABEL)
        if not isinstance(unit_label, str) or not unit_label:
            logger.warning(
                f"Invalid uncalibrated_unit_label {unit_label!r} in config, using {UNCALIBRATED_UNIT_LABEL!r}"
            )
            unit_label = UNCALIBRATED_UNIT_LABEL

        return cls(scale_factor=scale_factor, unit_label=unit_label)


class Measurement(NamedTuple):
    """A rectangle's size in calibrated units."""

    width: float
    height: float
    label: str


def calibrate(marker_rect: Rectangle, payload: MarkerPhysicalSize) -> CalibrationState:
    """Derive a calibration from a marker's detected rectangle and printed size.

    Only the marker's width drives the scale; its printed height is carried
    in the payload but not used.
    """
    marker_rect.validate()
    if not math.isfinite(payload.width) or payload.width <= 0:
        raise DegenerateCalibrationError(
            f"Marker physical width must be positive, got {payload.width}"
        )

    pixel_perimeter = 4 * marker_rect.width
    physical_perimeter = 4 * payload.width
    scale_factor = pixel_perimeter / physical_perimeter

    if not math.isfinite(scale_factor) or scale_factor <= 0:
        raise DegenerateCalibrationError(
            f"Marker of width {marker_rect.width}px gives unusable scale {scale_factor}"
        )

    logger.debug(f"1 {payload.unit} is {scale_factor:.4f} px (marker {marker_rect})")
    return CalibrationState(scale_factor=scale_factor, unit_label=payload.unit)


def label_decimals_from_config(config) -> int:
    """Decimal places for box labels from the ``calibration`` config group."""
    raw = config.get("calibration", "label_decimals", DEFAULT_LABEL_DECIMALS)
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        logger.warning(f"Invalid label_decimals {raw!r} in config, using {DEFAULT_LABEL_DECIMALS}")
        return DEFAULT_LABEL_DECIMALS
    return raw


def format_label(width: float, height: float, unit: str, decimals: int = DEFAULT_LABEL_DECIMALS) -> str:
    """Two-line label shown on a measured box."""
    return f"{width:.{decimals}f} {unit} \n {height:.{decimals}f} {unit}"


def measure(
    box: Rectangle,
    calibration: CalibrationState,
    decimals: int = DEFAULT_LABEL_DECIMALS,
) -> Measurement:
    """Convert a rectangle's pixel size into calibrated units."""
    box.validate()
    if not calibration.scale_factor > 0:
        raise DegenerateCalibrationError(
            f"Scale factor must be positive, got {calibration.scale_factor}"
        )

    width = box.width / calibration.scale_factor
    height = box.height / calibration.scale_factor
    return Measurement(
        width=width,
        height=height,
        label=format_label(width, height, calibration.unit_label, decimals),
    )
