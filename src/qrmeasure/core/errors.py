"""Error types raised by the calibration and measurement core.

All of these are recoverable and local to a single detection or
measurement attempt.
"""


class MeasurementError(Exception):
    """Base class for QRMeasure errors."""


class PayloadParseError(MeasurementError):
    """A marker payload is malformed or missing required fields."""


class InvalidRectangleError(MeasurementError, ValueError):
    """A rectangle has a NaN component or a negative width/height."""


class DegenerateCalibrationError(MeasurementError, ValueError):
    """A marker cannot produce a usable (finite, positive) scale factor."""
