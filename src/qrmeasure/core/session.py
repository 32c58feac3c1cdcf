"""Measurement session.

Owns the current calibration for one photo and applies detector output to
it. Detector rectangles and measured boxes arrive in display space and are
mapped into image space with ``display_to_image`` before they reach the
engine.
"""

import threading

from loguru import logger

from qrmeasure.core.boxes import MeasuredBox
from qrmeasure.core.calibration import (
    DEFAULT_LABEL_DECIMALS,
    CalibrationState,
    Measurement,
    calibrate,
    label_decimals_from_config,
    measure,
)
from qrmeasure.core.errors import MeasurementError
from qrmeasure.core.geometry import AffineTransform
from qrmeasure.core.payload import decode_payload

NO_RESULTS_TEXT = "Barcode detection failed with error: No results found"


class MeasurementSession:
    """Calibration state plus the display-to-image mapping for one photo."""

    def __init__(
        self,
        display_to_image: AffineTransform | None = None,
        default_state: CalibrationState | None = None,
        label_decimals: int = DEFAULT_LABEL_DECIMALS,
    ):
        self._display_to_image = display_to_image or AffineTransform.identity()
        self._default_state = default_state or CalibrationState()
        self._state = self._default_state
        self._calibrated = False
        self._label_decimals = label_decimals
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config, display_to_image: AffineTransform | None = None) -> "MeasurementSession":
        return cls(
            display_to_image=display_to_image,
            default_state=CalibrationState.uncalibrated(config),
            label_decimals=label_decimals_from_config(config),
        )

    @property
    def calibration(self) -> CalibrationState:
        with self._lock:
            return self._state

    @property
    def is_calibrated(self) -> bool:
        with self._lock:
            return self._calibrated

    def reset(self):
        """Drop any calibration and go back to raw pixels."""
        with self._lock:
            self._state = self._default_state
            self._calibrated = False

    def calibrate_from(self, detections) -> int:
        """Recalibrate from detected markers, in detector order.

        Each usable marker replaces the calibration, so the last one wins.
        Markers with unreadable payloads, invalid rectangles or zero width
        are skipped and leave the current calibration in place. Returns how
        many markers produced a calibration.
        """
        applied = 0
        for detection in detections:
            try:
                payload = decode_payload(detection.payload)
                rect = self._display_to_image.apply_to_rect(detection.rect.validate())
                state = calibrate(rect, payload)
            except MeasurementError as e:
                logger.warning(f"Skipping marker at {detection.rect}: {e}")
                continue

            with self._lock:
                self._state = state
                self._calibrated = True
            applied += 1
            logger.info(f"Calibrated: 1 {state.unit_label} = {state.scale_factor:.4f} px")

        if not applied:
            logger.info("No usable markers; calibration unchanged")
        return applied

    def measure_box(self, box: MeasuredBox) -> Measurement | None:
        """Measure a display-space box and update its label.

        Returns None (and keeps the old label) when the box is not a valid
        rectangle, e.g. after being dragged inside out.
        """
        if not box.rect.is_valid():
            logger.debug(f"Not measuring invalid box {box.rect}")
            return None

        image_rect = self._display_to_image.apply_to_rect(box.rect)
        result = measure(image_rect, self.calibration, self._label_decimals)
        box.label = result.label
        return result

    @staticmethod
    def results_text(detections) -> str:
        """Human-readable summary of a detection pass."""
        if not detections:
            return NO_RESULTS_TEXT
        return "\n".join(d.describe() for d in detections)
