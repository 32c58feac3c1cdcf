"""Marker detection for QRMeasure.

Detection itself is delegated to a third-party QR detector; this module
only adapts its output into Detection values (a bounding rectangle in the
coordinate space of the image handed to the detector, plus the decoded
payload text).
"""

from dataclasses import dataclass
from typing import Protocol

from loguru import logger

from qrmeasure.core.geometry import Rectangle


@dataclass(frozen=True)
class Detection:
    """One detected marker."""

    rect: Rectangle
    payload: str | None = None
    raw_value: str | None = None

    def describe(self) -> str:
        """One-line summary used in detection results."""
        return (
            f"DisplayValue: {self.payload or ''}, "
            f"RawValue: {self.raw_value or ''}, Frame: {self.rect}"
        )


class Detector(Protocol):
    """Anything that finds markers in an image."""

    def detect(self, image) -> list[Detection]: ...


class OpenCVQRDetector:
    """Detector backed by OpenCV's QR code detector."""

    def __init__(self):
        import cv2

        self._cv2 = cv2
        self._detector = cv2.QRCodeDetector()

    def detect(self, image) -> list[Detection]:
        """Detect and decode every QR code in an RGB or grayscale image."""
        import numpy as np

        cv2 = self._cv2
        pixels = np.asarray(image)
        if pixels.ndim == 3:
            pixels = cv2.cvtColor(pixels, cv2.COLOR_RGB2GRAY)

        ok, decoded, points, _ = self._detector.detectAndDecodeMulti(pixels)
        if not ok or points is None:
            logger.info("No QR codes found")
            return []

        detections = []
        for text, corners in zip(decoded, points):
            rect = Rectangle.from_points(corners.reshape(-1, 2))
            payload = text or None
            detections.append(Detection(rect=rect, payload=payload, raw_value=payload))
            logger.debug(f"QR code at {rect}: {payload!r}")

        logger.info(f"Detected {len(detections)} QR code(s)")
        return detections
