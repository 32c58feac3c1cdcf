"""Tests for marker detection adapters."""

import json
import threading

import numpy as np
import pytest

from qrmeasure.core.geometry import Rectangle
from qrmeasure.detection.detector import Detection
from qrmeasure.detection.worker import DetectionWorker


class FakeDetector:
    def __init__(self, detections=None, error=None):
        self._detections = detections or []
        self._error = error
        self.threads = []

    def detect(self, image):
        self.threads.append(threading.current_thread().name)
        if self._error is not None:
            raise self._error
        return list(self._detections)


class TestDetectionWorker:
    def test_submit_returns_future(self):
        found = [Detection(Rectangle(0, 0, 1, 1), "x")]
        detector = FakeDetector(found)
        with DetectionWorker(detector) as worker:
            result = worker.submit(np.zeros((4, 4, 3), dtype=np.uint8)).result(timeout=5)
        assert result == found
        assert detector.threads[0].startswith("qr-detect")

    def test_errors_surface_through_future(self):
        with DetectionWorker(FakeDetector(error=RuntimeError("camera fell over"))) as worker:
            future = worker.submit(None)
            with pytest.raises(RuntimeError, match="camera fell over"):
                future.result(timeout=5)


class TestOpenCVQRDetector:
    def test_detects_payload_and_frame(self, make_qr_image):
        payload = json.dumps({"width": 5, "height": 5, "units": "cm"})
        image = make_qr_image(payload)

        from qrmeasure.detection.detector import OpenCVQRDetector

        detections = OpenCVQRDetector().detect(image)
        assert len(detections) == 1
        detection = detections[0]
        assert detection.payload == payload
        assert detection.raw_value == payload

        rect = detection.rect
        assert rect.is_valid()
        assert rect.width > 0
        assert rect.width == pytest.approx(rect.height, rel=0.05)
        assert rect.max_x <= image.shape[1] + 1
        assert rect.max_y <= image.shape[0] + 1

    def test_blank_image(self):
        pytest.importorskip("cv2")
        from qrmeasure.detection.detector import OpenCVQRDetector

        blank = np.full((200, 200, 3), 255, dtype=np.uint8)
        assert OpenCVQRDetector().detect(blank) == []
