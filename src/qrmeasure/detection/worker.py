"""Background marker detection.

Detection can be slow on full-resolution photos, so it runs on a worker
thread and hands back a Future. Apply the result to a MeasurementSession
from the thread that owns it.
"""

from concurrent.futures import Future, ThreadPoolExecutor

from loguru import logger

from qrmeasure.detection.detector import Detection, Detector


class DetectionWorker:
    """Runs a Detector on a thread pool."""

    def __init__(self, detector: Detector, max_workers: int = 1):
        self._detector = detector
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="qr-detect")

    def submit(self, image) -> "Future[list[Detection]]":
        """Queue an image for detection."""
        return self._pool.submit(self._run, image)

    def _run(self, image) -> list[Detection]:
        try:
            return self._detector.detect(image)
        except Exception as e:
            logger.error(f"Marker detection failed: {e}")
            raise

    def shutdown(self, wait: bool = True):
        self._pool.shutdown(wait=wait)

    def __enter__(self) -> "DetectionWorker":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
