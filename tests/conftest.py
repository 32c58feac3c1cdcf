"""Shared test fixtures for QRMeasure."""

import pytest
from pathlib import Path

from qrmeasure.core.geometry import Rectangle
from qrmeasure.core.payload import MarkerPhysicalSize


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Provide a temporary configuration directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def config_manager(tmp_config_dir):
    """Provide a ConfigManager with a temp directory."""
    from qrmeasure.config.manager import ConfigManager

    mgr = ConfigManager(config_dir=tmp_config_dir)
    mgr.load()
    return mgr


@pytest.fixture
def marker_rect():
    """A 200px square marker at the image origin."""
    return Rectangle(0, 0, 200, 200)


@pytest.fixture
def cm_marker():
    """A 5cm x 5cm printed marker."""
    return MarkerPhysicalSize(width=5.0, height=5.0, unit="cm")


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def make_qr_image():
    """Factory rendering a QR code as a large, clean RGB image."""
    cv2 = pytest.importorskip("cv2")
    if not hasattr(cv2, "QRCodeEncoder"):
        pytest.skip("OpenCV build has no QR encoder")
    import numpy as np

    def _make(text: str, module_px: int = 8, border_px: int = 64):
        code = cv2.QRCodeEncoder.create().encode(text)
        code = np.kron(code, np.ones((module_px, module_px), dtype=code.dtype))
        code = np.pad(code, border_px, constant_values=255)
        return np.stack([code] * 3, axis=-1)

    return _make
