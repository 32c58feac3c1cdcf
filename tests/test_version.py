"""Tests for version info."""

from qrmeasure import __version__, __version_display__


def test_version_format():
    """Version string follows semver format."""
    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(p.isdigit() for p in parts)


def test_version_display():
    """Display version includes program name."""
    assert __version_display__.startswith("QRMeasure V")
    assert __version__ in __version_display__


def test_version_matches_pyproject(project_root):
    """Package version and pyproject version agree."""
    text = (project_root / "pyproject.toml").read_text(encoding="utf-8")
    assert f'version = "{__version__}"' in text
