"""Version information for QRMeasure."""

__version__ = "0.3.0"
__version_display__ = f"QRMeasure V{__version__}"
