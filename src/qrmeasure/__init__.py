"""
QRMeasure - marker-calibrated measurement of boxes in photographs.

A printed QR code encodes its own physical width, height and unit. Once the
code is detected in a photo, its apparent size gives a pixel-to-unit scale
factor, and any rectangle drawn over the photo can be reported in physical
units.
"""

from qrmeasure.version import __version__, __version_display__

__all__ = ["__version__", "__version_display__"]
