"""Default configuration values for QRMeasure.

Configuration is organized into named groups.
"""

DEFAULT_CONFIG = {
    # --- Calibration ---
    "calibration": {
        "default_scale_factor": 1.0,  # pixels per unit before any marker is seen
        "uncalibrated_unit_label": "px",
        "label_decimals": 2,
    },
    # --- Measurement boxes ---
    "boxes": {
        "default_width": 100.0,  # display points
        "default_height": 100.0,
    },
    # --- Detection ---
    "detection": {
        "max_workers": 1,
    },
    # --- Logging ---
    "logging": {
        "log_level": "INFO",  # DEBUG, INFO, WARNING, ERROR, CRITICAL
        "log_to_file": True,
        "log_retention_days": 30,
        "log_max_size_mb": 50,
        "log_console_output": True,
    },
}
