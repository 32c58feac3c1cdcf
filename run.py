"""Run QRMeasure from a source checkout."""

import sys
from pathlib import Path

# Add src to path so qrmeasure package is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

from qrmeasure.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
