"""Launch the trackbuddy viewer from a source checkout (``python main.py``)."""

from __future__ import annotations

import sys
from pathlib import Path

# Make sure the 'src' directory is on sys.path so 'trackbuddy' can be imported
SRC_DIR = Path(__file__).resolve().parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from trackbuddy.gui.application import main  # noqa: E402

if __name__ == "__main__":
    main(sys.argv)
