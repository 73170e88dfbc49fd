#!/usr/bin/env python
"""
Development launcher for NoteGraph (no install needed).

Usage:
    python run.py [clusters.json] [-v]
"""

import sys
from pathlib import Path

# Make the src/ packages importable from a checkout
sys.path.insert(0, str(Path(__file__).parent / "src"))

from notegraph_app.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
