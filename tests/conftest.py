"""
Shared test configuration.

Puts the `api/` source root on sys.path so tests import packages the same
way `main.py` does (`from swift_codes import ...`).
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
for path in (ROOT_DIR, ROOT_DIR / "api"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
