"""Pytest configuration.

This conftest ensures tests can import the `querystore` package when running `pytest` from a
checkout without installing it.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure `import querystore...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))
