"""Test fixture utilities for loading recorded response bodies.

Bodies live under ``bodies/`` as plain JSON files named after the resource
and the call that produced them, e.g. ``pool_get.json``. Tests load them
through the ``load_body`` fixture from ``conftest.py``.
"""

import json
from pathlib import Path

FIXTURES_DIR = Path(__file__).parent
BODIES_DIR = FIXTURES_DIR / "bodies"


def load_body_fixture(name: str) -> dict:
    """Load a response body fixture by name, with or without ``.json``.

    Raises:
        FileNotFoundError: If the fixture doesn't exist.
    """
    if not name.endswith(".json"):
        name = f"{name}.json"
    path = BODIES_DIR / name
    if not path.exists():
        raise FileNotFoundError(f"Fixture not found: {path}")
    with open(path) as f:
        return json.load(f)

