"""Loading of JSON fixtures stored under tests/fixtures."""

import json
from pathlib import Path
from typing import Any

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
SOLUTIONS_DIR = FIXTURES_DIR / "solutions"


def load_solution_fixture(name: str) -> dict[str, Any]:
    """Load a wire solution fixture by name (e.g. "jit_and_custom")."""
    with open(SOLUTIONS_DIR / f"{name}.json") as f:
        return json.load(f)
