from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from swc2dot import Config, StyleConfig
from swc2dot.config import Layout, Processing

EXAMPLE_LINES = [
    "# Two-compartment neuron",
    "",
    "1 1 0 0 0 1.0 -1",
    "2 2 1 1 1 0.5 1",
]

BRANCHED_LINES = [
    "1 1 0.0 0.0 0.0 5.0 -1",
    "2 3 1.0 0.0 0.0 1.0 1",
    "3 3 2.0 0.0 0.0 1.0 2",
    "4 3 2.0 1.0 0.0 1.0 2",
    "5 2 -1.0 0.0 0.0 0.5 1",
]


def write_swc(path: Path, lines: List[str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def plain_style() -> StyleConfig:
    """Style configuration with no options at all."""
    return StyleConfig()


@pytest.fixture
def quiet_config() -> Config:
    return Config(layout=Layout(), processing=Processing(quiet=True), style=StyleConfig.default())
