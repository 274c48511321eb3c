"""Aircraft state and lookup of aircraft model files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

MODELS_DIR = Path("include") / "models"
MODEL_SUFFIX = ".obj"


@dataclass
class PlaneShape:
    """An aircraft: its model file, movement and condition."""

    name: str = ""
    model_path: Path | None = None
    is_dead: bool = False
    direction: float = 0.0
    max_speed: int = 0
    current_speed: int = 0
    max_health: float = 0.0
    current_health: float = 0.0
    fuel: float = 0.0


def make_plane_path(plane_type: str, root: str | Path = ".") -> Path | None:
    """Path of the model file for ``plane_type`` under ``root``, or None if absent."""
    path = Path(root) / MODELS_DIR / f"{plane_type}{MODEL_SUFFIX}"
    return path if path.is_file() else None