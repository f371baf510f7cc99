"""Configuration loading and dataclasses for obstacle scenarios."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import yaml


@dataclass
class PaletteConfig:
    """
    Grid and geometry of one tabulated palette.

    ``sets`` maps each set id to the clearance margin its value function
    subtracts from the obstacle distance.
    """

    name: str
    model: str  # 'double_integrator' or 'dubins'
    lower: np.ndarray
    upper: np.ndarray
    points: List[int]
    sets: Dict[str, float] = field(default_factory=lambda: {"default": 0.0})
    half_width: Optional[float] = None
    half_height: Optional[float] = None
    radius: Optional[float] = None

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "PaletteConfig":
        """Create PaletteConfig from dictionary."""
        data = data.copy()
        grid = data.pop("grid", {})
        lower = np.array(grid.get("lower", data.pop("lower", [])), dtype=float)
        upper = np.array(grid.get("upper", data.pop("upper", [])), dtype=float)
        points = [int(p) for p in grid.get("points", data.pop("points", []))]
        if not (len(lower) == len(upper) == len(points)):
            raise ValueError(f"Palette {name!r}: grid lower/upper/points lengths differ")
        sets = {str(k): float(v) for k, v in data.pop("sets", {"default": 0.0}).items()}
        return cls(name=name, lower=lower, upper=upper, points=points, sets=sets, **data)

    def axes(self) -> List[np.ndarray]:
        """Grid coordinates along each dimension."""
        return [
            np.linspace(lo, hi, n)
            for lo, hi, n in zip(self.lower, self.upper, self.points)
        ]


@dataclass
class ObstacleConfig:
    """Configuration for a single obstacle."""

    type: str  # 'box' or 'round'
    center: np.ndarray
    palette: str
    half_width: Optional[float] = None
    half_height: Optional[float] = None
    radius: Optional[float] = None
    trim: float = 0.0
    destroyed: bool = False
    undetected: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObstacleConfig":
        """Create ObstacleConfig from dictionary."""
        data = data.copy()
        data["center"] = np.array(data.get("center", [0.0, 0.0]), dtype=float)
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary for the obstacle factories (None values dropped)."""
        data = {
            "type": self.type,
            "center": self.center.tolist(),
            "palette": self.palette,
            "half_width": self.half_width,
            "half_height": self.half_height,
            "radius": self.radius,
            "trim": self.trim,
            "destroyed": self.destroyed,
            "undetected": self.undetected,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class ProbeConfig:
    """Straight-line sweep of global states to evaluate."""

    start: np.ndarray = field(default_factory=lambda: np.zeros(4))
    end: np.ndarray = field(default_factory=lambda: np.zeros(4))
    steps: int = 50

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProbeConfig":
        """Create ProbeConfig from dictionary."""
        config = cls(
            start=np.array(data["start"], dtype=float),
            end=np.array(data["end"], dtype=float),
            steps=int(data.get("steps", 50)),
        )
        if config.start.shape != config.end.shape:
            raise ValueError("Probe start and end must have the same dimension")
        assert config.steps >= 2, "Probe needs at least two steps"
        return config

    def states(self) -> np.ndarray:
        """(steps, D) array of states from start to end."""
        return np.linspace(self.start, self.end, self.steps)


@dataclass
class DisplayConfig:
    """Screen layout for rendering a scenario."""

    x_range: Tuple[float, float] = (-10.0, 10.0)
    y_range: Tuple[float, float] = (-10.0, 10.0)
    swept_x: int = 0
    swept_y: int = 1
    pad: float = 0.0
    grid_color: int = 0x1F77B4


@dataclass
class ScenarioConfig:
    """Configuration for an obstacle scenario."""

    name: str = "Unnamed Scenario"
    description: str = ""
    sentinel: float = 100.0
    set_id: str = "default"

    palettes: Dict[str, PaletteConfig] = field(default_factory=dict)
    obstacles: List[ObstacleConfig] = field(default_factory=list)
    probe: Optional[ProbeConfig] = None
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScenarioConfig":
        """Create ScenarioConfig from dictionary."""
        config = cls()

        config.name = data.get("name", config.name)
        config.description = data.get("description", config.description)
        config.sentinel = float(data.get("sentinel", config.sentinel))
        config.set_id = str(data.get("set_id", config.set_id))

        config.palettes = {
            name: PaletteConfig.from_dict(name, palette)
            for name, palette in data.get("palettes", {}).items()
        }
        config.obstacles = [ObstacleConfig.from_dict(o) for o in data.get("obstacles", [])]

        for obs in config.obstacles:
            if obs.palette not in config.palettes:
                raise ValueError(f"Obstacle refers to unknown palette {obs.palette!r}")

        if "probe" in data:
            config.probe = ProbeConfig.from_dict(data["probe"])

        display = data.get("display", {})
        if display:
            config.display = DisplayConfig(
                x_range=tuple(display.get("x_range", config.display.x_range)),
                y_range=tuple(display.get("y_range", config.display.y_range)),
                swept_x=int(display.get("swept_x", config.display.swept_x)),
                swept_y=int(display.get("swept_y", config.display.swept_y)),
                pad=float(display.get("pad", config.display.pad)),
                grid_color=int(display.get("grid_color", config.display.grid_color)),
            )

        return config


def load_yaml(filepath: str | Path) -> Dict[str, Any]:
    """Load a YAML file and return its contents."""
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    with open(filepath, "r") as f:
        return yaml.safe_load(f) or {}


def load_config(scenario_path: str | Path) -> ScenarioConfig:
    """
    Load a scenario configuration file.

    Args:
        scenario_path: Path to scenario YAML

    Returns:
        ScenarioConfig
    """
    return ScenarioConfig.from_dict(load_yaml(scenario_path))


def get_default_scenario_path() -> Path:
    """Default scenario shipped with the repository."""
    package_root = Path(__file__).parent.parent.parent
    return package_root / "config" / "scenarios" / "boxes.yaml"
