#!/usr/bin/env python3
"""
Avoid-set obstacle scenario - demo entry point

Builds tabulated palettes and an obstaclescape from a scenario file,
sweeps a probe trajectory through it and reports the worst-case safety
value and the dominating obstacle at each step.
"""

import argparse
import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from avoidscape.obstacles.obstaclescape import (
    Obstaclescape,
    create_obstaclescape_from_config,
)
from avoidscape.palettes import AvoidSetPalette, GridPalette
from avoidscape.utils.config_loader import (
    PaletteConfig,
    ScenarioConfig,
    get_default_scenario_path,
    load_config,
)
from avoidscape.utils.logging_utils import setup_logger


def box_distance(points: np.ndarray, half_width: float, half_height: float) -> np.ndarray:
    """Signed distance to a centered box for states [x, vx, y, vy]."""
    q = np.stack(
        [np.abs(points[..., 0]) - half_width, np.abs(points[..., 2]) - half_height],
        axis=-1,
    )
    outside = np.linalg.norm(np.maximum(q, 0.0), axis=-1)
    inside = np.minimum(np.max(q, axis=-1), 0.0)
    return outside + inside


def disc_distance(points: np.ndarray, radius: float) -> np.ndarray:
    """Signed distance to a centered disc for states [x, y, heading]."""
    return np.hypot(points[..., 0], points[..., 1]) - radius


def build_palette(config: PaletteConfig) -> AvoidSetPalette:
    """
    Tabulate stand-in value functions for one palette.

    Each set is the obstacle's signed distance minus its clearance margin.
    Real deployments load value functions from a reachability solver.
    """
    if config.model == "double_integrator":
        functions = {
            set_id: (
                lambda p, m=margin: box_distance(p, config.half_width, config.half_height) - m
            )
            for set_id, margin in config.sets.items()
        }
        return GridPalette.from_function(functions, config.axes())
    elif config.model == "dubins":
        functions = {
            set_id: (lambda p, m=margin: disc_distance(p, config.radius) - m)
            for set_id, margin in config.sets.items()
        }
        return GridPalette.from_function(functions, config.axes(), periodic_dims=[2])
    else:
        raise ValueError(f"Unknown dynamical model: {config.model}")


class Scenario:
    """
    Evaluation of one scenario file.

    Owns the palettes and the obstaclescape assembled from them.
    """

    def __init__(
        self,
        config: ScenarioConfig,
        log_level: int = logging.INFO,
        log_file: Optional[str] = None,
    ):
        self.config = config
        self.logger = setup_logger("avoidscape", level=log_level, log_file=log_file)

        self.palettes: Dict[str, AvoidSetPalette] = {
            name: build_palette(palette) for name, palette in config.palettes.items()
        }
        self.scape: Obstaclescape = create_obstaclescape_from_config(
            [obs.to_dict() for obs in config.obstacles],
            self.palettes,
            sentinel=config.sentinel,
        )
        self.logger.info(
            f"Scenario '{config.name}': {len(self.scape)} obstacles, "
            f"{len(self.scape.eligible_indices())} eligible"
        )

    def sweep(self) -> List[Tuple[np.ndarray, float, Optional[int]]]:
        """
        Evaluate the probe trajectory.

        Returns:
            List of (state, value, dominant obstacle index) per step
        """
        if self.config.probe is None:
            raise ValueError("Scenario has no probe to sweep")

        results = []
        set_id = self.config.set_id
        for state in self.config.probe.states():
            value = self.scape.value(set_id, state)
            dominant = self.scape.dominant_index(set_id, state)
            grad = self.scape.grad_v(set_id, state)
            self.logger.debug(
                f"state={np.round(state, 3).tolist()} value={value:.3f} "
                f"dominant={dominant} grad={np.round(grad, 3).tolist()}"
            )
            results.append((state, value, dominant))
        return results

    def save_plot(self, filename: str, current_state: np.ndarray):
        """Render obstacles and their level sets to an image file."""
        import matplotlib

        matplotlib.use("Agg")
        from avoidscape.visualization.canvas import create_canvas

        display = self.config.display
        canvas = create_canvas(
            display.x_range, display.y_range, title=self.config.name
        )
        if display.pad > 0:
            self.scape.render_augmented(canvas, display.pad)
        else:
            self.scape.render(canvas)
        self.scape.display_grid(
            self.config.set_id,
            canvas,
            display.grid_color,
            current_state,
            display.swept_x,
            display.swept_y,
        )
        canvas.save(filename)
        canvas.close()
        self.logger.info(f"Plot saved to {filename}")


def run_scenario(
    scenario_path: str,
    save_plot: Optional[str] = None,
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
) -> bool:
    """
    Run a scenario file.

    Args:
        scenario_path: Path to scenario YAML
        save_plot: Optional path for a rendered image
        log_level: Logging level for the avoidscape logger
        log_file: Optional path that also receives the log

    Returns:
        True if every probe state is safe (value >= 0)
    """
    scenario = Scenario(load_config(scenario_path), log_level=log_level, log_file=log_file)
    results = scenario.sweep()

    unsafe = [(state, value, idx) for state, value, idx in results if value < 0]
    worst_state, worst_value, worst_idx = min(results, key=lambda r: r[1])
    scenario.logger.info(
        f"Worst value {worst_value:.3f} at {np.round(worst_state, 3).tolist()} "
        f"(dominant obstacle: {worst_idx})"
    )
    if unsafe:
        scenario.logger.warning(f"{len(unsafe)}/{len(results)} probe states are unsafe")

    if save_plot:
        scenario.save_plot(save_plot, worst_state)

    return not unsafe


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Avoid-set obstacle scenario")
    parser.add_argument(
        "--scenario",
        type=str,
        default=str(get_default_scenario_path()),
        help="Path to scenario config file",
    )
    parser.add_argument(
        "--save-plot",
        type=str,
        default=None,
        help="Path to save rendered obstacles",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every probe step",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write the log to this file",
    )

    args = parser.parse_args()

    safe = run_scenario(
        args.scenario,
        save_plot=args.save_plot,
        log_level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )

    print(f"\nProbe {'stayed safe' if safe else 'entered an unsafe region'}")
    return 0 if safe else 1


if __name__ == "__main__":
    exit(main())
