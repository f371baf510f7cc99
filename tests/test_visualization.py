"""Tests for the drawing collaborator and the demo entry point."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

import main
from avoidscape.obstacles.obstacle import Obstacle
from avoidscape.obstacles.obstaclescape import Obstaclescape
from avoidscape.obstacles.shapes import BoxShape, RoundShape
from avoidscape.visualization.canvas import (
    StateMapper,
    color_to_hex,
    create_canvas,
)
from avoidscape.visualization.render import render_shape


class TestStateMapper:
    """Tests for StateMapper."""

    def test_from_bounds_corners(self):
        """Bounds map onto the image corners with y flipped."""
        mapper = StateMapper.from_bounds((-10, 10), (-5, 5), width=400, height=200)
        assert np.allclose(mapper.map_state_to_position(-10, 5), (0, 0))
        assert np.allclose(mapper.map_state_to_position(10, -5), (400, 200))
        assert mapper.mxx == pytest.approx(20.0)

    def test_maps_arrays(self):
        """Mapping works element-wise on arrays."""
        mapper = StateMapper(mxx=2.0, myy=-1.0, bx=1.0, by=3.0)
        xs, ys = mapper.map_state_to_position(np.array([0.0, 1.0]), np.array([0.0, 1.0]))
        assert np.allclose(xs, [1.0, 3.0])
        assert np.allclose(ys, [3.0, 2.0])

    def test_scaled_round_radius(self, canvas):
        """Round radii scale with the x factor."""
        canvas.mapper = StateMapper(mxx=10.0, myy=-10.0)
        render_shape(canvas, RoundShape(x=1.0, y=1.0, radius=2.0, trim=0.5))
        _, center, radius, _, _ = canvas.calls[0]
        assert center == (10.0, -10.0)
        assert radius == pytest.approx(15.0)


class TestMatplotlibCanvas:
    """Tests for MatplotlibCanvas."""

    def test_color_to_hex(self):
        """Integer colours become matplotlib hex strings."""
        assert color_to_hex(0x4C1C13) == "#4c1c13"
        assert color_to_hex(0) == "#000000"

    def test_render_and_save(self, box_palette, round_palette, tmp_path):
        """Rendering onto matplotlib adds artists and saves."""
        canvas = create_canvas((-5, 5), (-5, 5), width=200, height=200)
        scape = Obstaclescape(
            [
                Obstacle(BoxShape(x=0.0, y=0.0, half_width=1.0, half_height=1.0), box_palette),
                Obstacle(BoxShape(x=3.0, y=3.0, half_width=1.0, half_height=1.0), box_palette),
            ]
        )
        scape.mark_undetected(1)
        scape.render_augmented(canvas, pad=0.5)
        scape.display_grid("robot", canvas, 0x0000FF, np.zeros(4), 0, 2)
        assert canvas.artist_count == 5

        filename = tmp_path / "scape.png"
        canvas.save(str(filename))
        assert filename.exists()

        canvas.clear()
        assert canvas.artist_count == 0
        canvas.close()

    def test_level_set_skipped_when_not_crossed(self):
        """No contour is drawn when zero is never reached."""
        canvas = create_canvas((-1, 1), (-1, 1), width=100, height=100)
        xs, ys = np.meshgrid(np.linspace(0, 10, 4), np.linspace(0, 10, 4))
        canvas.level_set(xs, ys, np.ones((4, 4)), 0xFF0000)
        assert canvas.artist_count == 0
        canvas.close()


class TestDemo:
    """Smoke tests for main.py on the shipped scenarios."""

    def test_boxes_scenario_is_safe(self):
        """The box scenario probe stays safe."""
        assert main.run_scenario(str(main.get_default_scenario_path()))

    def test_rounds_scenario_with_plot(self, tmp_path):
        """The round scenario runs and writes a plot."""
        scenario = main.get_default_scenario_path().parent / "rounds.yaml"
        plot = tmp_path / "rounds.png"
        assert main.run_scenario(str(scenario), save_plot=str(plot))
        assert plot.exists()

    def test_log_file_written(self, tmp_path):
        """The demo log can also be written to a file."""
        log_file = tmp_path / "logs" / "boxes.log"
        assert main.run_scenario(str(main.get_default_scenario_path()), log_file=str(log_file))
        assert "Worst value" in log_file.read_text()

    def test_unknown_model(self):
        """Unknown dynamical models raise ValueError."""
        palette = main.PaletteConfig.from_dict(
            "x", {"model": "bicycle", "grid": {"lower": [0], "upper": [1], "points": [2]}}
        )
        with pytest.raises(ValueError, match="Unknown dynamical model"):
            main.build_palette(palette)
