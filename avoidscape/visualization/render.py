"""Per-shape drawing of obstacles onto a canvas."""

from ..obstacles.shapes import BoxShape, ObstacleShape, RoundShape, ShapeKind
from .canvas import Canvas

BOX_COLOR = 0x4C1C13
ROUND_COLOR = 0x000000
AUGMENTED_COLOR = 0xCF4C34
OUTLINE_WIDTH = 5


def render_shape(canvas: Canvas, shape: ObstacleShape) -> None:
    """
    Draw the standard outline of a shape.

    Args:
        canvas: Drawing collaborator
        shape: Obstacle shape in state coordinates
    """
    if shape.kind is ShapeKind.BOX:
        _draw_box(canvas, shape, OUTLINE_WIDTH, BOX_COLOR, pad=0.0)
    elif shape.kind is ShapeKind.ROUND:
        _draw_round(canvas, shape, OUTLINE_WIDTH, ROUND_COLOR, pad=0.0)
    else:
        raise TypeError(f"Unknown obstacle shape: {shape!r}")


def render_shape_augmented(canvas: Canvas, shape: ObstacleShape, pad: float) -> None:
    """
    Draw a padded outline under the standard one.

    The padded region is the margin used for picking and interaction.

    Args:
        canvas: Drawing collaborator
        shape: Obstacle shape in state coordinates
        pad: Extra distance added on every side, in state units
    """
    if shape.kind is ShapeKind.BOX:
        _draw_box(canvas, shape, 0, AUGMENTED_COLOR, pad=pad)
    elif shape.kind is ShapeKind.ROUND:
        _draw_round(canvas, shape, 0, AUGMENTED_COLOR, pad=pad)
    else:
        raise TypeError(f"Unknown obstacle shape: {shape!r}")
    render_shape(canvas, shape)


def _draw_box(canvas: Canvas, shape: BoxShape, linewidth, color, pad):
    left = shape.x - shape.half_width - pad
    top = shape.y - shape.half_height - pad
    right = shape.x + shape.half_width + pad
    bottom = shape.y + shape.half_height + pad

    x0, y0 = canvas.mapper.map_state_to_position(left, top)
    x1, y1 = canvas.mapper.map_state_to_position(right, bottom)
    corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    canvas.fill_polygon(
        [(float(x), float(y)) for x, y in corners], color, linewidth
    )


def _draw_round(canvas: Canvas, shape: RoundShape, linewidth, color, pad):
    cx, cy = canvas.mapper.map_state_to_position(shape.x, shape.y)
    radius = (shape.trimmed_radius + pad) * canvas.mapper.mxx
    canvas.fill_circle((float(cx), float(cy)), float(radius), color, linewidth)
