import math

import numpy as np
import plotly.graph_objects as go

# ============================================================
# Surface & styling constants
# ============================================================

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 400
PADDING = 40
X_RANGE_YARDS = 40          # -20 to +20 yards lateral
NUM_POINTS = 100

DISTANCE_GRID_STEP = 20     # yards between horizontal gridlines
LATERAL_GRID_STEP = 5       # yards between vertical gridlines

WIND_INDICATOR_RADIUS = 30
LANDING_MARKER_RADIUS = 5

BACKGROUND_COLOR = "#111827"
GRID_COLOR = "#374151"
AXIS_COLOR = "#4B5563"
LABEL_COLOR = "#9CA3AF"
INDICATOR_FILL = "#1F2937"
INDICATOR_TEXT_COLOR = "#D1D5DB"
PATH_COLOR = "#10B981"

# Slider ranges for the three editable inputs: (min, max, step, default)
VIZ_LIMITS = {
    "distance": (100, 300, 5, 220),
    "wind_speed": (0, 30, 1, 12),
    "wind_direction": (0, 360, 5, 45),
}

DEFAULT_PARAMS = {key: limits[3] for key, limits in VIZ_LIMITS.items()}


# ============================================================
# Pure geometry
# ============================================================

def _round_half_up(value) -> int:
    # Readouts round .5 toward +inf (2.5 -> 3, -2.5 -> -2), not to even
    return int(math.floor(value + 0.5))


def calculate_lateral_offset(distance, wind_speed, wind_direction):
    """
    Landing offset in yards (+ = right, - = left).

    Longer shots hang in the air longer, so the effect grows faster than
    linearly with distance.
    """
    wind_angle = math.radians(wind_direction)
    wind_effect = math.cos(wind_angle) * wind_speed * (distance / 200.0) ** 1.5
    return wind_effect * 0.4


def format_offset(offset: float) -> str:
    """'R 5' / 'L 3' badge text for the offset readout."""
    side = "R" if offset > 0 else "L"
    return f"{side} {abs(_round_half_up(offset))}"


def compute_scales(distance, width=CANVAS_WIDTH, height=CANVAS_HEIGHT):
    """Pixel-per-yard factors and the tee (origin) position at bottom center."""
    return {
        "px_per_yard_x": (width - 2 * PADDING) / X_RANGE_YARDS,
        "px_per_yard_y": (height - 2 * PADDING) / distance,
        "origin_x": width / 2,
        "origin_y": height - PADDING,
    }


def grid_lines(distance, scales, width=CANVAS_WIDTH, height=CANVAS_HEIGHT):
    """
    Gridline positions with their labels.

    Returns:
      horizontal: [(pixel_y, label)] every 20 yards of distance
      vertical:   [(pixel_x, label or None)] every 5 lateral yards; the
                  center line is left unlabeled
    """
    horizontal = []
    for yards in range(0, int(distance) + 1, DISTANCE_GRID_STEP):
        pixel_y = scales["origin_y"] - yards * scales["px_per_yard_y"]
        horizontal.append((pixel_y, str(yards)))

    half = X_RANGE_YARDS // 2
    vertical = []
    for yards in range(-half, half + 1, LATERAL_GRID_STEP):
        pixel_x = scales["origin_x"] + yards * scales["px_per_yard_x"]
        vertical.append((pixel_x, str(abs(yards)) if yards != 0 else None))

    return {"horizontal": horizontal, "vertical": vertical}


def wind_indicator_geometry(wind_speed, wind_direction):
    """Circle center and arrow endpoints; 0° points North (up the screen)."""
    radius = WIND_INDICATOR_RADIUS
    cx = PADDING + radius + 10
    cy = PADDING + radius + 10

    angle = math.radians(wind_direction - 90)
    arrow_length = radius - 5

    return {
        "center": (cx, cy),
        "radius": radius,
        "arrow_start": (cx + math.cos(angle) * 5, cy + math.sin(angle) * 5),
        "arrow_end": (cx + math.cos(angle) * arrow_length, cy + math.sin(angle) * arrow_length),
        "label": str(_round_half_up(wind_speed)),
    }


def compute_flight_path(distance, lateral_offset, scales, num_points=NUM_POINTS):
    """
    Sample the drawn flight curve in pixel coordinates.

    This is a presentation curve, not projectile motion: a parabolic height
    bump on top of a straight carry line, with the wind drift loaded into the
    back end of the flight as the ball slows down.
    """
    t = np.arange(num_points + 1) / num_points

    height_t = 4 * t * (1 - t)
    max_height = distance * 0.15
    height_offset = max_height * height_t * scales["px_per_yard_y"]

    initial_velocity = distance / 200.0
    velocity_decay = (1 - t) ** 0.7
    current_velocity = initial_velocity * velocity_decay

    lateral_factor = (1 - current_velocity) ** 2
    distance_factor = t ** 3
    wind_effect = (distance / 200.0) ** 1.2
    lateral_t = lateral_factor * distance_factor * wind_effect

    xs = scales["origin_x"] + lateral_offset * lateral_t * scales["px_per_yard_x"]
    ys = scales["origin_y"] - distance * t * scales["px_per_yard_y"] + height_offset
    return xs, ys


# ============================================================
# Drawing (Plotly figure as the surface)
# ============================================================

def _line(fig, x0, y0, x1, y1, color, width):
    fig.add_shape(
        type="line", x0=x0, y0=y0, x1=x1, y1=y1,
        line={"color": color, "width": width},
        layer="below",
    )


def _text(fig, x, y, text, size=10, color=LABEL_COLOR, xanchor="center", angle=0):
    fig.add_annotation(
        x=x, y=y, text=text,
        showarrow=False,
        xanchor=xanchor,
        yanchor="middle",
        textangle=angle,
        font={"size": size, "color": color},
    )


def _circle(fig, cx, cy, radius, fill, layer="above"):
    fig.add_shape(
        type="circle",
        x0=cx - radius, y0=cy - radius, x1=cx + radius, y1=cy + radius,
        fillcolor=fill,
        line={"width": 0},
        layer=layer,
    )


def clear_surface(fig, width=CANVAS_WIDTH, height=CANVAS_HEIGHT):
    fig.data = []
    fig.layout.shapes = []
    fig.layout.annotations = []
    fig.update_layout(
        width=width,
        height=height,
        margin={"t": 0, "b": 0, "l": 0, "r": 0},
        plot_bgcolor=BACKGROUND_COLOR,
        paper_bgcolor=BACKGROUND_COLOR,
        showlegend=False,
    )
    # Pixel space: y grows downward like a canvas
    fig.update_xaxes(range=[0, width], visible=False, fixedrange=True)
    fig.update_yaxes(range=[height, 0], visible=False, fixedrange=True)


def draw_grid(fig, distance, scales, width=CANVAS_WIDTH, height=CANVAS_HEIGHT):
    lines = grid_lines(distance, scales, width, height)

    for pixel_y, label in lines["horizontal"]:
        _line(fig, PADDING, pixel_y, width - PADDING, pixel_y, GRID_COLOR, 1)
        _text(fig, PADDING - 5, pixel_y, label, xanchor="right")

    for pixel_x, label in lines["vertical"]:
        _line(fig, pixel_x, PADDING, pixel_x, height - PADDING, GRID_COLOR, 1)
        if label is not None:
            _text(fig, pixel_x, height - PADDING + 12, label)

    # Axes
    _line(fig, scales["origin_x"], PADDING, scales["origin_x"], height - PADDING, AXIS_COLOR, 2)
    _line(fig, PADDING, scales["origin_y"], width - PADDING, scales["origin_y"], AXIS_COLOR, 2)

    _text(fig, width / 2, height - 10, "Lateral Offset (yards)", size=12)
    _text(fig, 15, height / 2, "Distance (yards)", size=12, angle=-90)


def draw_wind_indicator(fig, wind_speed, wind_direction):
    geo = wind_indicator_geometry(wind_speed, wind_direction)
    cx, cy = geo["center"]

    _circle(fig, cx, cy, geo["radius"], INDICATOR_FILL, layer="below")

    (x0, y0), (x1, y1) = geo["arrow_start"], geo["arrow_end"]
    fig.add_shape(
        type="line", x0=x0, y0=y0, x1=x1, y1=y1,
        line={"color": PATH_COLOR, "width": 2},
    )

    _text(fig, cx, cy, geo["label"], size=12, color=INDICATOR_TEXT_COLOR)
    _text(fig, cx, cy + 14, "MPH", size=10)


def draw_shot_path(fig, distance, lateral_offset, scales):
    xs, ys = compute_flight_path(distance, lateral_offset, scales)

    fig.add_trace(
        go.Scatter(
            x=xs,
            y=ys,
            mode="lines",
            line={"color": PATH_COLOR, "width": 2},
            hoverinfo="skip",
        )
    )

    # Landing zone
    _circle(fig, float(xs[-1]), float(ys[-1]), LANDING_MARKER_RADIUS, PATH_COLOR)
    return float(xs[-1]), float(ys[-1])


def render_shot_visualization(surface, params):
    """
    Redraw everything for the current parameters.

    A missing surface is a silent no-op (nothing mounted to draw on yet).
    """
    if surface is None:
        return None

    distance = params["distance"]
    wind_speed = params["wind_speed"]
    wind_direction = params["wind_direction"]

    clear_surface(surface)

    lateral_offset = calculate_lateral_offset(distance, wind_speed, wind_direction)
    scales = compute_scales(distance)

    draw_grid(surface, distance, scales)
    draw_wind_indicator(surface, wind_speed, wind_direction)
    draw_shot_path(surface, distance, lateral_offset, scales)
    return surface


def build_shot_figure(params=None):
    """Fresh fixed-size figure with the shot drawn on it."""
    merged = dict(DEFAULT_PARAMS)
    merged.update(params or {})
    return render_shot_visualization(go.Figure(), merged)
