import logging
import os

import altair as alt
import numpy as np
import pandas as pd
import plotly.graph_objects as go
import requests
import streamlit as st

import shot_visualization as viz
import weather_client as wc
import weather_shot_engine as wse  # <-- formulas

logging.basicConfig(
    level=os.environ.get("GOLF_CADDY_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("golf_weather_caddy")

# ------------------------------------------------------------
# Page config
# ------------------------------------------------------------
st.set_page_config(
    page_title="Golf Weather Caddy",
    page_icon="⛳",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ------------------------------------------------------------
# Session state defaults
# ------------------------------------------------------------

DEFAULTS = {
    "temperature": 70.0,      # °F
    "humidity": 50.0,         # %
    "pressure": 29.92,        # inHg
    "wind_speed": 10.0,       # mph
    "wind_direction": 0.0,    # degrees, 0 = into the player
    "altitude": 0.0,          # ft
    "club": "7i",
    "viz_distance": float(viz.DEFAULT_PARAMS["distance"]),
    "viz_wind_speed": float(viz.DEFAULT_PARAMS["wind_speed"]),
    "viz_wind_direction": float(viz.DEFAULT_PARAMS["wind_direction"]),
}


def init_session_state():
    for k, v in DEFAULTS.items():
        if k not in st.session_state:
            st.session_state[k] = v


init_session_state()


# Sidebar slider bounds; fetched weather is clamped into them
CONDITION_RANGES = {
    "temperature": (20.0, 110.0),
    "humidity": (0.0, 100.0),
    "pressure": (20.0, 31.5),
    "wind_speed": (0.0, 40.0),
    "wind_direction": (0.0, 360.0),
    "altitude": (0.0, 10000.0),
}


def current_conditions():
    return {key: st.session_state[key] for key in (
        "temperature", "humidity", "pressure", "wind_speed", "wind_direction", "altitude"
    )}


# ------------------------------------------------------------
# Styling (simple dark-ish theme tweaks)
# ------------------------------------------------------------

st.markdown(
    """
    <style>
    .stApp {
        background-color: #05070b;
    }
    h1, h2, h3, h4, h5, h6 {
        color: #f5f5f5;
    }
    .stMarkdown, .stText, .stCaption, label {
        color: #e6e6e6 !important;
    }
    div[data-testid="stMetricValue"] {
        color: #34d399;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# ------------------------------------------------------------
# Sidebar: conditions
# ------------------------------------------------------------

with st.sidebar:
    st.header("Conditions")

    with st.expander("Fetch current weather", expanded=False):
        location = st.text_input("Location", value="", placeholder="Pebble Beach,US")
        if st.button("Fetch 🌤️") and location.strip():
            try:
                fetched = wc.fetch_weather_data(location.strip())
            except wc.WeatherConfigError:
                st.warning("Set WEATHER_API_KEY to fetch live weather.")
            except (requests.RequestException, wc.WeatherDataError) as e:
                st.error(f"Weather fetch failed: {e}")
            else:
                for key, value in fetched.items():
                    low, high = CONDITION_RANGES[key]
                    st.session_state[key] = max(low, min(high, float(value)))
                st.success(f"Loaded conditions for {location.strip()}.")

    st.session_state.temperature = float(st.slider(
        "Temperature (°F)", min_value=20.0, max_value=110.0,
        value=float(st.session_state.temperature), step=1.0,
    ))
    st.session_state.humidity = float(st.slider(
        "Humidity (%)", min_value=0.0, max_value=100.0,
        value=float(st.session_state.humidity), step=1.0,
    ))
    st.session_state.pressure = float(st.slider(
        "Pressure (inHg)", min_value=20.0, max_value=31.5,
        value=float(st.session_state.pressure), step=0.01,
        help="Station pressure. Drops roughly 1 inHg per 1000 ft of elevation.",
    ))
    st.session_state.wind_speed = float(st.slider(
        "Wind Speed (mph)", min_value=0.0, max_value=40.0,
        value=float(st.session_state.wind_speed), step=1.0,
    ))
    st.session_state.wind_direction = float(st.slider(
        "Wind Direction (°)", min_value=0.0, max_value=360.0,
        value=float(st.session_state.wind_direction), step=5.0,
        help="0° = straight into your face, 90° = from the left, 180° = helping.",
    ))
    st.session_state.altitude = float(st.slider(
        "Altitude (ft)", min_value=0.0, max_value=10000.0,
        value=float(st.session_state.altitude), step=100.0,
    ))


# ------------------------------------------------------------
# Main title
# ------------------------------------------------------------

st.title("Golf Weather Caddy")
st.caption(
    "See how wind, temperature, humidity, pressure, and altitude change your carry "
    "and where the ball finishes."
)

tab_viz, tab_club, tab_air, tab_bag, tab_info = st.tabs(
    ["Shot Visualization", "Club Adjustment", "Wind & Air", "Bag", "Info"]
)

# ============================================================
# SHOT VISUALIZATION TAB
# ============================================================

with tab_viz:
    d_min, d_max, d_step, _ = viz.VIZ_LIMITS["distance"]
    s_min, s_max, s_step, _ = viz.VIZ_LIMITS["wind_speed"]
    w_min, w_max, w_step, _ = viz.VIZ_LIMITS["wind_direction"]

    st.session_state.viz_distance = float(st.slider(
        "Distance (yds)", min_value=float(d_min), max_value=float(d_max),
        value=float(st.session_state.viz_distance), step=float(d_step),
    ))
    st.session_state.viz_wind_speed = float(st.slider(
        "Wind Speed (mph)", min_value=float(s_min), max_value=float(s_max),
        value=float(st.session_state.viz_wind_speed), step=float(s_step),
        key="viz_wind_speed_slider",
    ))
    st.session_state.viz_wind_direction = float(st.slider(
        "Wind Direction (°)", min_value=float(w_min), max_value=float(w_max),
        value=float(st.session_state.viz_wind_direction), step=float(w_step),
        key="viz_wind_direction_slider",
    ))

    params = {
        "distance": st.session_state.viz_distance,
        "wind_speed": st.session_state.viz_wind_speed,
        "wind_direction": st.session_state.viz_wind_direction,
    }
    offset = viz.calculate_lateral_offset(**params)

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Distance", f"{params['distance']:.0f} yds")
    m2.metric("Wind", f"{params['wind_speed']:.0f} mph")
    m3.metric("Direction", f"{params['wind_direction']:.0f}°")
    m4.metric("Offset", f"{viz.format_offset(offset)} yds")

    fig = viz.build_shot_figure(params)
    st.plotly_chart(fig, use_container_width=False, config={"displayModeBar": False})

# ============================================================
# CLUB ADJUSTMENT TAB
# ============================================================

with tab_club:
    st.subheader("Plays-Like Carry for a Club")

    clubs = list(wse.CLUB_DATA.keys())
    st.session_state.club = st.selectbox(
        "Club", clubs, index=clubs.index(st.session_state.club),
    )

    try:
        res = wse.calculate_shot_adjustment(current_conditions(), st.session_state.club)
    except wse.InvalidInputError as e:
        st.error(f"Can't compute an adjustment: {e}")
        res = None

    if res is not None:
        nominal = res["nominal_carry"]
        adjusted = res["adjusted_carry"]
        lateral = res["lateral_yards"]

        c1, c2, c3 = st.columns(3)
        c1.metric("Stock carry", f"{nominal:.0f} yds")
        c2.metric("Adjusted carry", f"{adjusted:.1f} yds", delta=f"{adjusted - nominal:+.1f}")
        side = "right" if lateral > 0 else "left" if lateral < 0 else "online"
        c3.metric("Wind drift", f"{abs(lateral):.1f} yds {side}")

        def draw_carry_gauge(stock, plays_like):
            delta = plays_like - stock
            color = "red" if delta < 0 else "blue" if delta > 0 else "gray"

            gauge = go.Figure(
                go.Indicator(
                    mode="gauge+number+delta",
                    value=plays_like,
                    domain={"x": [0, 1], "y": [0, 1]},
                    title={
                        "text": f"<b>Carry today: {plays_like:.0f} yards</b>",
                        "font": {"size": 20},
                    },
                    delta={"reference": stock, "relative": False, "position": "top"},
                    gauge={
                        "axis": {"range": [stock - 40, stock + 40], "tickwidth": 2},
                        "bar": {"color": color},
                        "steps": [
                            {"range": [stock - 40, stock], "color": "mistyrose"},
                            {"range": [stock, stock + 40], "color": "lightcyan"},
                        ],
                        "threshold": {
                            "line": {"color": "red", "width": 4},
                            "thickness": 0.8,
                            "value": stock,
                        },
                    },
                )
            )
            gauge.update_layout(height=280, margin=dict(t=60, b=10, l=10, r=10))
            st.plotly_chart(gauge, use_container_width=True)

        draw_carry_gauge(nominal, adjusted)

        flight = res["flight"]
        traj = flight["trajectory_data"]
        st.markdown("### Ball Flight")
        f1, f2, f3, f4 = st.columns(4)
        f1.metric("Landing spin", f"{flight['final_spin']:.0f} rpm")
        f2.metric("Spin factor", f"{flight['spin_factor']:.3f}")
        f3.metric("Carry factor", f"{flight['total_factor']:.3f}")
        f4.metric("Trajectory shape", f"{traj['trajectory_shape']:.2f}")
        st.caption(
            f"Hang time ≈ {traj['flight_time']:.1f} s • "
            f"Ball compression ≈ {res['compression']:.3f} • "
            f"Effective wind ≈ {res['effective_wind_speed']:.1f} mph"
        )

# ============================================================
# WIND & AIR TAB
# ============================================================

with tab_air:
    st.subheader("Atmosphere")

    cond = current_conditions()
    a1, a2, a3, a4 = st.columns(4)
    try:
        a1.metric("Air density", f"{wse.calculate_air_density(cond['temperature'], cond['pressure']):.3f} kg/m³")
        dew = wse.calculate_dew_point(cond["temperature"], cond["humidity"])
        a2.metric("Dew point", "—" if np.isinf(dew) else f"{dew:.1f} °F")
    except wse.InvalidInputError as e:
        st.error(str(e))
    a3.metric(
        "Effective wind",
        f"{wse.calculate_effective_wind_speed(cond['wind_speed'], cond['altitude']):.1f} mph",
    )
    a4.metric("Ball compression", f"{wse.calculate_ball_compression(cond['temperature']):.3f}")

    st.markdown("### Wind Effect vs Direction")
    shot_height = st.slider("Shot apex height (yds)", 5.0, 60.0, 30.0, 1.0)

    rows = []
    for direction in range(0, 361, 15):
        effect = wse.calculate_wind_effect(cond["wind_speed"], float(direction), 150.0, shot_height)
        rows.append({"Direction (°)": direction, "Component": "Distance", "Delta (%)": effect["distance"] * 100})
        rows.append({"Direction (°)": direction, "Component": "Lateral", "Delta (%)": effect["lateral"] * 100})
    df_wind = pd.DataFrame(rows)

    chart = (
        alt.Chart(df_wind)
        .mark_line(point=True)
        .encode(
            x=alt.X("Direction (°):Q", scale=alt.Scale(domain=[0, 360])),
            y=alt.Y("Delta (%):Q", title="Change vs stock shot (%)"),
            color=alt.Color(
                "Component:N",
                scale=alt.Scale(domain=["Distance", "Lateral"], range=["#2ecc71", "#3498db"]),
            ),
        )
        .properties(height=300)
        .configure_view(stroke=None, fill="#05070b")
        .configure_axis(labelColor="#f5f5f5", titleColor="#f5f5f5")
        .configure_legend(labelColor="#f5f5f5", titleColor="#f5f5f5")
    )
    st.altair_chart(chart, use_container_width=True)
    st.caption("Negative distance = shot comes up short; negative lateral = pushed left.")

# ============================================================
# BAG TAB
# ============================================================

with tab_bag:
    st.subheader("Bag: Stock vs Today")

    cond = current_conditions()
    table = []
    for club, data in wse.CLUB_DATA.items():
        try:
            res = wse.calculate_shot_adjustment(cond, club)
        except wse.InvalidInputError as e:
            logger.warning("Skipping %s: %s", club, e)
            continue
        table.append(
            {
                "Club": club,
                "Ball Speed (mph)": data["ball_speed"],
                "Launch (°)": data["launch_angle"],
                "Spin (rpm)": data["spin_rate"],
                "Apex (yds)": data["apex_height"],
                "Stock Carry (yds)": data["carry_distance"],
                "Today (yds)": round(res["adjusted_carry"], 1),
                "Drift (yds)": round(res["lateral_yards"], 1),
            }
        )

    df_bag = pd.DataFrame(table)
    st.dataframe(df_bag, use_container_width=True)

# ============================================================
# INFO TAB
# ============================================================

with tab_info:
    st.subheader("How Golf Weather Caddy Works")

    st.markdown(
        """
        **Golf Weather Caddy** turns today's weather into adjustments for your stock
        yardages.

        - **Wind** is split into headwind and crosswind. About 0.9% of carry per mph
          of headwind, 0.8% offline per mph of crosswind, scaled by how high the
          shot flies.
        - **Altitude** makes the wind bite a little harder (thinner air, longer hang).
        - **Air density** comes from temperature and pressure; **dew point** from
          temperature and humidity.
        - **Ball flight** combines moisture and trajectory shape into spin and
          carry factors.

        The shot visualization is a presentation curve, not a physics simulation.

        ### Disclaimer

        All models are approximate. Use your judgment on the course.
        """
    )
