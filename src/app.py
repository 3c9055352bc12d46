import streamlit as st

from patientdash.aggregate import aggregate, counts_frame
from patientdash.config import load_config
from patientdash.dashboard import DashboardController
from patientdash.ingest.patient_client import PatientAPIClient
from patientdash.logging_setup import setup_logging
from patientdash.viz.maps import PatientMap
from patientdash.viz.render import DashboardRenderer

# --- CONFIG ---
cfg = load_config()
setup_logging(cfg.logging.get("level", "INFO"))

PAGE_TITLE = cfg.dashboard.get("title", "Patient Disease Dashboard")
GENDERS = list(cfg.dashboard.get("gender_options", ["All", "Male", "Female", "Other"]))
LIMITS = list(cfg.dashboard.get("limit_options", [3, 5, 10, 15, 20]))
DEFAULT_LIMIT = int(cfg.dashboard.get("default_limit", 5))
SHOW_MAP = bool(cfg.map.get("enabled", True))

st.set_page_config(page_title=PAGE_TITLE, layout="wide")


# --- STATE ---
def store_figure(fig) -> None:
    # redrawn into the chart slot on every rerun
    st.session_state["figure"] = fig


def build_controller() -> DashboardController:
    client = PatientAPIClient(
        cfg.api.get("base_url", "http://localhost:5000"),
        endpoint=cfg.api.get("endpoint", "/api/patients"),
        timeout=float(cfg.api.get("timeout_s", 10)),
    )
    patient_map = PatientMap(
        latitude=cfg.map.get("latitude", 20.0),
        longitude=cfg.map.get("longitude", 0.0),
        zoom=cfg.map.get("zoom", 1.5),
        marker_radius=cfg.map.get("marker_radius", 20000),
        marker_color=cfg.map.get("marker_color"),
    )
    renderer = DashboardRenderer(
        store_figure,
        patient_map=patient_map,
        category_field=cfg.dashboard.get("category_field", "disease"),
    )
    return DashboardController(
        client,
        renderer,
        limit=DEFAULT_LIMIT,
        map_container_present=SHOW_MAP,
    )


if "controller" not in st.session_state:
    st.session_state["controller"] = build_controller()
controller: DashboardController = st.session_state["controller"]


def load_patients() -> None:
    with st.spinner("Loading patient data..."):
        controller.load(st.session_state["gender"])


def change_limit() -> None:
    controller.set_limit(int(st.session_state["limit"]))


# --- MAIN APP ---
st.title(PAGE_TITLE)

# SIDEBAR: Filters
st.sidebar.header("Filters")
st.sidebar.selectbox("Gender", options=GENDERS, key="gender", on_change=load_patients)
st.sidebar.selectbox(
    "Diseases to show",
    options=LIMITS,
    index=LIMITS.index(DEFAULT_LIMIT) if DEFAULT_LIMIT in LIMITS else 0,
    key="limit",
    on_change=change_limit,
)
st.sidebar.button("Refresh data", key="refresh", on_click=load_patients)

# Initial data load
if "initial_load_done" not in st.session_state:
    st.session_state["initial_load_done"] = True
    controller.limit = int(st.session_state["limit"])
    load_patients()

if controller.last_error is not None:
    st.error(f"Failed to load data: {controller.last_error}")

# CHART
chart_slot = st.empty()
figure = st.session_state.get("figure")
if figure is not None:
    chart_slot.plotly_chart(figure, use_container_width=True)
else:
    chart_slot.info("No data loaded yet.")

# MAP
if SHOW_MAP:
    deck = controller.renderer.patient_map.deck()
    if deck is not None:
        st.subheader("Patient Map")
        st.pydeck_chart(deck)

# DATA TABLE
if controller.records:
    st.subheader("Disease Counts")
    pairs = aggregate(controller.records, controller.renderer.category_field)
    st.dataframe(counts_frame(pairs).head(controller.limit), use_container_width=True)
    st.caption(f"{len(controller.records)} records loaded")
