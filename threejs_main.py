# -- Imports --
import streamlit as st
import streamlit.components.v1 as components

from orbital_cloud.colors import ColorScheme
from orbital_cloud.config import load_config_from_env
from orbital_cloud.constants import N_MAX_UI
from orbital_cloud.logging_config import get_logger
from orbital_cloud.orbital import QuantumState
from orbital_cloud.sampler import SampleConfig, sample_orbital
from orbital_cloud.viewer import create_threejs_viewer

logger = get_logger(__name__)

SCHEME_LABELS = {
    ColorScheme.RED_BLUE.value: "Red & Blue",
    ColorScheme.BLACK_ORANGE.value: "Black & Orange",
    ColorScheme.GREEN_TRANSPARENCY.value: "Green & Transparent",
}


@st.cache_data(show_spinner=False)
def cached_cloud(n, l, m, point_count, color_scheme, density_mode, seed, workers):
    """
    Sample once per parameter set; Streamlit reruns reuse the result

    :return: PointCloud
    """
    config = SampleConfig(point_count=point_count, color_scheme=color_scheme, density_mode=density_mode)
    return sample_orbital(QuantumState(n, l, m), config, rng=seed, workers=workers)


def _clamp(value, low, high):
    return max(low, min(high, value))


def main():
    st.set_page_config(layout='wide')
    st.title("Orbital Visualizer")

    defaults = load_config_from_env()

    # Initialize quantum number persistence
    if 'l_value' not in st.session_state:
        st.session_state.l_value = defaults.state.l
    if 'm_value' not in st.session_state:
        st.session_state.m_value = defaults.state.m

    # Sidebar Controls
    st.sidebar.header("Quantum Numbers")
    n = st.sidebar.selectbox('n', list(range(1, N_MAX_UI + 1)),
                             index=_clamp(defaults.state.n, 1, N_MAX_UI) - 1, key='n_select')

    # Clamp stored l, m to the range allowed by the current n
    l_options = list(range(0, n))
    st.session_state.l_value = _clamp(st.session_state.l_value, 0, n - 1)
    l = st.sidebar.selectbox('l', l_options, index=st.session_state.l_value, key='l_select')
    st.session_state.l_value = l

    m_options = list(range(-l, l + 1))
    st.session_state.m_value = _clamp(st.session_state.m_value, -l, l)
    m = st.sidebar.selectbox('m', m_options, index=st.session_state.m_value + l, key='m_select')
    st.session_state.m_value = m

    st.sidebar.divider()
    st.sidebar.subheader("Sampling")

    point_count = st.sidebar.number_input('Points', min_value=0, max_value=2_000_000,
                                          value=_clamp(defaults.sampling.point_count, 0, 2_000_000), step=10_000)
    scheme_values = list(SCHEME_LABELS)
    default_scheme = ColorScheme.parse(defaults.sampling.color_scheme).value
    color_scheme = st.sidebar.selectbox("Color Set", scheme_values,
                                        index=scheme_values.index(default_scheme),
                                        format_func=SCHEME_LABELS.get)
    density_mode = st.sidebar.radio("Density", ['abs', 'squared'],
                                    index=['abs', 'squared'].index(defaults.sampling.density_mode),
                                    format_func=lambda mode: '|ψ|' if mode == 'abs' else '|ψ|²',
                                    horizontal=True)
    seed_text = st.sidebar.text_input("Seed (blank = random)",
                                      value='' if defaults.sampling.seed is None else str(defaults.sampling.seed))
    seed = int(seed_text) if seed_text.strip().isdigit() else None

    st.sidebar.divider()
    st.sidebar.subheader("Visuals")

    point_size = st.sidebar.number_input("Point Size", min_value=0.001, max_value=1.0,
                                         value=float(defaults.view.point_size), step=0.001, format="%.3f")
    animation_speed = st.sidebar.number_input("Animation Speed", min_value=0.0, max_value=0.1,
                                              value=float(defaults.view.animation_speed), step=0.001, format="%.3f")

    state = QuantumState(n, l, m)

    with st.spinner("Calculating orbital..."):
        cloud = cached_cloud(n, l, m, int(point_count), color_scheme, density_mode, seed,
                             defaults.sampling.workers)

    st.info(f"{state.label} **Orbital** | (n,l,m) = {state.as_tuple()} | {len(cloud):,} points | "
            f"probability of finding the electron: bright = probable, dark = improbable")
    if cloud.degenerate_count:
        st.warning(f"{cloud.degenerate_count:,} points had a non-finite density and are hidden.")

    html_content = create_threejs_viewer(
        cloud,
        point_size=point_size,
        animation_speed=animation_speed,
        camera_distance=defaults.view.camera_distance,
    )
    components.html(html_content, height=700, scrolling=False)


if __name__ == "__main__":
    main()
