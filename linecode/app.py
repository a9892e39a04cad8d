from __future__ import annotations

import logging
import os

import streamlit as st

from utils import DEFAULT_BITS, RANDOM_BITS_RANGE, bits_to_string, gen_random_bits, parse_seed
from d2d import SCHEME_LABELS, simulate_d2d
from timeline import project_timeline
from plotting import plot_bits, plot_compare, plot_encoded

logging.basicConfig(level=os.getenv("LINECODE_LOG_LEVEL", "WARNING").upper())
logger = logging.getLogger(__name__)

st.set_page_config(layout="wide")

st.markdown(
    """
    <style>
    [data-testid="InputInstructions"] {
        display: none !important;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

st.title("Digital Encoding Visualizer")


def summary_block(meta: dict):
    items = []
    for k in ["scheme", "input_len", "samples_per_bit", "time_step", "sample_count", "ignored_chars"]:
        if k in meta:
            items.append((k, meta[k]))
    if items:
        st.subheader("Summary")
        st.json({k: v for k, v in items})


def empty_state(message: str = "Click **Generate Signal** from the sidebar to see results."):
    st.markdown(
        """
        <div style="text-align:center; padding: 6rem 1rem; opacity: 0.95;">
            <div style="font-size: 4rem; line-height: 1;">〰️</div>
            <div style="font-size: 1.35rem; font-weight: 600; margin-top: 0.75rem;">
                Ready when you are
            </div>
            <div style="font-size: 1.05rem; margin-top: 0.5rem;">
        """
        + message +
        """
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def make_signature(**kwargs):
    # Stable ordering
    return tuple(sorted(kwargs.items()))


with st.sidebar:
    st.header("Controls")
    show_grid = st.checkbox("Show grid", value=True)

    st.divider()
    st.subheader("Binary input")

    if "bitstr" not in st.session_state:
        st.session_state["bitstr"] = DEFAULT_BITS
    if "bitstr_draft" not in st.session_state:
        st.session_state["bitstr_draft"] = st.session_state["bitstr"]

    st.text_input("Input Text (Binary)", key="bitstr_draft", placeholder="Enter binary sequence, e.g., 1010")

    draft = st.session_state.get("bitstr_draft", "")
    if any(ch not in "01" for ch in draft):
        st.warning("Characters other than 0 and 1 are read as 0.")

    lo, hi = RANDOM_BITS_RANGE
    st.slider("Random bits N", lo, hi, 16, step=8, key="rand_n")
    st.text_input("Seed (optional)", value="", key="rand_seed")

    seed_invalid = False
    try:
        parse_seed(st.session_state.get("rand_seed", ""))
    except ValueError as e:
        seed_invalid = True
        st.error(str(e))

    def _gen_bits_cb():
        try:
            s = parse_seed(st.session_state.get("rand_seed", ""))
        except ValueError:
            return  # sidebar error already shown
        n = int(st.session_state.get("rand_n", 16))
        st.session_state["bitstr_draft"] = bits_to_string(gen_random_bits(n, seed=s))

    st.button("Generate random bits", on_click=_gen_bits_cb, disabled=seed_invalid)

    st.divider()
    st.subheader("Encoding")
    scheme = st.selectbox("Encoding Type", SCHEME_LABELS, key="scheme")
    compare_mode = st.checkbox("Compare mode (show all schemes)", value=False, key="compare")

    run = st.button("Generate Signal", type="primary", key="run")

    if "last" not in st.session_state:
        st.session_state["last"] = None
    if "sig" not in st.session_state:
        st.session_state["sig"] = None

    if run:
        # Apply the draft bitstring only when the user clicks Generate
        st.session_state["bitstr"] = draft

    bitstr = st.session_state["bitstr"]
    current_sig = make_signature(bitstr=bitstr, scheme=scheme)
    prev_sig = st.session_state["sig"]

    # Re-encode on scheme change only after a first explicit run
    should_run = bool(run) or (prev_sig is not None and prev_sig != current_sig)
    if should_run:
        logger.info("Encoding %d chars with %s", len(bitstr), scheme)
        st.session_state["last"] = simulate_d2d(bitstr, scheme)
        st.session_state["sig"] = current_sig


res = st.session_state.get("last", None)

if res is None:
    empty_state("Enter bits, choose an encoding, then click **Generate Signal**.")
else:
    st.subheader("Results")
    summary_block(res.meta)

    if res.meta["input_len"] == 0:
        st.info("Input is empty, nothing to plot.")

    tab1, tab2, tab3 = st.tabs(["Waveform", "Samples", "Compare"])

    with tab1:
        st.plotly_chart(plot_bits(res.bits["input"], grid=show_grid), width="stretch")
        st.plotly_chart(plot_encoded(res, grid=show_grid), width="stretch")

    with tab2:
        spb = res.meta["samples_per_bit"]
        if spb is None:
            st.write("No samples.")
        else:
            pts = project_timeline(res.signals["tx"].tolist(), spb)
            st.dataframe(
                [{"time (t)": t, "volts (V)": v} for t, v in pts],
                width="stretch",
            )

    with tab3:
        if compare_mode:
            st.plotly_chart(plot_compare(st.session_state["bitstr"], grid=show_grid), width="stretch")
        else:
            st.caption("Enable compare mode in the sidebar to see every scheme for the same input.")
