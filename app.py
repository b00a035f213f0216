import logging
import os

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from src.ahp import create_default_matrix, scale_options, update_matrix
from src.data import (
    CRITERIA,
    coerce_numeric,
    demo_dataset,
    load_dataframe,
    to_attributes,
    upload_signature,
    validate_schema,
)
from src.errors import AHPError
from src.pipeline import evaluate, format_weights
from src.scoring import ranking_to_frame


logging.basicConfig(
    format="%(asctime)s %(name)-14s %(levelname)-8s %(message)s",
    level=os.getenv("AHP_LOG_LEVEL", "INFO").upper(),
)
logger = logging.getLogger("app")


def init_state():
    if "dataset" not in st.session_state:
        st.session_state.dataset = demo_dataset()
    if "matrix" not in st.session_state:
        st.session_state.matrix = create_default_matrix(CRITERIA)
    if "result" not in st.session_state:
        st.session_state.result = None
    if "upload_signature" not in st.session_state:
        st.session_state.upload_signature = None


def load_upload(file):
    df = coerce_numeric(load_dataframe(file))
    ok, missing = validate_schema(df)
    if not ok:
        st.error(f"Missing columns: {', '.join(missing)}")
        return
    st.session_state.dataset = df
    st.session_state.result = None


def data_section():
    st.header("Available phones")

    upload = st.file_uploader("Upload a phone table (Excel or CSV)", type=["xlsx", "csv"])
    if upload is None:
        st.session_state.upload_signature = None
    elif upload_signature(upload) != st.session_state.upload_signature:
        st.session_state.upload_signature = upload_signature(upload)
        load_upload(upload)
    if st.button("Use built-in phones"):
        st.session_state.dataset = demo_dataset()
        st.session_state.result = None

    st.dataframe(st.session_state.dataset)


def comparison_section():
    st.header("Pairwise comparison")
    st.caption(
        "Each value rates the row criterion against the column criterion. With row-normalized "
        "weighting, a value above 1 moves weight toward the column criterion and a fraction "
        "moves it toward the row criterion."
    )

    options = scale_options()
    values = [v for v, _ in options]
    labels = dict(options)

    matrix = st.session_state.matrix
    for i, row_criterion in enumerate(CRITERIA):
        for j in range(i + 1, len(CRITERIA)):
            col_criterion = CRITERIA[j]
            current = min(values, key=lambda v: abs(v - matrix[i, j]))
            choice = st.selectbox(
                f"{row_criterion.name} vs {col_criterion.name}",
                values,
                index=values.index(current),
                format_func=labels.get,
                key=f"cmp_{i}_{j}",
            )
            if choice != matrix[i, j]:
                try:
                    matrix = update_matrix(matrix, i, j, choice)
                except AHPError as exc:
                    st.error(str(exc))
    st.session_state.matrix = matrix

    names = [c.name for c in CRITERIA]
    st.dataframe(pd.DataFrame(matrix, index=names, columns=names).round(2))


def results_section():
    st.header("Results")

    attributes = to_attributes(st.session_state.dataset)
    try:
        result = evaluate(st.session_state.matrix, CRITERIA, attributes, previous=st.session_state.result)
    except AHPError as exc:
        st.error(str(exc))
        return
    st.session_state.result = result

    st.subheader("Consistency check")
    st.write(f"Consistency Ratio: {result.consistency.consistency_ratio:.2f}")
    st.write(f"Status: {'Consistent' if result.consistency.is_consistent else 'Inconsistent'}")
    if not result.ranked:
        st.warning("Pairwise comparison matrix is inconsistent. Please review your comparisons.")

    st.subheader("Criteria weights")
    st.write(format_weights(CRITERIA, result.weights))

    if result.best is None:
        return

    st.subheader("Ranking")
    ranking = ranking_to_frame(result.ranking)
    st.dataframe(ranking)
    st.success(f"The best phone based on AHP analysis is: {result.best}")

    fig_bar = go.Figure()
    fig_bar.add_trace(go.Bar(x=ranking["alternative"], y=ranking["score"], marker_color="#d97706"))
    fig_bar.update_layout(title="Weighted score", xaxis_title="Phone", yaxis_title="Score")
    st.plotly_chart(fig_bar, use_container_width=True)


def main():
    st.set_page_config(page_title="Phone Selection Using AHP", layout="wide")
    st.title("Phone Selection Using AHP")

    init_state()
    data_section()
    st.divider()
    comparison_section()
    st.divider()
    results_section()


if __name__ == "__main__":
    main()
