import json
from typing import List, Optional

import pandas as pd
import streamlit as st

from chartcore.analysis import build_analysis_payload, default_analysis_name, numeric_warning
from chartcore.charts import CHART_TYPE_OPTIONS, COLOR_SCHEME_OPTIONS, to_figure
from chartcore.config import ChartConfig, ChartOptions
from chartcore.prepare import build_chart
from chartcore.suggest import suggest_chart_type
from chartcore.traces import LARGE_DATASET_THRESHOLD, is_3d_chart
from chartcore.workbook import Sheet, UnsupportedFileError, load_workbook


CHART_LABELS = {opt["value"]: opt["label"] for opt in CHART_TYPE_OPTIONS}
SCHEME_LABELS = {opt["value"]: opt["label"] for opt in COLOR_SCHEME_OPTIONS}

CHART_HELP = {
    "scatter3d": "3D Scatter plots show relationships between three numerical variables using points in 3D space.",
    "surface": "Surface plots build a height grid from every (x, y) pair; missing combinations are drawn at zero.",
    "mesh3d": "Mesh plots triangulate the points into a continuous 3D shape coloured by the Z value.",
    "line3d": "3D Line plots connect the points in row order through 3D space.",
}


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #6b7280;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


def format_sheet_summary(sheet: Sheet) -> str:
    counts = {}
    for col in sheet.column_types:
        counts[col.type.value] = counts.get(col.type.value, 0) + 1
    chips = [f"Rows: {len(sheet.rows):,}", f"Columns: {len(sheet.headers)}"]
    chips += [f"{kind.title()}: {n}" for kind, n in sorted(counts.items())]
    return "".join([f"<span class='chip'>{txt}</span>" for txt in chips])


def render_page_header(title: str, breadcrumb: str, summary_html: str):
    inject_base_styles()
    st.markdown(
        f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
        unsafe_allow_html=True,
    )
    st.markdown(f"<div class='chip-row'>{summary_html}</div>", unsafe_allow_html=True)


@st.cache_data(show_spinner=False)
def read_upload(data: bytes, filename: str) -> List[Sheet]:
    return load_workbook(data, filename=filename)


def axis_index(options: List[str], value: Optional[str]) -> int:
    return options.index(value) if value in options else 0


# ---------- UI setup ----------
st.set_page_config(page_title="Sheetplot", layout="wide")
inject_base_styles()
st.title("Sheetplot")
st.caption("Upload a spreadsheet, get a suggested chart, then tune it.")

with st.sidebar:
    st.markdown("### Data")
    upload = st.file_uploader("Spreadsheet", type=["csv", "xlsx", "xls"])
    dark_mode = st.toggle("Dark chart theme", value=False)

if upload is None:
    st.info("Upload a CSV or Excel file to get started.")
    st.stop()

try:
    sheets = read_upload(upload.getvalue(), upload.name)
except UnsupportedFileError as exc:
    st.error(str(exc))
    st.stop()

if not sheets:
    st.error("No sheets found in the uploaded file.")
    st.stop()

with st.sidebar:
    sheet_names = [s.name for s in sheets]
    sheet_index = sheet_names.index(st.selectbox("Sheet", sheet_names, index=0))
sheet = sheets[sheet_index]

if len(sheet.headers) < 1:
    st.warning("This sheet has no columns.")
    st.stop()

render_page_header(sheet.name, f"{upload.name} / {sheet.name}", format_sheet_summary(sheet))

suggestion = suggest_chart_type(sheet.column_types, sheet.headers, sheet.rows)
headers = sheet.headers
chart_values = [opt["value"] for opt in CHART_TYPE_OPTIONS]

# ----- Chart controls -----
c1, c2, c3, c4 = st.columns(4)
chart_type = c1.selectbox(
    "Chart type",
    chart_values,
    index=axis_index(chart_values, suggestion.chart_type),
    format_func=lambda v: CHART_LABELS.get(v, v),
    key=f"chart_type_{sheet_index}",
)
x_axis = c2.selectbox("X Axis", headers, index=axis_index(headers, suggestion.x_axis), key=f"x_{sheet_index}")
y_axis = c3.selectbox("Y Axis", headers, index=axis_index(headers, suggestion.y_axis), key=f"y_{sheet_index}")
z_axis = None
if is_3d_chart(chart_type):
    z_options = ["None"] + headers
    z_pick = c4.selectbox("Z Axis", z_options, index=axis_index(z_options, suggestion.z_axis), key=f"z_{sheet_index}")
    z_axis = None if z_pick == "None" else z_pick

with st.expander("Advanced options", expanded=False):
    o1, o2, o3 = st.columns(3)
    color_scheme = o1.selectbox(
        "Color scheme",
        list(SCHEME_LABELS),
        format_func=lambda v: SCHEME_LABELS[v],
    )
    default_size = 3 if len(sheet.rows) > LARGE_DATASET_THRESHOLD else 8
    marker_size = None
    if chart_type in {"scatter", "scatter3d"}:
        marker_size = o2.slider("Marker size", min_value=2, max_value=8, value=min(default_size, 8))
    show_legend = o3.checkbox("Show legend", value=True)

config = ChartConfig(
    chart_type=chart_type,
    x_axis=x_axis,
    y_axis=y_axis,
    z_axis=z_axis,
    additional_options=ChartOptions(color_scheme=color_scheme, marker_size=marker_size, show_legend=show_legend),
)

if numeric_warning(config, sheet.column_types):
    st.warning("Warning: Selected columns should be numeric for this chart type.")
if chart_type in CHART_HELP:
    st.caption(CHART_HELP[chart_type])

prepared = build_chart(config, sheet.column_types, sheet.rows, is_dark_mode=dark_mode)
if not prepared["data"][0]:
    st.info("No data to plot for the current selection.")
else:
    st.plotly_chart(to_figure(prepared), use_container_width=True)

# ----- Save / export -----
st.markdown("---")
s1, s2 = st.columns([3, 1])
analysis_name = s1.text_input("Analysis name", value=default_analysis_name(config))
if analysis_name.strip() and x_axis and y_axis:
    payload = build_analysis_payload(
        analysis_name,
        config,
        headers,
        sheet.rows,
        file_name=upload.name,
        sheet_name=sheet.name,
        sheet_index=sheet_index,
    )
    s2.download_button(
        "Download analysis",
        data=json.dumps(payload, default=str, indent=2).encode("utf-8"),
        file_name="analysis.json",
        mime="application/json",
    )

with st.expander("Data preview", expanded=False):
    st.dataframe(pd.DataFrame(sheet.rows[:200], columns=headers), use_container_width=True)
    st.dataframe(
        pd.DataFrame([c.as_dict() for c in sheet.column_types]),
        use_container_width=True,
        hide_index=True,
    )
