"""Streamlit dashboard for ShipStation store and special order metrics."""

from __future__ import annotations

import hashlib
import io

import streamlit as st

from ratecalc.config import get_report_settings
from ratecalc.domain.datasets import MetricsReport
from ratecalc.reporting.console_reporter import build_store_table, build_tag_table
from ratecalc.reporting.excel_exporter import build_excel_report, default_workbook_name
from ratecalc.reporting.formatting import TAG_DESCRIPTIONS, format_currency, format_percentage
from ratecalc.reporting.report_exporter import build_csv_report, default_report_name
from ratecalc.services.csv_reader_service import read_csv_stream
from ratecalc.services.date_filter import parse_date_range
from ratecalc.services.metrics_service import get_metrics_service

st.set_page_config(page_title="ShipStation Rates", page_icon="SR", layout="wide")


def _init_session_state() -> None:
    defaults = {
        "report": None,
        "report_error": None,
        "uploaded_bytes": None,
        "uploaded_name": None,
        "uploaded_hash": None,
        "last_run_signature": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def run_metrics(data: bytes, filename: str, date_range_text: str) -> MetricsReport:
    """Thin frontend adapter that delegates all computation to the metrics service."""
    date_range = parse_date_range(date_range_text)
    dataset = read_csv_stream(io.BytesIO(data), source_name=filename)
    return get_metrics_service().build_report(dataset, date_range=date_range)


_init_session_state()
settings = get_report_settings()

st.title("ShipStation Rates Calculator")

with st.sidebar:
    st.header("Filters")
    date_range_text = st.text_input(
        "Date range",
        placeholder="MM/DD/YY-MM/DD/YY",
        help="Leave empty to analyse every order in the file.",
    )
    compact = st.checkbox("Tables only", value=False)
    run_clicked = st.button("Calculate", type="primary", use_container_width=True)

st.subheader("Section 1: ShipStation Export")
uploaded = st.file_uploader("Upload a ShipStation CSV export", type=["csv"])
if uploaded is not None:
    data = uploaded.getvalue()
    st.session_state.uploaded_bytes = data
    st.session_state.uploaded_name = uploaded.name
    st.session_state.uploaded_hash = hashlib.sha256(data).hexdigest()
    st.caption(f"{uploaded.name}: {len(data):,} bytes")
else:
    st.info("Upload a CSV file to calculate metrics.")

if run_clicked:
    if st.session_state.uploaded_bytes is None:
        st.session_state.report = None
        st.session_state.report_error = "Upload a CSV file before calculating."
    else:
        signature = (st.session_state.uploaded_hash, date_range_text.strip())
        if st.session_state.report is None or st.session_state.last_run_signature != signature:
            with st.spinner("Calculating metrics..."):
                try:
                    st.session_state.report = run_metrics(
                        st.session_state.uploaded_bytes,
                        st.session_state.uploaded_name,
                        date_range_text,
                    )
                    st.session_state.report_error = None
                    st.session_state.last_run_signature = signature
                except (OSError, ValueError) as exc:
                    st.session_state.report = None
                    st.session_state.report_error = f"Error: {exc}"


st.subheader("Section 2: Results")
if st.session_state.report_error:
    st.error(st.session_state.report_error)
elif st.session_state.report is None:
    st.info("Run the calculation to view results.")
else:
    report: MetricsReport = st.session_state.report
    summary = report.store_summary
    tag_summary = report.tag_summary

    if report.period_name:
        st.caption(f"Period: {report.period_name}")
    st.caption(f"{report.record_count} records from {report.source_name}")

    mcol1, mcol2, mcol3, mcol4 = st.columns(4)
    mcol1.metric("Orders", summary.total_orders)
    mcol2.metric("Order Value", format_currency(summary.total_order_value))
    mcol3.metric(
        "Net Revenue",
        format_currency(summary.total_net_revenue),
        format_percentage(summary.net_revenue_margin),
    )
    mcol4.metric(
        "Shipping Profit",
        format_currency(summary.total_shipping_profit),
        format_percentage(summary.shipping_profit_margin),
    )

    st.markdown("**Store Metrics**")
    st.dataframe(
        build_store_table(report, settings.store_display_order),
        use_container_width=True,
    )

    st.markdown("**Special Orders Analysis**")
    if report.tag_metrics:
        st.dataframe(build_tag_table(report), use_container_width=True)
        if not compact:
            st.caption(
                f"{tag_summary.total_tagged_orders} special orders "
                f"({tag_summary.percent_of_all_orders:.1f}% of all orders), "
                f"average cost {format_currency(tag_summary.average_rate)}"
            )
            with st.expander("Special order categories"):
                for tag, description in TAG_DESCRIPTIONS.items():
                    st.markdown(f"- **{tag}**: {description}")
    else:
        st.info("No special orders data found")

    dcol1, dcol2 = st.columns(2)
    with dcol1:
        st.download_button(
            label="Download CSV Report",
            data=build_csv_report(report, preferred_order=settings.store_display_order).encode("utf-8"),
            file_name=default_report_name(report.source_name),
            mime="text/csv",
            use_container_width=True,
        )
    with dcol2:
        st.download_button(
            label="Download Excel Report",
            data=build_excel_report(report, preferred_order=settings.store_display_order),
            file_name=default_workbook_name(report.source_name),
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            use_container_width=True,
        )
