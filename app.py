"""Streamlit front-end for the token registry checker."""
from __future__ import annotations

from io import BytesIO
from typing import Sequence

import pandas as pd
import streamlit as st

from token_checker import (
    CsvSnapshotRepository,
    RegistryValidationContext,
    ValidateRegistryUseCase,
)
from token_checker.application.use_cases import build_validator
from token_checker.config import load_settings
from token_checker.domain.errors import ExceptionsLoadError
from token_checker.domain.models import AllowedException, ExceptionLists, TokenRecord
from token_checker.domain.results import ValidationReport
from token_checker.infrastructure.storage import exceptions_store
from token_checker.presentation.diff_report import issues_to_rows, render_csv, render_html


st.set_page_config(page_title="Token Registry Checker", layout="wide")
st.title("Token Registry Checker")

EXCEPTION_LISTS = {
    "Allowed duplicate symbols": "allowed_duplicate_symbols",
    "Allowed not community validated": "allowed_not_community_validated",
}


def exceptions_to_dataframe(entries: Sequence[AllowedException]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Symbol": entry.symbol, "Mint": entry.mint} for entry in entries],
        columns=["Symbol", "Mint"],
    )


def dataframe_to_exceptions(df: pd.DataFrame) -> tuple[AllowedException, ...]:
    entries = []
    for _, row in df.iterrows():
        mint = str(row.get("Mint") or "").strip()
        if mint:
            entries.append(AllowedException(symbol=str(row.get("Symbol") or "").strip(), mint=mint))
    return tuple(entries)


def records_to_dataframe(records: Sequence[TokenRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "line": r.line,
                "name": r.name,
                "symbol": r.symbol,
                "mint": r.mint,
                "decimals": r.decimals,
                "logo_uri": r.logo_uri,
                "community_validated": r.community_validated,
            }
            for r in records
        ]
    )


def run_validation(previous_bytes: bytes, current_bytes: bytes) -> tuple[ValidationReport, Sequence[TokenRecord], Sequence[TokenRecord]]:
    context = RegistryValidationContext(
        previous_repository=CsvSnapshotRepository(BytesIO(previous_bytes)),
        current_repository=CsvSnapshotRepository(BytesIO(current_bytes)),
        validator=build_validator(load_settings()),
    )
    use_case = ValidateRegistryUseCase(context)
    return use_case.execute()


if "view" not in st.session_state:
    st.session_state["view"] = "compare"
if "result" not in st.session_state:
    st.session_state["result"] = None


if st.session_state["view"] == "compare":
    col1, col2 = st.columns(2)
    with col1:
        previous_file = st.file_uploader("Upload previous snapshot", type=["csv"])
    with col2:
        current_file = st.file_uploader("Upload current snapshot", type=["csv"])

    st.subheader("Allowed Exceptions")
    with st.expander("Manage the frozen exception baseline", expanded=False):
        try:
            exceptions = exceptions_store.load_exceptions()
        except ExceptionsLoadError as exc:
            st.error(str(exc))
            st.stop()
        edited: dict[str, pd.DataFrame] = {}
        for label, attribute in EXCEPTION_LISTS.items():
            st.caption(label)
            edited[attribute] = st.data_editor(
                exceptions_to_dataframe(getattr(exceptions, attribute)),
                num_rows="dynamic",
                hide_index=True,
                key=f"editor_{attribute}",
                use_container_width=True,
            )
        if st.button("Save", key="save_exceptions_btn"):
            exceptions_store.save_exceptions(
                ExceptionLists(**{attribute: dataframe_to_exceptions(df) for attribute, df in edited.items()})
            )
            st.success("Exceptions saved")
            st.rerun()

    run_btn = st.button("Run Validation", disabled=not (previous_file and current_file))
    if run_btn and previous_file and current_file:
        with st.spinner("Validating..."):
            try:
                report, previous_records, current_records = run_validation(previous_file.read(), current_file.read())
            except ValueError as exc:
                st.error(str(exc))
                st.stop()
        st.session_state["result"] = {
            "report": report,
            "previous": previous_records,
            "current": current_records,
            "issues_csv": render_csv(tuple(report.iter_all_issues())),
            "issues_html": render_html(report),
        }
        st.session_state["view"] = "results"
        st.rerun()
else:
    back_clicked = st.button("← Back", key="back_to_compare")
    if back_clicked:
        st.session_state["view"] = "compare"
        st.session_state["result"] = None
        st.rerun()

    result = st.session_state.get("result")
    if not result:
        st.info("No results available. Upload snapshots and run validation first.")
    else:
        report: ValidationReport = result["report"]

        st.subheader("Summary")
        summary = report.summary
        st.metric("Previous records", summary.total_previous)
        st.metric("Current records", summary.total_current)
        st.metric("Total errors", summary.total_errors)
        for kind, count in summary.counts.items():
            st.metric(kind.value, count)

        tabs = st.tabs(["Issues", "Previous", "Current"])
        with tabs[0]:
            st.dataframe(pd.DataFrame(issues_to_rows(tuple(report.iter_all_issues()))))
            st.download_button(
                "Download issues CSV",
                data=result["issues_csv"],
                file_name="registry_issues.csv",
                mime="text/csv",
            )
            st.download_button(
                "Download issues HTML",
                data=result["issues_html"].encode("utf-8"),
                file_name="registry_issues.html",
                mime="text/html",
            )
        with tabs[1]:
            st.dataframe(records_to_dataframe(result["previous"]))
        with tabs[2]:
            st.dataframe(records_to_dataframe(result["current"]))
