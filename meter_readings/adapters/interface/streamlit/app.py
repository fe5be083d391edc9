"""Streamlit page for uploading meter readings."""

import asyncio
from collections import Counter
import io
from typing import Any

import altair as alt
import streamlit as st

from meter_readings.domain.models.readings import (
    MeterReadingEntry,
    MeterReadingResponse,
)
from meter_readings.infrastructure.container import (
    build_accounts_repository,
    build_database_adapter,
    build_process_meter_readings_use_case,
)
from meter_readings.infrastructure.csv_files import (
    MeterReadingsCsvError,
    decode_upload,
    parse_meter_readings_csv,
)
from meter_readings.infrastructure.db import dispose_engine
from meter_readings.infrastructure.logging.logger import get_usage_logger
from meter_readings.infrastructure.settings import MeterReadingsSettings


async def _run_batch(entries: list[MeterReadingEntry]) -> MeterReadingResponse:
    """Run the batch processor against the configured database."""
    db_adapter = build_database_adapter()
    try:
        await build_accounts_repository(db_adapter).prepare_storage()
        use_case = build_process_meter_readings_use_case(db_adapter)
        return await use_case.execute(entries)
    finally:
        await dispose_engine()


def _process_upload(
    content: bytes,
    datetime_formats: tuple[str, ...],
) -> MeterReadingResponse:
    """Parse an uploaded CSV and process its readings."""
    stream = io.StringIO(decode_upload(content), newline="")
    entries = parse_meter_readings_csv(stream, datetime_formats)
    return asyncio.run(_run_batch(entries))


def _rejection_reasons(response: MeterReadingResponse) -> list[dict[str, Any]]:
    """Count rejected readings per reason, most frequent first."""
    counts = Counter(
        message
        for error in response.errors
        for message in error.validation_errors
    )
    return [
        {"reason": reason, "count": count}
        for reason, count in counts.most_common()
    ]


def _error_rows(response: MeterReadingResponse) -> list[dict[str, Any]]:
    """Flatten rejected readings into table rows."""
    return [
        {
            "AccountId": error.entry.account_id,
            "MeterReadingDateTime": (
                error.entry.meter_reading_date_time.isoformat(sep=" ")
            ),
            "MeterReadValue": error.entry.meter_read_value,
            "Errors": " | ".join(error.validation_errors),
        }
        for error in response.errors
    ]


def _render_reasons_chart(reasons: list[dict[str, Any]]) -> None:
    """Render a horizontal bar chart of rejection reasons."""
    chart = alt.Chart(alt.Data(values=reasons)).mark_bar(
        cornerRadiusEnd=4,
        color="#e76f51",
    ).encode(
        x=alt.X("count:Q", title="Readings"),
        y=alt.Y("reason:N", sort="-x", title=None),
        tooltip=[alt.Tooltip("reason:N"), alt.Tooltip("count:Q")],
    ).properties(height=40 * len(reasons) + 40)
    st.subheader("Rejection reasons")
    st.altair_chart(chart, use_container_width=True)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Meter Readings Upload", layout="wide")
    st.title("Meter Readings Upload")

    upload = st.file_uploader("Meter readings CSV", type=["csv"])
    if upload is None:
        st.info(
            "Upload a CSV with AccountId, MeterReadingDateTime and "
            "MeterReadValue columns."
        )
        return

    settings = MeterReadingsSettings.from_env()
    try:
        response = _process_upload(upload.getvalue(), settings.datetime_formats)
    except MeterReadingsCsvError as exc:
        st.error(f"The file could not be read: {exc}")
        return

    get_usage_logger().info(
        f"streamlit upload file={upload.name} "
        f"success={response.success_count} "
        f"failures={response.failure_count}"
    )

    success_col, failure_col = st.columns(2)
    success_col.metric("Successful readings", response.success_count)
    failure_col.metric("Failed readings", response.failure_count)

    if not response.errors:
        st.success("Every meter reading was accepted.")
        return

    _render_reasons_chart(_rejection_reasons(response))
    st.subheader("Rejected readings")
    st.dataframe(
        _error_rows(response),
        use_container_width=True,
        hide_index=True,
    )


if __name__ == "__main__":  # pragma: no cover
    main()
