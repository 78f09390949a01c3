"""
ratecalc/api/routers/metrics_router.py

Metrics upload endpoint.

POST /metrics/upload-csv

Query parameters
----------------
date_range    : optional "MM/DD/YY-MM/DD/YY" filter, inclusive on both ends
output_format : "json" | "csv"   (default: "json")

Responses
---------
JSON : MetricsReportResponse
CSV  : the text report as a file download (text/csv, UTF-8 with BOM)

The router only handles HTTP plumbing; parsing and aggregation live in the
reader and metrics services.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status
from fastapi.responses import Response

from ratecalc.api.dependencies import get_csv_upload
from ratecalc.config import get_report_settings
from ratecalc.reporting.report_exporter import build_csv_report, default_report_name
from ratecalc.schemas.metrics import MetricsReportResponse
from ratecalc.services.csv_reader_service import CSVHeaderValidationError, read_csv_stream
from ratecalc.services.date_filter import DateRangeError, parse_date_range
from ratecalc.services.metrics_service import (
    EmptyDatasetError,
    MetricsService,
    NoStoreDataError,
    get_metrics_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/metrics", tags=["metrics"])

_VALID_FORMATS = frozenset({"json", "csv"})

_UNSAFE_HEADER_CHARS = re.compile(r'[^\x20-\x7e]|["\\]')


def _content_disposition(filename: str) -> str:
    """
    Attachment header with an ASCII fallback name and the UTF-8 name (RFC 5987).
    """

    fallback = _UNSAFE_HEADER_CHARS.sub("_", filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@router.post("/upload-csv", response_model=None)
def upload_csv(
    file: UploadFile = Depends(get_csv_upload),
    date_range: str | None = Query(
        default=None,
        description="Optional inclusive date filter in MM/DD/YY-MM/DD/YY format.",
    ),
    output_format: str = Query(
        default="json",
        description='Output format: "json" or "csv" (file download).',
    ),
    metrics_service: MetricsService = Depends(get_metrics_service),
) -> MetricsReportResponse | Response:
    """
    Compute store and special order metrics for one ShipStation CSV export.
    """

    if output_format not in _VALID_FORMATS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid output_format {output_format!r}. Must be one of: {sorted(_VALID_FORMATS)}.",
        )

    try:
        selected_range = parse_date_range(date_range)
        dataset = read_csv_stream(file.file, source_name=file.filename or "upload.csv")
        report = metrics_service.build_report(dataset, date_range=selected_range)
    except DateRangeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except CSVHeaderValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except (EmptyDatasetError, NoStoreDataError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    finally:
        file.file.close()

    logger.info(
        "Metrics computed source=%r records=%d stores=%d format=%r",
        report.source_name,
        report.record_count,
        len(report.store_metrics),
        output_format,
    )

    if output_format == "csv":
        preferred_order = get_report_settings().store_display_order
        filename = default_report_name(report.source_name)
        return Response(
            content=build_csv_report(report, preferred_order=preferred_order),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": _content_disposition(filename)},
        )
    return MetricsReportResponse.from_report(report)
