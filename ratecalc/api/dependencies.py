"""
ratecalc/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

import os

from fastapi import File, HTTPException, UploadFile, status

from ratecalc.config import get_api_settings

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}

EXCEL_SUFFIXES = (".xlsx", ".xls")


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the upload is a CSV by extension or MIME type and within the size limit.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    if filename.endswith(EXCEL_SUFFIXES):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Excel files are not yet supported. Please export as CSV from ShipStation.",
        )

    is_csv_filename = filename.endswith(".csv")
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    max_bytes = get_api_settings().max_upload_bytes
    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(0)
    if size > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Upload exceeds the {max_bytes} byte limit.",
        )

    return file
