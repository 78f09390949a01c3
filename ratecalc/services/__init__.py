"""
ratecalc/services package marker.
"""

from ratecalc.services.csv_reader_service import (
    CSVFileNotFoundError,
    CSVHeaderValidationError,
    UnsupportedFileTypeError,
    read_csv_file,
    read_csv_stream,
)
from ratecalc.services.date_filter import DateRangeError, filter_by_date_range, parse_date_range
from ratecalc.services.metrics_service import (
    EmptyDatasetError,
    MetricsService,
    NoStoreDataError,
    get_metrics_service,
)

__all__ = [
    "CSVFileNotFoundError",
    "CSVHeaderValidationError",
    "UnsupportedFileTypeError",
    "read_csv_file",
    "read_csv_stream",
    "DateRangeError",
    "filter_by_date_range",
    "parse_date_range",
    "EmptyDatasetError",
    "MetricsService",
    "NoStoreDataError",
    "get_metrics_service",
]
