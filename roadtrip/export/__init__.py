"""
Export subsystem for roadtrip.

This package converts raw model output into playlist records and
writes them to CSV files.  The relaxed parser recovers a record from
each blob of text; the CSV writer projects records onto the fixed
column set defined in ``schema.py``.
"""

from .relaxed_parser import RelaxedJSONParser, parse_record  # noqa: F401
from .schema import PLAYLIST_HEADERS, to_csv_row  # noqa: F401
from .write_csv import CSVExporter, ExportManager, ExportReport, export_all, export_from_source  # noqa: F401
