"""
CSV writer for playlist records.

Provides ``CSVExporter``, a thin wrapper around :mod:`csv` that writes
the fixed playlist header and projects parsed records onto it, and
``ExportManager``, which feeds newline‑delimited model output through
:class:`~roadtrip.export.relaxed_parser.RelaxedJSONParser` and into
the CSV.  A blob the parser cannot make sense of is skipped with a
warning; the export as a whole only fails when the input cannot be
read or the output cannot be written.
"""

from __future__ import annotations

import csv
import logging
import os
from dataclasses import dataclass, field
from typing import IO, Iterable, List, Optional, Union

from ..errors import NoExtractableData, SinkWriteFailure, SourceReadFailure
from .relaxed_parser import RelaxedJSONParser
from .schema import PLAYLIST_HEADERS, Record, to_csv_row

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", IO]


@dataclass
class SkippedBlob:
    """A blob that produced no row."""

    position: int
    reason: str


@dataclass
class ExportReport:
    """Outcome of a single export call."""

    rows_written: int = 0
    skipped: List[SkippedBlob] = field(default_factory=list)
    blank: int = 0


class CSVExporter:
    """Write playlist rows to a text sink.

    Only text sinks are supported; wrap a binary stream in
    :class:`io.TextIOWrapper` first.  A binary sink fails with
    :class:`SinkWriteFailure` on the first write.  The sink should be
    opened with ``newline=""`` when it is a file so that line endings
    are exactly ``\\n``.
    """

    def __init__(self, sink: IO[str]) -> None:
        self.sink = sink
        self.writer = csv.writer(sink, lineterminator="\n")

    def _write(self, row: List[str]) -> None:
        try:
            self.writer.writerow(row)
        except (OSError, ValueError, TypeError) as exc:
            raise SinkWriteFailure(f"failed to write CSV row: {exc}") from exc

    def write_header(self) -> None:
        self._write(PLAYLIST_HEADERS)

    def write_record(self, record: Record) -> None:
        self._write(to_csv_row(record))

    def flush(self) -> None:
        try:
            self.sink.flush()
        except (OSError, ValueError) as exc:
            raise SinkWriteFailure(f"failed to flush CSV output: {exc}") from exc


def read_source(source: Source, encoding: str = "utf-8") -> str:
    """Read a whole file path or stream into a string."""
    try:
        if isinstance(source, (str, os.PathLike)):
            with open(source, "r", encoding=encoding) as f:
                return f.read()
        data = source.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadFailure(f"failed to read input: {exc}") from exc
    if isinstance(data, bytes):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as exc:
            raise SourceReadFailure(f"failed to decode input: {exc}") from exc
    return data


class ExportManager:
    """Run the complete text‑to‑CSV export into one sink."""

    def __init__(self, sink: IO[str], parser: Optional[RelaxedJSONParser] = None) -> None:
        self.parser = parser or RelaxedJSONParser()
        self.exporter = CSVExporter(sink)

    def export_all(self, blobs: Iterable[str]) -> ExportReport:
        """Parse each blob and write one CSV row per recovered record.

        The header is always written, even for empty input.  Positions
        in warnings and in the returned report are 1‑based and count
        blank blobs too.

        Args:
            blobs: Raw model output, one candidate record per item.

        Returns:
            An :class:`ExportReport` for this call.

        Raises:
            SinkWriteFailure: If the sink rejects a write.
        """
        report = ExportReport()
        self.exporter.write_header()
        for position, blob in enumerate(blobs, start=1):
            blob = blob.strip()
            if not blob:
                report.blank += 1
                continue
            try:
                record = self.parser.parse(blob)
            except NoExtractableData as exc:
                logger.warning("Failed to parse blob %d, skipping: %s", position, exc)
                report.skipped.append(SkippedBlob(position, str(exc)))
                continue
            self.exporter.write_record(record)
            report.rows_written += 1
        self.exporter.flush()
        logger.info(
            "Export complete: %d rows written, %d skipped",
            report.rows_written,
            len(report.skipped),
        )
        return report

    def export_from_string(self, text: str) -> ExportReport:
        # Only "\n" separates blobs; U+2028 and friends may appear inside JSON strings.
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return self.export_all(lines)

    def export_from_source(self, source: Source, encoding: str = "utf-8") -> ExportReport:
        """Read ``source`` in full and export its lines.

        ``source`` may be a path or an open text/binary stream such as
        ``sys.stdin``.  Nothing is written if reading fails.

        Raises:
            SourceReadFailure: If the source cannot be read or decoded.
            SinkWriteFailure: If the sink rejects a write.
        """
        text = read_source(source, encoding)
        return self.export_from_string(text)


def export_all(blobs: Iterable[str], sink: IO[str]) -> ExportReport:
    """Export ``blobs`` into ``sink`` with a default parser."""
    return ExportManager(sink).export_all(blobs)


def export_from_source(source: Source, sink: IO[str], encoding: str = "utf-8") -> ExportReport:
    """Export the lines of a file path or stream into ``sink``."""
    return ExportManager(sink).export_from_source(source, encoding=encoding)
