"""
Exception hierarchy for the roadtrip exporter.

Parsing failures are recoverable and only ever cost the blob that
caused them.  Failures to read the input or write the output are
fatal for the whole export and propagate to the caller.
"""

from __future__ import annotations


class RoadtripError(Exception):
    """Base class for all errors raised by this package."""


class NoExtractableData(RoadtripError):
    """No parsing tier could recover a single field from a blob."""


class SourceReadFailure(RoadtripError):
    """The input file or stream could not be read."""


class SinkWriteFailure(RoadtripError):
    """The output sink rejected a write or flush."""
