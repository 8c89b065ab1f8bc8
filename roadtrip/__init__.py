"""
Roadtrip playlist tooling.

This package turns the free‑form text a generative model returns for
each analysed video chunk into a strict playlist CSV.  The upstream
stages (splitting the source video into chunks with ffmpeg, uploading
chunks to cloud storage and asking the model to describe each chunk)
are handled by external tools; this package only deals with the text
they produce.

The high‑level flow is:

1. **export.relaxed_parser** – Recover a record from one blob of model
   output.  Valid JSON is used as is, JSON embedded in prose is cut
   out of the surrounding text, and as a last resort a handful of
   per‑field patterns are matched against plain prose.
2. **export.write_csv** – Run the parser over every newline‑delimited
   blob and stream a fixed‑column CSV.  Blobs that yield nothing are
   skipped with a warning.
3. **cli** – Command line entry point wiring the above together.
"""

from importlib import metadata  # noqa: F401 (expose package version)
