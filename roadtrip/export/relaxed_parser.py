"""
Relaxed JSON parser for model output.

The analysis model is asked to answer with a single JSON object, but
in practice it often wraps the object in prose, or answers in prose
altogether.  ``RelaxedJSONParser`` recovers what it can using an
ordered list of extraction strategies:

* ``StrictJSONStrategy`` – the whole blob is a JSON object.
* ``EmbeddedJSONStrategy`` – a JSON object is embedded somewhere in
  the blob; candidate spans are found with a fixed list of patterns.
* ``HeuristicFieldStrategy`` – individual fields are picked out of
  plain prose with per‑field patterns.

The first strategy that returns a mapping wins.  If none does,
:class:`~roadtrip.errors.NoExtractableData` is raised.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from ..errors import NoExtractableData
from .schema import Record

logger = logging.getLogger(__name__)

# Most specific first: an object that mentions "description", then the
# longest brace span (objects with nested braces), then the shortest.
# Spans may cross line breaks.
EMBEDDED_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r'\{[^{}]*"description"[^{}]*\}'),
    re.compile(r"\{.*\}", re.DOTALL),
    re.compile(r"\{.*?\}", re.DOTALL),
)

# NOTE: the song_artist pattern matches any `by "X"` phrase, so prose
# such as `written by "Someone"` is picked up as the artist.
FIELD_PATTERNS: Tuple[Tuple[str, re.Pattern[str]], ...] = (
    ("description", re.compile(r'description\s+of\s+"([^"]*)"')),
    ("has_music", re.compile(r"music:\s*(true|false)")),
    ("transcript", re.compile(r'"transcript"\s*:\s*"([^"]*)"')),
    ("song_title", re.compile(r'title\s+is\s+"([^"]*)"')),
    ("song_artist", re.compile(r'by\s+"([^"]*)"')),
    ("video_path", re.compile(r'path\s+is\s+"([^"]*)"')),
)


def _loads_object(text: str) -> Optional[Record]:
    """Decode ``text`` as JSON, returning it only if it is an object."""
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return data if isinstance(data, dict) else None


class ExtractionStrategy(ABC):
    """One tier of the relaxed parser."""

    name: str = "base"

    @abstractmethod
    def attempt(self, text: str) -> Optional[Record]:
        """Try to recover a record from ``text``.

        Returns:
            The recovered mapping, or ``None`` if this strategy found
            nothing.
        """
        raise NotImplementedError


class StrictJSONStrategy(ExtractionStrategy):
    name = "strict"

    def attempt(self, text: str) -> Optional[Record]:
        return _loads_object(text)


class EmbeddedJSONStrategy(ExtractionStrategy):
    name = "embedded"

    def __init__(self, patterns: Sequence[re.Pattern[str]] = EMBEDDED_PATTERNS) -> None:
        self.patterns = tuple(patterns)

    def attempt(self, text: str) -> Optional[Record]:
        for pattern in self.patterns:
            for match in pattern.finditer(text):
                record = _loads_object(match.group(0))
                if record is not None:
                    logger.info("Recovered embedded JSON using pattern %s", pattern.pattern)
                    return record
        return None


class HeuristicFieldStrategy(ExtractionStrategy):
    name = "heuristic"

    def __init__(self, patterns: Sequence[Tuple[str, re.Pattern[str]]] = FIELD_PATTERNS) -> None:
        self.patterns = tuple(patterns)

    def attempt(self, text: str) -> Optional[Record]:
        record: Record = {}
        for key, pattern in self.patterns:
            match = pattern.search(text)
            if not match:
                continue
            value = match.group(1)
            record[key] = value == "true" if key == "has_music" else value
        if not record:
            return None
        logger.info("Recovered %d fields from prose", len(record))
        return record


def default_strategies() -> List[ExtractionStrategy]:
    return [StrictJSONStrategy(), EmbeddedJSONStrategy(), HeuristicFieldStrategy()]


class RelaxedJSONParser:
    """Parse model output with increasingly lenient strategies.

    Instances hold no per-call state and may be shared freely.
    """

    def __init__(self, strategies: Optional[Sequence[ExtractionStrategy]] = None) -> None:
        self.strategies = tuple(strategies) if strategies is not None else tuple(default_strategies())

    def parse(self, text: str) -> Record:
        """Recover a record from one blob of model output.

        Args:
            text: Raw text as returned by the model.  May be empty.

        Returns:
            The recovered mapping.  Values may be nested; unknown keys
            are kept.

        Raises:
            NoExtractableData: If no strategy recovered anything.
        """
        for strategy in self.strategies:
            record = strategy.attempt(text)
            if record is not None:
                logger.debug("Parsed blob with %s strategy", strategy.name)
                return record
            logger.debug("%s strategy found nothing", strategy.name)
        raise NoExtractableData("failed to extract any data from input")


def parse_record(text: str) -> Record:
    """Parse ``text`` with a default :class:`RelaxedJSONParser`."""
    return RelaxedJSONParser().parse(text)
