# roadtrip/export/schema.py
"""
Playlist CSV schema.

Every playlist row has exactly the columns in ``PLAYLIST_HEADERS`` in
that order.  ``COLUMNS`` maps each header to where its value lives in
a parsed record and what to write when it is missing: the flat key
first, then the nested location the analysis prompt asks the model
to use (``song.title``, ``urls.youtube`` and so on).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

# A record is whatever mapping the parser recovered; values may be
# nested mappings, lists or scalars.
Record = Dict[str, object]

PLAYLIST_HEADERS = [
    "description", "has_music", "transcript", "song_title", "song_artist",
    "web_search_song_title", "web_search_song_artist", "youtube_url",
    "spotify_url", "video_path",
]


@dataclass(frozen=True)
class Column:
    name: str
    kind: type                              # str | bool
    nested: Optional[Tuple[str, ...]] = None

    @property
    def default(self) -> object:
        return False if self.kind is bool else ""

    def lookup(self, record: Record) -> object:
        """Return the column's value from ``record`` or its default.

        A value of the wrong type counts as missing.
        """
        value = _typed(record.get(self.name), self.kind)
        if value is None and self.nested:
            value = _typed(_dig(record, self.nested), self.kind)
        return self.default if value is None else value

    def render(self, record: Record) -> str:
        value = self.lookup(record)
        if self.kind is bool:
            return "true" if value else "false"
        return value  # type: ignore[return-value]


def _typed(value: object, kind: type) -> Optional[object]:
    # bool is checked exactly so that 0/1 never pass as a flag
    if kind is bool:
        return value if type(value) is bool else None
    return value if isinstance(value, kind) else None


def _dig(record: Record, path: Tuple[str, ...]) -> object:
    node: object = record
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


COLUMNS: List[Column] = [
    Column("description", str),
    Column("has_music", bool),
    Column("transcript", str),
    Column("song_title", str, ("song", "title")),
    Column("song_artist", str, ("song", "artist")),
    Column("web_search_song_title", str, ("web_search_song", "title")),
    Column("web_search_song_artist", str, ("web_search_song", "artist")),
    Column("youtube_url", str, ("urls", "youtube")),
    Column("spotify_url", str, ("urls", "spotify")),
    Column("video_path", str),
]


def to_csv_row(record: Record) -> List[str]:
    return [column.render(record) for column in COLUMNS]
