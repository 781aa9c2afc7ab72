from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

UNKNOWN_ALBUM = "<Unknown album>"

# Catalog columns for numbers are 16-bit signed.
SHORT_MAX = 32767


class MediaType(str, Enum):
    """Supported audio containers, keyed by upper-case file suffix."""

    MP3 = "MP3"
    M4A = "M4A"
    M4B = "M4B"
    MP4 = "MP4"
    FLAC = "FLAC"
    OGG = "OGG"
    OGA = "OGA"
    WMA = "WMA"
    WAV = "WAV"
    AIF = "AIF"
    AIFF = "AIFF"

    @property
    def file_suffix(self) -> str:
        return self.value

    @classmethod
    def from_filename(cls, filename: str) -> Optional["MediaType"]:
        _, dot, extension = filename.rpartition(".")
        if not dot:
            return None
        return _BY_SUFFIX.get(extension.upper())


_BY_SUFFIX: Dict[str, MediaType] = {media.file_suffix: media for media in MediaType}


@dataclass(slots=True)
class MetaData:
    artist: Optional[str] = None
    artist_sort: Optional[str] = None
    album_artist: Optional[str] = None
    album_artist_sort: Optional[str] = None
    album: Optional[str] = None
    title: Optional[str] = None
    year: Optional[str] = None
    genre: Optional[str] = None
    composer: Optional[str] = None
    disc_nr: Optional[int] = None
    disc_nrs: Optional[int] = None
    track_nr: Optional[int] = None
    track_nrs: Optional[int] = None
    media_type: Optional[MediaType] = None
    cover_art_embedded: bool = False
    vbr: Optional[bool] = None
    bitrate: Optional[int] = None
    duration: Optional[int] = None

    @property
    def has_minimum_tags(self) -> bool:
        return self.artist is not None and self.title is not None

    def to_record(self) -> Dict[str, object]:
        payload: Dict[str, object] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, MediaType):
                value = value.value
            payload[item.name] = value
        return payload


@dataclass(slots=True)
class LibraryFile:
    """A file known to the catalog; metadata is attached once it has been read."""

    directory: Path
    filename: str
    metadata: Optional[MetaData] = None

    @property
    def path(self) -> Path:
        return self.directory / self.filename

    @classmethod
    def from_path(cls, path: Path) -> "LibraryFile":
        return cls(directory=path.parent, filename=path.name)


class AudioCatalogError(Exception):
    """Base class for errors surfaced to callers of audio-catalog."""
