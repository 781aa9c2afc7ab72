from __future__ import annotations

import logging
from typing import Optional

from .field_keys import FieldKey
from .genres import decode_genre
from .models import SHORT_MAX, UNKNOWN_ALBUM, MediaType, MetaData
from .sources import AudioProperties, LegacyFrameSource, TagSource

logger = logging.getLogger(__name__)

# Older encoders only write album artist into this ID3v2 frame.
ALBUM_ARTIST_FRAME = "TPE2"


class TagNormalizer:
    """Turns raw tag fields and audio header values into a canonical MetaData record.

    The normalizer never raises for a single file: unreadable fields become
    ``None`` and are reported as warnings. It keeps no state between calls, so
    one instance can be shared across worker threads.
    """

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger

    def normalize(
        self,
        filename: str,
        tag: Optional[TagSource],
        properties: Optional[AudioProperties],
    ) -> Optional[MetaData]:
        media_type = MediaType.from_filename(filename)
        if media_type is None:
            self.log.debug("Ignoring file %s", filename)
            return None

        meta = MetaData(media_type=media_type, album=UNKNOWN_ALBUM)
        if tag is not None:
            self._apply_tag(meta, tag)
        if properties is not None:
            self._apply_properties(meta, properties, filename)

        if not meta.has_minimum_tags:
            self.log.warning("Insufficient tags (artist/title missing) in %s", filename)
        return meta

    def _apply_tag(self, meta: MetaData, tag: TagSource) -> None:
        meta.artist = self.extract_field(tag, FieldKey.ARTIST)
        meta.artist_sort = self.extract_field(tag, FieldKey.ARTIST_SORT)
        meta.album_artist = self.resolve_album_artist(tag)
        meta.album_artist_sort = self.extract_field(tag, FieldKey.ALBUM_ARTIST_SORT)
        meta.album = self.to_album(self.extract_field(tag, FieldKey.ALBUM))
        meta.title = self.extract_field(tag, FieldKey.TITLE)
        meta.year = self.extract_field(tag, FieldKey.YEAR)
        meta.genre = self.decode_genre(self.extract_field(tag, FieldKey.GENRE))
        meta.composer = self.extract_field(tag, FieldKey.COMPOSER)
        meta.disc_nr = self.to_short(self.extract_field(tag, FieldKey.DISC_NO))
        meta.disc_nrs = self.to_short(self.extract_field(tag, FieldKey.DISC_TOTAL))
        meta.track_nr = self.to_short(self.extract_field(tag, FieldKey.TRACK))
        meta.track_nrs = self.to_short(self.extract_field(tag, FieldKey.TRACK_TOTAL))
        try:
            meta.cover_art_embedded = bool(tag.has_artwork())
        except Exception as exc:
            self.log.warning("Failed checking embedded artwork: %s", exc)
            meta.cover_art_embedded = False

    def _apply_properties(
        self, meta: MetaData, properties: AudioProperties, filename: str
    ) -> None:
        try:
            vbr = bool(properties.is_variable_bitrate())
            bitrate = _clamp_short(properties.bitrate())
            duration = _clamp_short(properties.track_length())
        except Exception as exc:
            self.log.warning("Failed reading audio header of %s: %s", filename, exc)
            return
        meta.vbr = vbr
        meta.bitrate = bitrate
        meta.duration = duration

    def extract_field(self, tag: TagSource, key: FieldKey) -> Optional[str]:
        try:
            return _trim_to_none(tag.get_first(key))
        except Exception as exc:
            self.log.warning("Failed reading tag field %s: %s", key.value, exc)
            return None

    def resolve_album_artist(self, tag: TagSource) -> Optional[str]:
        album_artist = self.extract_field(tag, FieldKey.ALBUM_ARTIST)
        if album_artist is not None or not isinstance(tag, LegacyFrameSource):
            return album_artist
        try:
            if tag.has_raw_frame(ALBUM_ARTIST_FRAME):
                return _trim_to_none(tag.get_raw_frame(ALBUM_ARTIST_FRAME))
        except Exception as exc:
            self.log.warning("Failed reading frame %s: %s", ALBUM_ARTIST_FRAME, exc)
        return None

    @staticmethod
    def decode_genre(genre: Optional[str]) -> Optional[str]:
        return decode_genre(genre)

    @staticmethod
    def to_album(album: Optional[str]) -> str:
        return UNKNOWN_ALBUM if album is None else album

    @staticmethod
    def to_short(value: Optional[str]) -> Optional[int]:
        cleaned = (value or "").strip()
        if not cleaned.isascii() or not cleaned.isdigit():
            return None
        number = int(cleaned)
        if number > SHORT_MAX:
            return None
        return number


def _trim_to_none(value: object) -> Optional[str]:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def _clamp_short(value: object) -> Optional[int]:
    if value is None:
        return None
    number = int(value)
    return max(0, min(number, SHORT_MAX))
