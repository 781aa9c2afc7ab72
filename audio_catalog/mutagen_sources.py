from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from mutagen.asf import ASFTags
from mutagen.flac import VCFLACDict
from mutagen.id3 import ID3
from mutagen.mp3 import BitrateMode
from mutagen.mp4 import MP4Tags
from mutagen.oggopus import OggOpusVComment
from mutagen.oggvorbis import OggVCommentDict

from .field_keys import FieldKey
from .sources import AudioProperties, TagSource

logger = logging.getLogger(__name__)

ID3_FRAMES: Dict[FieldKey, str] = {
    FieldKey.ARTIST: "TPE1",
    FieldKey.ARTIST_SORT: "TSOP",
    FieldKey.ALBUM_ARTIST: "TXXX:ALBUM ARTIST",
    FieldKey.ALBUM_ARTIST_SORT: "TSO2",
    FieldKey.ALBUM: "TALB",
    FieldKey.TITLE: "TIT2",
    FieldKey.YEAR: "TDRC",
    FieldKey.GENRE: "TCON",
    FieldKey.COMPOSER: "TCOM",
}

VORBIS_KEYS: Dict[FieldKey, Tuple[str, ...]] = {
    FieldKey.ARTIST: ("ARTIST",),
    FieldKey.ARTIST_SORT: ("ARTISTSORT",),
    FieldKey.ALBUM_ARTIST: ("ALBUMARTIST", "ALBUM ARTIST"),
    FieldKey.ALBUM_ARTIST_SORT: ("ALBUMARTISTSORT",),
    FieldKey.ALBUM: ("ALBUM",),
    FieldKey.TITLE: ("TITLE",),
    FieldKey.YEAR: ("DATE", "YEAR"),
    FieldKey.GENRE: ("GENRE",),
    FieldKey.COMPOSER: ("COMPOSER",),
    FieldKey.DISC_TOTAL: ("DISCTOTAL", "TOTALDISCS"),
    FieldKey.TRACK_TOTAL: ("TRACKTOTAL", "TOTALTRACKS"),
}

MP4_KEYS: Dict[FieldKey, str] = {
    FieldKey.ARTIST: "\xa9ART",
    FieldKey.ARTIST_SORT: "soar",
    FieldKey.ALBUM_ARTIST: "aART",
    FieldKey.ALBUM_ARTIST_SORT: "soaa",
    FieldKey.ALBUM: "\xa9alb",
    FieldKey.TITLE: "\xa9nam",
    FieldKey.YEAR: "\xa9day",
    FieldKey.GENRE: "\xa9gen",
    FieldKey.COMPOSER: "\xa9wrt",
}

# Comment blocks of FLAC (native and Ogg-wrapped), Ogg Vorbis and Opus.
VORBIS_COMMENT_TYPES = (VCFLACDict, OggVCommentDict, OggOpusVComment)

ASF_KEYS: Dict[FieldKey, str] = {
    FieldKey.ARTIST: "Author",
    FieldKey.ARTIST_SORT: "WM/ArtistSortOrder",
    FieldKey.ALBUM_ARTIST: "WM/AlbumArtist",
    FieldKey.ALBUM_ARTIST_SORT: "WM/AlbumArtistSortOrder",
    FieldKey.ALBUM: "WM/AlbumTitle",
    FieldKey.TITLE: "Title",
    FieldKey.YEAR: "WM/Year",
    FieldKey.GENRE: "WM/Genre",
    FieldKey.COMPOSER: "WM/Composer",
    FieldKey.DISC_NO: "WM/PartOfSet",
    FieldKey.TRACK: "WM/TrackNumber",
}

# Keys holding "number/total" pairs, per format.
ID3_POSITIONS = {FieldKey.TRACK: "TRCK", FieldKey.DISC_NO: "TPOS"}
VORBIS_POSITIONS = {FieldKey.TRACK: "TRACKNUMBER", FieldKey.DISC_NO: "DISCNUMBER"}
MP4_POSITIONS = {FieldKey.TRACK: "trkn", FieldKey.DISC_NO: "disk"}
TOTAL_OF = {FieldKey.TRACK_TOTAL: FieldKey.TRACK, FieldKey.DISC_TOTAL: FieldKey.DISC_NO}


def split_position(value: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Split "3/12" into ("3", "12"); a bare "3" has no total."""
    if value is None:
        return None, None
    number, _, total = value.partition("/")
    return number, (total or None)


def _first_text(values: Optional[Sequence[Any]]) -> Optional[str]:
    if not values:
        return None
    first = values[0]
    if isinstance(first, bytes):
        return first.decode("utf-8", errors="replace")
    return str(first)


class ID3TagSource:
    """ID3v2 tags (MP3, WAV, AIFF). Exposes raw frames for legacy fallbacks."""

    def __init__(self, tags: ID3) -> None:
        self.tags = tags

    def get_first(self, key: FieldKey) -> Optional[str]:
        if key in ID3_POSITIONS:
            return split_position(self.get_raw_frame(ID3_POSITIONS[key]))[0]
        if key in TOTAL_OF:
            return split_position(self.get_raw_frame(ID3_POSITIONS[TOTAL_OF[key]]))[1]
        frame_id = ID3_FRAMES.get(key)
        return self.get_raw_frame(frame_id) if frame_id else None

    def has_artwork(self) -> bool:
        return bool(self.tags.getall("APIC"))

    def has_raw_frame(self, frame_id: str) -> bool:
        return bool(self.tags.getall(frame_id))

    def get_raw_frame(self, frame_id: str) -> Optional[str]:
        frames = self.tags.getall(frame_id)
        if not frames:
            return None
        return _first_text(getattr(frames[0], "text", None))


class VorbisTagSource:
    """Vorbis comments (FLAC, Ogg). FLAC pictures live outside the comment block."""

    def __init__(self, tags: Any, pictures: Iterable[Any] = ()) -> None:
        self.tags = tags
        self.pictures = list(pictures)

    def get_first(self, key: FieldKey) -> Optional[str]:
        if key in VORBIS_POSITIONS:
            return split_position(self._value(VORBIS_POSITIONS[key]))[0]
        if key in TOTAL_OF:
            total = self._first_of(VORBIS_KEYS[key])
            if total is not None:
                return total
            return split_position(self._value(VORBIS_POSITIONS[TOTAL_OF[key]]))[1]
        names = VORBIS_KEYS.get(key)
        return self._first_of(names) if names else None

    def has_artwork(self) -> bool:
        if self.pictures:
            return True
        return self._value("METADATA_BLOCK_PICTURE") is not None or self._value("COVERART") is not None

    def _first_of(self, names: Iterable[str]) -> Optional[str]:
        for name in names:
            value = self._value(name)
            if value is not None:
                return value
        return None

    def _value(self, name: str) -> Optional[str]:
        return _first_text(self.tags.get(name))


class MP4TagSource:
    def __init__(self, tags: MP4Tags) -> None:
        self.tags = tags

    def get_first(self, key: FieldKey) -> Optional[str]:
        if key in MP4_POSITIONS:
            return self._position(MP4_POSITIONS[key], 0)
        if key in TOTAL_OF:
            return self._position(MP4_POSITIONS[TOTAL_OF[key]], 1)
        atom = MP4_KEYS.get(key)
        return _first_text(self.tags.get(atom)) if atom else None

    def has_artwork(self) -> bool:
        return bool(self.tags.get("covr"))

    def _position(self, atom: str, index: int) -> Optional[str]:
        pairs = self.tags.get(atom)
        if not pairs:
            return None
        pair = pairs[0]
        if not isinstance(pair, (tuple, list)) or len(pair) <= index:
            return None
        value = pair[index]
        # 0 means "not set" in trkn/disk atoms
        return str(value) if value else None


class ASFTagSource:
    def __init__(self, tags: ASFTags) -> None:
        self.tags = tags

    def get_first(self, key: FieldKey) -> Optional[str]:
        if key in TOTAL_OF:
            return split_position(self._value(ASF_KEYS[TOTAL_OF[key]]))[1]
        name = ASF_KEYS.get(key)
        if not name:
            return None
        value = self._value(name)
        if key in (FieldKey.TRACK, FieldKey.DISC_NO):
            return split_position(value)[0]
        return value

    def has_artwork(self) -> bool:
        return self._value("WM/Picture") is not None

    def _value(self, name: str) -> Optional[str]:
        try:
            values = self.tags[name]
        except KeyError:
            return None
        if not values:
            return None
        first = values[0]
        if hasattr(first, "value") and not isinstance(first.value, bytes):
            return str(first.value)
        return _first_text([first])


class MutagenAudioProperties:
    """Stream info as reported by mutagen; bitrate is converted to kbps."""

    def __init__(self, info: Any) -> None:
        self.info = info

    def is_variable_bitrate(self) -> bool:
        mode = getattr(self.info, "bitrate_mode", None)
        return mode in (BitrateMode.VBR, BitrateMode.ABR)

    def bitrate(self) -> int:
        bits = getattr(self.info, "bitrate", 0) or 0
        return int(bits) // 1000

    def track_length(self) -> int:
        length = getattr(self.info, "length", 0) or 0
        return int(length)


def tag_source_for(audio: Any) -> Optional[TagSource]:
    tags = getattr(audio, "tags", None)
    if tags is None:
        return None
    if isinstance(tags, ID3):
        return ID3TagSource(tags)
    if isinstance(tags, VORBIS_COMMENT_TYPES):
        return VorbisTagSource(tags, getattr(audio, "pictures", ()))
    if isinstance(tags, MP4Tags):
        return MP4TagSource(tags)
    if isinstance(tags, ASFTags):
        return ASFTagSource(tags)
    logger.debug("No tag adapter for %s", type(tags).__name__)
    return None


def audio_properties_for(audio: Any) -> Optional[AudioProperties]:
    info = getattr(audio, "info", None)
    if info is None:
        return None
    return MutagenAudioProperties(info)
