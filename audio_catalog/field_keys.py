from __future__ import annotations

from enum import Enum

# Standard tag fields every TagSource answers for, independent of container format.


class FieldKey(str, Enum):
    ARTIST = "artist"
    ARTIST_SORT = "artist_sort"
    ALBUM_ARTIST = "album_artist"
    ALBUM_ARTIST_SORT = "album_artist_sort"
    ALBUM = "album"
    TITLE = "title"
    YEAR = "year"
    GENRE = "genre"
    COMPOSER = "composer"
    DISC_NO = "disc_no"
    DISC_TOTAL = "disc_total"
    TRACK = "track"
    TRACK_TOTAL = "track_total"
