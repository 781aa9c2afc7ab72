from __future__ import annotations

import re
from typing import Optional, Tuple

from mutagen.id3 import TCON

# ID3v1 genre list including the Winamp extensions, indexed by numeric code.
ID3V1_GENRES: Tuple[str, ...] = tuple(TCON.GENRES)

# "(17)" or "(17)Rock": a legacy numeric reference, optionally followed by refinement text.
GENRE_CODE_PATTERN = re.compile(r"\(([0-9]+)\).*")


def genre_for_code(code: int) -> Optional[str]:
    if 0 <= code < len(ID3V1_GENRES):
        return ID3V1_GENRES[code]
    return None


def decode_genre(genre: Optional[str]) -> Optional[str]:
    """Map legacy numeric genres such as "(17)" or "(17)Rock" to "Rock".

    Anything that is not a parenthesized code is already a plain genre name
    and is returned unchanged. Codes outside the table give ``None``.
    """
    if genre is None:
        return None
    match = GENRE_CODE_PATTERN.fullmatch(genre)
    if match:
        return genre_for_code(int(match.group(1)))
    return genre
