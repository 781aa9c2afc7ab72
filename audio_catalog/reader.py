from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mutagen import File as MutagenFile

from .mutagen_sources import audio_properties_for, tag_source_for
from .sources import AudioProperties, TagSource


@dataclass(frozen=True)
class AudioHandles:
    tag: Optional[TagSource] = None
    properties: Optional[AudioProperties] = None


def open_audio(path: Path) -> AudioHandles:
    """Decode the tag container and stream header of ``path``.

    Raises ``mutagen.MutagenError`` or ``OSError`` when the file cannot be
    decoded; formats mutagen does not recognise give empty handles.
    """
    audio = MutagenFile(path)
    if audio is None:
        return AudioHandles()
    return AudioHandles(tag=tag_source_for(audio), properties=audio_properties_for(audio))
