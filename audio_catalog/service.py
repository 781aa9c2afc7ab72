from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from mutagen import MutagenError

from .models import LibraryFile, MediaType, MetaData
from .normalizer import TagNormalizer
from .reader import AudioHandles, open_audio

logger = logging.getLogger(__name__)


class AudioTagService:
    """Reads a library file's tags and attaches the normalized MetaData to it.

    Failures to decode a file are logged and the file is still catalogued with
    whatever could be derived from its name, so one broken file never aborts a
    batch.
    """

    def __init__(
        self,
        normalizer: Optional[TagNormalizer] = None,
        opener: Callable[[Path], AudioHandles] = open_audio,
    ) -> None:
        self.normalizer = normalizer or TagNormalizer()
        self._open = opener

    def update_metadata(self, file: LibraryFile) -> Optional[MetaData]:
        if MediaType.from_filename(file.filename) is None:
            logger.debug("Ignoring file %s", file.filename)
            return None

        try:
            handles = self._open(file.path)
        except (MutagenError, OSError) as exc:
            logger.warning(
                "Could not read metadata of file %s from %s: %s",
                file.filename,
                file.directory,
                exc,
            )
            handles = AudioHandles()

        metadata = self.normalizer.normalize(file.filename, handles.tag, handles.properties)
        if metadata is not None:
            file.metadata = metadata
        return metadata
