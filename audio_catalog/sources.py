from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from .field_keys import FieldKey


class TagSource(Protocol):
    def get_first(self, key: FieldKey) -> Optional[str]: ...

    def has_artwork(self) -> bool: ...


@runtime_checkable
class LegacyFrameSource(Protocol):
    """Tag readers backed by ID3v2, exposing frames the standard keys do not map."""

    def get_first(self, key: FieldKey) -> Optional[str]: ...

    def has_artwork(self) -> bool: ...

    def has_raw_frame(self, frame_id: str) -> bool: ...

    def get_raw_frame(self, frame_id: str) -> Optional[str]: ...


class AudioProperties(Protocol):
    def is_variable_bitrate(self) -> bool: ...

    def bitrate(self) -> int: ...

    def track_length(self) -> int: ...
