from typing import Dict, Optional

from audio_catalog.field_keys import FieldKey


class FakeTags:
    def __init__(self, fields: Dict[FieldKey, str], artwork: bool = False, broken=()) -> None:
        self.fields = fields
        self.artwork = artwork
        self.broken = set(broken)

    def get_first(self, key: FieldKey) -> Optional[str]:
        if key in self.broken:
            raise ValueError(f"corrupt frame for {key.value}")
        return self.fields.get(key)

    def has_artwork(self) -> bool:
        return self.artwork


class FakeID3Tags(FakeTags):
    def __init__(self, fields: Dict[FieldKey, str], frames: Dict[str, str], **kwargs) -> None:
        super().__init__(fields, **kwargs)
        self.frames = frames

    def has_raw_frame(self, frame_id: str) -> bool:
        return frame_id in self.frames

    def get_raw_frame(self, frame_id: str) -> Optional[str]:
        return self.frames.get(frame_id)


class FakeHeader:
    def __init__(self, vbr: bool = False, bitrate: int = 320, length: int = 180) -> None:
        self.vbr = vbr
        self._bitrate = bitrate
        self.length = length

    def is_variable_bitrate(self) -> bool:
        return self.vbr

    def bitrate(self) -> int:
        return self._bitrate

    def track_length(self) -> int:
        return self.length


class BrokenHeader(FakeHeader):
    def bitrate(self) -> int:
        raise RuntimeError("no frames")

