import unittest
from pathlib import Path

from audio_catalog.models import UNKNOWN_ALBUM, LibraryFile, MediaType, MetaData


class TestMediaType(unittest.TestCase):
    def test_extension_lookup_is_case_insensitive(self) -> None:
        self.assertIs(MediaType.from_filename("track.mp3"), MediaType.MP3)
        self.assertIs(MediaType.from_filename("TRACK.Mp3"), MediaType.MP3)
        self.assertIs(MediaType.from_filename("a.b.flac"), MediaType.FLAC)
        self.assertIs(MediaType.from_filename("song.M4A"), MediaType.M4A)

    def test_unsupported_or_missing_extension(self) -> None:
        self.assertIsNone(MediaType.from_filename("cover.jpg"))
        self.assertIsNone(MediaType.from_filename("README"))
        self.assertIsNone(MediaType.from_filename("mp3"))
        self.assertIsNone(MediaType.from_filename("track."))


class TestMetaData(unittest.TestCase):
    def test_to_record_uses_media_type_name(self) -> None:
        meta = MetaData(artist="Muse", album=UNKNOWN_ALBUM, media_type=MediaType.FLAC, track_nr=3)
        record = meta.to_record()
        self.assertEqual(record["media_type"], "FLAC")
        self.assertEqual(record["artist"], "Muse")
        self.assertEqual(record["track_nr"], 3)
        self.assertIsNone(record["genre"])
        self.assertFalse(record["cover_art_embedded"])

    def test_has_minimum_tags(self) -> None:
        self.assertFalse(MetaData(artist="Muse").has_minimum_tags)
        self.assertTrue(MetaData(artist="Muse", title="Uprising").has_minimum_tags)


class TestLibraryFile(unittest.TestCase):
    def test_path_joins_directory_and_filename(self) -> None:
        file = LibraryFile.from_path(Path("/music/Muse/01.mp3"))
        self.assertEqual(file.directory, Path("/music/Muse"))
        self.assertEqual(file.filename, "01.mp3")
        self.assertEqual(file.path, Path("/music/Muse/01.mp3"))
        self.assertIsNone(file.metadata)


if __name__ == "__main__":
    unittest.main()
