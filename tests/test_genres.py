import unittest

from audio_catalog.genres import ID3V1_GENRES, decode_genre, genre_for_code


class TestGenreDecoding(unittest.TestCase):
    def test_parenthesized_code_maps_to_name(self) -> None:
        self.assertEqual(decode_genre("(17)"), "Rock")
        self.assertEqual(decode_genre("(0)"), "Blues")

    def test_code_with_trailing_refinement_uses_code(self) -> None:
        self.assertEqual(decode_genre("(17)Rock"), "Rock")
        self.assertEqual(decode_genre("(17)Something else"), "Rock")

    def test_plain_names_pass_through(self) -> None:
        self.assertEqual(decode_genre("Rock"), "Rock")
        self.assertEqual(decode_genre("Post-Rock (live)"), "Post-Rock (live)")
        self.assertEqual(decode_genre("17"), "17")
        self.assertEqual(decode_genre("(RX)"), "(RX)")

    def test_code_followed_by_line_break_is_not_a_code(self) -> None:
        self.assertEqual(decode_genre("(17)\nfoo"), "(17)\nfoo")

    def test_absent_stays_absent(self) -> None:
        self.assertIsNone(decode_genre(None))

    def test_out_of_range_code_gives_none(self) -> None:
        self.assertIsNone(decode_genre(f"({len(ID3V1_GENRES)})"))
        self.assertIsNone(decode_genre("(99999999999999999999)"))

    def test_genre_for_code_tolerates_sentinel(self) -> None:
        self.assertIsNone(genre_for_code(-1))
        self.assertEqual(genre_for_code(len(ID3V1_GENRES) - 1), ID3V1_GENRES[-1])


if __name__ == "__main__":
    unittest.main()
