from __future__ import annotations

import unittest

from commita import escape_svg_text, truncate


class EscapeSvgTextTests(unittest.TestCase):
    def test_escapes_ampersands(self) -> None:
        self.assertEqual(escape_svg_text("a & b"), "a &amp; b")

    def test_escapes_angle_brackets(self) -> None:
        self.assertEqual(escape_svg_text("<script>"), "&lt;script&gt;")

    def test_escapes_quotes(self) -> None:
        self.assertEqual(escape_svg_text('"hello"'), "&quot;hello&quot;")
        self.assertEqual(escape_svg_text("it's"), "it&apos;s")

    def test_leaves_clean_text_unchanged(self) -> None:
        self.assertEqual(escape_svg_text("hello world"), "hello world")

    def test_escapes_multiple_special_characters(self) -> None:
        self.assertEqual(
            escape_svg_text('<a href="x">&'), "&lt;a href=&quot;x&quot;&gt;&amp;"
        )

    def test_escapes_existing_entity_text(self) -> None:
        self.assertEqual(escape_svg_text("&amp;"), "&amp;amp;")


    def test_replaces_control_characters_and_lone_surrogates(self) -> None:
        self.assertEqual(escape_svg_text("a\x07b\udc80c"), "a\ufffdb\ufffdc")

    def test_keeps_tab_newline_and_astral_characters(self) -> None:
        self.assertEqual(escape_svg_text("a\tb\n\U0001f389"), "a\tb\n\U0001f389")


class TruncateTests(unittest.TestCase):
    def test_returns_short_text_unchanged(self) -> None:
        self.assertEqual(truncate("hello", 10), "hello")

    def test_truncates_long_text_with_ellipsis(self) -> None:
        result = truncate("this is a very long message", 15)

        self.assertEqual(len(result), 15)
        self.assertEqual(result, "this is a very…")

    def test_keeps_text_of_exact_length(self) -> None:
        self.assertEqual(truncate("exact", 5), "exact")


if __name__ == "__main__":
    unittest.main()
