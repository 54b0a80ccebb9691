import unittest

from loguru import logger

from src.wikilinks.domain.errors import UnresolvableHref
from tests.utils.normalizer import make_normalizer

BASE = "https://en.wikipedia.org/wiki/G%2FO_Media"


class ResolveRelativeHrefTests(unittest.TestCase):
    def setUp(self):
        self.normalizer = make_normalizer()

    def test_encoded_slash_in_base_is_one_segment(self):
        self.assertEqual(self.normalizer.resolve_relative_href(BASE, "./Foo"), "https://en.wikipedia.org/wiki/Foo")

    def test_raw_slash_in_base_is_encoded_before_resolution(self):
        self.assertEqual(
            self.normalizer.resolve_relative_href("https://en.wikipedia.org/wiki/G/O_Media", "./Foo"),
            "https://en.wikipedia.org/wiki/Foo",
        )

    def test_relative_href_with_slash_in_title(self):
        self.assertEqual(
            self.normalizer.resolve_relative_href(BASE, "./AC/DC#Members"),
            "https://en.wikipedia.org/wiki/AC/DC#Members",
        )

    def test_relative_href_is_percent_encoded(self):
        self.assertEqual(
            self.normalizer.resolve_relative_href(BASE, "./Café au lait"),
            "https://en.wikipedia.org/wiki/Caf%C3%A9%20au%20lait",
        )

    def test_already_encoded_href_is_not_double_encoded(self):
        self.assertEqual(
            self.normalizer.resolve_relative_href(BASE, "./Caf%C3%A9"),
            "https://en.wikipedia.org/wiki/Caf%C3%A9",
        )

    def test_root_relative_href(self):
        self.assertEqual(
            self.normalizer.resolve_relative_href(BASE, "/w/index.php?title=Foo&action=edit"),
            "https://en.wikipedia.org/w/index.php?title=Foo&action=edit",
        )

    def test_protocol_relative_href(self):
        self.assertEqual(
            self.normalizer.resolve_relative_href(BASE, "//upload.wikimedia.org/wikipedia/commons/a/ab/Sound.ogg"),
            "https://upload.wikimedia.org/wikipedia/commons/a/ab/Sound.ogg",
        )

    def test_fragment_only_href(self):
        self.assertEqual(
            self.normalizer.resolve_relative_href(BASE, "#cite_note-1"),
            "https://en.wikipedia.org/wiki/G%2FO_Media#cite_note-1",
        )

    def test_absolute_href_ignores_base(self):
        href = "https://fr.wikipedia.org/wiki/Caf%C3%A9"
        self.assertEqual(self.normalizer.resolve_relative_href(BASE, href), href)
        self.assertEqual(self.normalizer.resolve_relative_href("https://example.com/", href), href)

    def test_empty_href(self):
        for href in ("", "   "):
            with self.subTest(href=href):
                with self.assertRaises(UnresolvableHref):
                    self.normalizer.resolve_relative_href(BASE, href)

    def test_relative_href_against_non_wiki_base(self):
        with self.assertRaises(UnresolvableHref):
            self.normalizer.resolve_relative_href("https://en.wikipedia.org/w/index.php", "./Foo")

    def test_relative_href_against_relative_base(self):
        with self.assertRaises(UnresolvableHref):
            self.normalizer.resolve_relative_href("/wiki/Foo", "./Bar")

    def test_unparseable_href(self):
        with self.assertRaises(UnresolvableHref):
            self.normalizer.resolve_relative_href(BASE, "http://[::1")

    def test_href_outside_uri_character_set(self):
        for href in ("Bar baz", "Foo\n", "Café", "100%", "a<b>", "tab\there"):
            with self.subTest(href=href):
                with self.assertRaises(UnresolvableHref):
                    self.normalizer.resolve_relative_href("https://en.wikipedia.org/wiki/Foo", href)

    def test_plain_relative_href(self):
        self.assertEqual(
            self.normalizer.resolve_relative_href("https://en.wikipedia.org/wiki/Foo", "Bar_baz"),
            "https://en.wikipedia.org/wiki/Bar_baz",
        )


class NonWikiBaseLoggingTests(unittest.TestCase):
    def test_non_wiki_base_logs_below_warning(self):
        normalizer = make_normalizer()
        logger.enable("src.wikilinks")
        records = []
        handler_id = logger.add(records.append, level="WARNING")
        try:
            with self.assertRaises(UnresolvableHref):
                normalizer.resolve_relative_href("https://en.wikipedia.org/w/index.php", "./Foo")
        finally:
            logger.remove(handler_id)
            logger.disable("src.wikilinks")
        self.assertEqual(records, [])
