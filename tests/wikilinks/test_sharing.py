import unittest
from urllib.parse import parse_qsl, urlsplit

from src.wikilinks.domain.models import SharingVariant
from tests.utils.normalizer import make_normalizer


class SharingProvenanceTests(unittest.TestCase):
    def setUp(self):
        self.normalizer = make_normalizer()

    def test_image_sharing_replaces_existing_query(self):
        shared = self.normalizer.add_sharing_provenance(
            "https://en.wikipedia.org/wiki/Foo?oldid=12&wprov=old#History",
            SharingVariant.IMAGE,
        )
        self.assertEqual(shared, "https://en.wikipedia.org/wiki/Foo?wprov=sfii1#History")
        self.assertEqual(parse_qsl(urlsplit(shared).query), [("wprov", "sfii1")])

    def test_text_sharing(self):
        self.assertEqual(
            self.normalizer.url_for_text_sharing("https://en.wikipedia.org/wiki/Foo"),
            "https://en.wikipedia.org/wiki/Foo?wprov=sfti1",
        )

    def test_shortcuts_match_variants(self):
        url = "https://en.wikipedia.org/wiki/Foo"
        self.assertEqual(
            self.normalizer.url_for_image_sharing(url),
            self.normalizer.add_sharing_provenance(url, "image"),
        )

    def test_provenance_tags(self):
        self.assertEqual(SharingVariant.TEXT.provenance_tag, "sfti1")
        self.assertEqual(SharingVariant.IMAGE.provenance_tag, "sfii1")

    def test_undecomposable_url_is_returned_unchanged(self):
        for url in ("", "http://[::1"):
            with self.subTest(url=url):
                self.assertEqual(self.normalizer.add_sharing_provenance(url, SharingVariant.TEXT), url)
