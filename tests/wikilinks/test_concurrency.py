import unittest
from concurrent.futures import ThreadPoolExecutor

from tests.utils.normalizer import make_normalizer

TITLES = [f"Topic {i}/Part {i % 7} Café" for i in range(400)]


def _pipeline(normalizer, title: str) -> tuple[str, str | None, str]:
    built = normalizer.build_url_with_title("https://en.wikipedia.org", title)
    canonical = normalizer.canonicalize_article_url(built)
    resolved = normalizer.resolve_relative_href(canonical, "./Other")
    return canonical, normalizer.extract_title(canonical), resolved


class ConcurrentUseTests(unittest.TestCase):
    def test_shared_normalizer_has_no_cross_talk(self):
        normalizer = make_normalizer()
        expected = [_pipeline(normalizer, title) for title in TITLES]

        with ThreadPoolExecutor(max_workers=16) as pool:
            actual = list(pool.map(lambda title: _pipeline(normalizer, title), TITLES))

        self.assertEqual(actual, expected)
        for title, (_, extracted, resolved) in zip(TITLES, actual):
            self.assertEqual(extracted, title)
            self.assertEqual(resolved, "https://en.wikipedia.org/wiki/Other")
