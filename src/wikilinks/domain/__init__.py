"""Value types, encoding rules and namespace tables for wiki links."""

from src.wikilinks.domain.errors import InvalidTitle, MalformedURL, NotAWikiURL, UnresolvableHref, WikiLinkError
from src.wikilinks.domain.models import (
    FileLinkRewriteRule,
    NamespacedTitle,
    PageNamespace,
    PageTitle,
    SharingVariant,
    WikiURL,
)
from src.wikilinks.domain.rules import percent_encode_title_for_path

__all__ = [
    "FileLinkRewriteRule",
    "InvalidTitle",
    "MalformedURL",
    "NamespacedTitle",
    "NotAWikiURL",
    "PageNamespace",
    "PageTitle",
    "percent_encode_title_for_path",
    "SharingVariant",
    "UnresolvableHref",
    "WikiLinkError",
    "WikiURL",
]
