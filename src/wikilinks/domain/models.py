from dataclasses import dataclass, field
from enum import Enum, IntEnum

from src.wikilinks.domain.rules import (
    decode_title_path_component,
    denormalize_title,
    normalize_title,
    percent_encode_title_for_path,
)


class PageNamespace(IntEnum):
    """MediaWiki namespace numbers."""

    MEDIA = -2
    SPECIAL = -1
    MAIN = 0
    TALK = 1
    USER = 2
    USER_TALK = 3
    PROJECT = 4
    PROJECT_TALK = 5
    FILE = 6
    FILE_TALK = 7
    MEDIAWIKI = 8
    MEDIAWIKI_TALK = 9
    TEMPLATE = 10
    TEMPLATE_TALK = 11
    HELP = 12
    HELP_TALK = 13
    CATEGORY = 14
    CATEGORY_TALK = 15
    PORTAL = 100
    PORTAL_TALK = 101
    DRAFT = 118
    DRAFT_TALK = 119
    TIMED_TEXT = 710
    TIMED_TEXT_TALK = 711
    MODULE = 828
    MODULE_TALK = 829


class SharingVariant(str, Enum):
    TEXT = "text"
    IMAGE = "image"

    @property
    def provenance_tag(self) -> str:
        return _PROVENANCE_TAGS[self]


_PROVENANCE_TAGS: dict[SharingVariant, str] = {
    SharingVariant.TEXT: "sfti1",
    SharingVariant.IMAGE: "sfii1",
}


@dataclass(frozen=True)
class NamespacedTitle:
    namespace: PageNamespace
    title: str


@dataclass(frozen=True)
class PageTitle:
    """A page title held in display form (spaces, unescaped)."""

    display: str

    @classmethod
    def from_path_component(cls, component: str) -> "PageTitle":
        return cls(normalize_title(decode_title_path_component(component)))

    @property
    def underscored(self) -> str:
        return denormalize_title(self.display)

    @property
    def path_component(self) -> str:
        return percent_encode_title_for_path(self.display)


@dataclass(frozen=True)
class FileLinkRewriteRule:
    upload_host: str
    source_extensions: frozenset[str] = frozenset({"ogg", "oga"})
    anchor_segment: str = "commons"
    inserted_segment: str = "transcoded"
    appended_suffix: str = ".mp3"

    def applies_to_extension(self, extension: str) -> bool:
        return extension.lower() in self.source_extensions


@dataclass(frozen=True)
class WikiURL:
    scheme: str
    host: str
    path: str
    language: str | None
    query_items: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    fragment: str = ""
