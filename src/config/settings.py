# Site configuration consumed by the link normalizer

import os
from dataclasses import dataclass, field
from typing import Literal, Mapping

from dotenv import load_dotenv

from src.wikilinks.domain.models import FileLinkRewriteRule, PageNamespace
from src.wikilinks.domain.namespaces import LANGUAGE_NAMESPACES

load_dotenv()

TitleCasing = Literal["first-letter", "case-sensitive"]
TITLE_CASINGS: tuple[str, ...] = ("first-letter", "case-sensitive")

DEFAULT_UPLOAD_HOST = "upload.wikimedia.org"
DEFAULT_LEGACY_AUDIO_EXTENSIONS = frozenset({"ogg", "oga"})


@dataclass(frozen=True)
class SiteConfiguration:
    upload_host: str = DEFAULT_UPLOAD_HOST
    legacy_audio_extensions: frozenset[str] = DEFAULT_LEGACY_AUDIO_EXTENSIONS
    app_scheme: str = "wikipedia"
    default_scheme: str = "https"
    mobile_subdomain: str = "m"
    non_language_subdomains: frozenset[str] = frozenset(
        {"www", "m", "commons", "meta", "species", "upload", "incubator", "wikitech"}
    )
    title_casing: TitleCasing = "first-letter"
    case_sensitive_host_suffixes: frozenset[str] = frozenset({"wiktionary.org"})
    namespace_tables: Mapping[str, Mapping[str, PageNamespace]] = field(
        default_factory=lambda: LANGUAGE_NAMESPACES
    )

    def __post_init__(self) -> None:
        if self.title_casing not in TITLE_CASINGS:
            raise ValueError(f"Unsupported title casing: {self.title_casing}")

    @property
    def playback_rule(self) -> FileLinkRewriteRule:
        return FileLinkRewriteRule(
            upload_host=self.upload_host.lower(),
            source_extensions=frozenset(ext.lower() for ext in self.legacy_audio_extensions),
        )

    def is_case_sensitive_host(self, host: str) -> bool:
        if self.title_casing == "case-sensitive":
            return True
        host = host.lower()
        return any(host == suffix or host.endswith(f".{suffix}") for suffix in self.case_sensitive_host_suffixes)


def _split_csv(value: str) -> frozenset[str]:
    return frozenset(item.strip().lower().lstrip(".") for item in value.split(",") if item.strip())


def load_site_configuration(environ: Mapping[str, str] | None = None) -> SiteConfiguration:
    env = os.environ if environ is None else environ
    overrides: dict[str, object] = {}

    upload_host = env.get("WIKILINKS_UPLOAD_HOST")
    if upload_host:
        overrides["upload_host"] = upload_host.strip().lower()

    extensions = env.get("WIKILINKS_LEGACY_AUDIO_EXTENSIONS")
    if extensions:
        overrides["legacy_audio_extensions"] = _split_csv(extensions)

    app_scheme = env.get("WIKILINKS_APP_SCHEME")
    if app_scheme:
        overrides["app_scheme"] = app_scheme.strip()

    title_casing = env.get("WIKILINKS_TITLE_CASING")
    if title_casing:
        overrides["title_casing"] = title_casing.strip().lower()

    return SiteConfiguration(**overrides)
