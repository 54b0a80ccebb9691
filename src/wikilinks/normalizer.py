from urllib.parse import SplitResult, parse_qsl, unquote, urlencode, urljoin, urlsplit, urlunsplit

from src.config.logger_config import logger
from src.config.settings import SiteConfiguration, load_site_configuration
from src.wikilinks.domain.errors import MalformedURL, NotAWikiURL, UnresolvableHref, WikiLinkError
from src.wikilinks.domain.models import NamespacedTitle, PageNamespace, SharingVariant, WikiURL
from src.wikilinks.domain.namespaces import lookup_namespace
from src.wikilinks.domain.rules import (
    FRAGMENT_ALLOWED,
    RELATIVE_PATH_AND_FRAGMENT_ALLOWED,
    WIKI_PATH_PREFIX,
    denormalize_title,
    is_uri_reference,
    normalize_title,
    percent_encode_preserving_escapes,
    percent_encode_title_for_path,
    split_title_fragment,
    uppercase_first,
    w_resource_path,
    wiki_id_for_language,
    wiki_resource_path,
)

PROVENANCE_QUERY_NAME = "wprov"


class WikiLinkNormalizer:
    """Pure transformations between raw links and canonical wiki URLs.

    Instances hold nothing but an immutable :class:`SiteConfiguration`, so a
    single normalizer can be shared freely between threads.

    Query methods (``extract_*``, ``classify_namespace``...) return ``None``
    for links that are not wiki shaped. Construction methods raise a
    :class:`WikiLinkError` subclass when misused. Rewrite methods never raise
    and hand back the input unchanged when they cannot apply.
    """

    def __init__(self, config: SiteConfiguration | None = None):
        self.config = config or load_site_configuration()

    # -- parsing --------------------------------------------------------

    @staticmethod
    def _split(url: str) -> SplitResult:
        if not isinstance(url, str) or not url.strip():
            raise MalformedURL(f"Not a URL: {url!r}")
        try:
            parts = urlsplit(url.strip())
            # Accessing the port validates it.
            parts.port
        except ValueError as exc:
            raise MalformedURL(f"Not a URL: {url!r}") from exc
        return parts

    def _split_absolute(self, url: str) -> SplitResult:
        parts = self._split(url)
        if not parts.scheme or not parts.netloc:
            raise MalformedURL(f"Not an absolute URL: {url!r}")
        return parts

    def _try_split(self, url: str) -> SplitResult | None:
        try:
            return self._split(url)
        except MalformedURL:
            return None

    def parse(self, url: str) -> WikiURL:
        parts = self._split_absolute(url)
        return WikiURL(
            scheme=parts.scheme,
            host=parts.hostname or "",
            path=parts.path,
            language=self._language_for_host(parts.hostname),
            query_items=tuple(parse_qsl(parts.query, keep_blank_values=True)),
            fragment=parts.fragment,
        )

    # -- schemes --------------------------------------------------------

    def replace_scheme(self, url: str, new_scheme: str) -> str:
        parts = self._split(url)
        if not parts.scheme:
            raise MalformedURL(f"URL has no scheme: {url!r}")
        return urlunsplit(parts._replace(scheme=new_scheme))

    def replace_with_app_scheme(self, url: str) -> str:
        return self.replace_scheme(url, self.config.app_scheme)

    # -- hosts ----------------------------------------------------------

    def _language_for_host(self, host: str | None) -> str | None:
        if not host:
            return None
        labels = host.lower().split(".")
        if len(labels) < 3:
            return None
        candidate = labels[0]
        if not candidate or candidate in self.config.non_language_subdomains:
            return None
        return candidate

    def _desktop_host(self, host: str) -> str:
        labels = host.lower().split(".")
        if len(labels) >= 3 and labels[1] == self.config.mobile_subdomain:
            del labels[1]
        return ".".join(labels)

    def _mobile_host(self, host: str) -> str:
        labels = self._desktop_host(host).split(".")
        insert_at = 1 if len(labels) >= 3 else 0
        labels.insert(insert_at, self.config.mobile_subdomain)
        return ".".join(labels)

    @staticmethod
    def _with_port(host: str, parts: SplitResult) -> str:
        if parts.port is None:
            return host
        return f"{host}:{parts.port}"

    def extract_language(self, url: str) -> str | None:
        parts = self._try_split(url)
        if parts is None:
            return None
        return self._language_for_host(parts.hostname)

    def extract_wiki_id(self, url: str) -> str | None:
        language = self.extract_language(url)
        if language is None:
            return None
        return wiki_id_for_language(language)

    def extract_site(self, url: str) -> str | None:
        parts = self._try_split(url)
        if parts is None or not parts.hostname:
            return None
        scheme = parts.scheme or self.config.default_scheme
        return f"{scheme}://{self._with_port(self._desktop_host(parts.hostname), parts)}"

    # -- titles ---------------------------------------------------------

    def wiki_resource_path(self, url: str) -> str | None:
        parts = self._try_split(url)
        if parts is None:
            return None
        return wiki_resource_path(parts.path)

    def w_resource_path(self, url: str) -> str | None:
        parts = self._try_split(url)
        if parts is None:
            return None
        return w_resource_path(parts.path)

    def is_wiki_resource(self, url: str) -> bool:
        return self.wiki_resource_path(url) is not None

    def extract_title_with_underscores(self, url: str) -> str | None:
        resource = self.wiki_resource_path(url)
        if resource is None:
            return None
        title = denormalize_title(unquote(resource))
        return title or None

    def extract_title(self, url: str) -> str | None:
        title = self.extract_title_with_underscores(url)
        if title is None:
            return None
        return normalize_title(title)

    def extract_database_key(self, url: str) -> str | None:
        parts = self._try_split(url)
        if parts is None or not parts.hostname:
            return None
        title = self.extract_title_with_underscores(url)
        if title is None:
            return None
        host = self._desktop_host(parts.hostname)
        if not self.config.is_case_sensitive_host(host):
            title = uppercase_first(title)
        netloc = self._with_port(host, parts)
        return f"https://{netloc}{WIKI_PATH_PREFIX}{percent_encode_title_for_path(title)}"

    def canonical_url(self, url: str) -> str:
        """Desktop https URL of the page, or ``url`` itself when it is not a page link."""
        return self.extract_database_key(url) or url

    def percent_encode_title_for_path(self, title: str) -> str:
        return percent_encode_title_for_path(title)

    # -- construction ---------------------------------------------------

    def canonicalize_article_url(self, url: str) -> str:
        parts = self._split(url)
        title = self.extract_title_with_underscores(url)
        if title is None:
            logger.warning("canonicalize_article_url called on a non-wiki URL: {}", url)
            raise NotAWikiURL(f"No page title in {url!r}")
        path = WIKI_PATH_PREFIX + percent_encode_title_for_path(title)
        return urlunsplit(parts._replace(path=path))

    def resolve_relative_href(self, base_url: str, href: str) -> str:
        if not isinstance(href, str) or not href.strip():
            raise UnresolvableHref(f"Empty href against {base_url!r}")

        if href.startswith(".") or href.startswith("/"):
            candidate = percent_encode_preserving_escapes(href, RELATIVE_PATH_AND_FRAGMENT_ALLOWED)
        elif is_uri_reference(href):
            candidate = href
        else:
            raise UnresolvableHref(f"Href is not a URI reference: {href!r}")

        try:
            href_parts = urlsplit(candidate)
        except ValueError as exc:
            raise UnresolvableHref(f"Cannot parse href {href!r}") from exc
        if href_parts.scheme:
            return urlunsplit(href_parts)

        # Resolve against the encoded base so a "/" inside the base title
        # does not count as an extra path segment.
        if self.extract_title_with_underscores(base_url) is None:
            logger.debug("Cannot resolve {} against non-wiki base {}", href, base_url)
            raise UnresolvableHref(f"Base is not a wiki page URL: {base_url!r}")
        try:
            encoded_base = self.canonicalize_article_url(base_url)
        except WikiLinkError as exc:
            raise UnresolvableHref(f"Cannot resolve {href!r} against {base_url!r}") from exc

        resolved = urljoin(encoded_base, candidate)
        resolved_parts = urlsplit(resolved)
        if not resolved_parts.scheme or not resolved_parts.netloc:
            raise UnresolvableHref(f"Resolving {href!r} against {base_url!r} gave {resolved!r}")
        return resolved

    def build_url_with_title(self, base_url: str, title: str) -> str | None:
        parts = self._try_split(base_url)
        if parts is None or not parts.hostname:
            return None
        title_part, fragment = split_title_fragment(title)
        path = WIKI_PATH_PREFIX + percent_encode_title_for_path(title_part)
        encoded_fragment = ""
        if fragment:
            encoded_fragment = percent_encode_preserving_escapes(denormalize_title(fragment), FRAGMENT_ALLOWED)
        scheme = parts.scheme or self.config.default_scheme
        return urlunsplit((scheme, parts.netloc, path, "", encoded_fragment))

    def build_url_with_fragment(self, base_url: str, fragment: str) -> str | None:
        parts = self._try_split(base_url)
        if parts is None or not parts.hostname:
            return None
        encoded_fragment = percent_encode_preserving_escapes(fragment or "", FRAGMENT_ALLOWED)
        return urlunsplit(parts._replace(fragment=encoded_fragment))

    def build_url_with_path(self, base_url: str, path: str, is_mobile: bool = False) -> str | None:
        parts = self._try_split(base_url)
        if parts is None or not parts.hostname:
            return None
        host = self._mobile_host(parts.hostname) if is_mobile else self._desktop_host(parts.hostname)
        if not path.startswith("/"):
            path = f"/{path}"
        scheme = parts.scheme or self.config.default_scheme
        return urlunsplit((scheme, self._with_port(host, parts), path, "", ""))

    # -- namespaces -----------------------------------------------------

    def classify_namespace(self, url: str) -> NamespacedTitle | None:
        """Return the explicit namespace prefix of a wiki link.

        Unprefixed titles give ``None``: falling back to the main namespace
        is left to the caller (see :meth:`namespace_and_title`).
        """
        language = self.extract_language(url)
        title = self.extract_title(url)
        if language is None or title is None:
            return None
        prefix, sep, rest = title.partition(":")
        if not sep:
            return None
        namespace = lookup_namespace(prefix, language, self.config.namespace_tables)
        bare_title = rest.lstrip()
        if namespace is None or not bare_title:
            return None
        return NamespacedTitle(namespace=namespace, title=bare_title)

    def namespace_and_title(self, url: str) -> NamespacedTitle | None:
        match = self.classify_namespace(url)
        if match is not None:
            return match
        if self.extract_language(url) is None:
            return None
        title = self.extract_title(url)
        if title is None:
            return None
        return NamespacedTitle(namespace=PageNamespace.MAIN, title=title)

    def article_talk_page_url(self, url: str) -> str | None:
        match = self.namespace_and_title(url)
        if match is None or match.namespace != PageNamespace.MAIN:
            return None
        return self.build_url_with_title(url, f"Talk:{match.title}")

    # -- files ----------------------------------------------------------

    def is_hosted_file_link(self, url: str) -> bool:
        parts = self._try_split(url)
        if parts is None or not parts.hostname:
            return False
        return parts.hostname.lower() == self.config.playback_rule.upload_host

    def rewrite_for_playback_compatibility(self, url: str) -> str:
        """Point legacy audio uploads at their transcoded mp3 rendition.

        ``.../commons/a/ab/Sound.ogg`` becomes
        ``.../commons/transcoded/a/ab/Sound.ogg/Sound.ogg.mp3``.
        """
        if not self.is_hosted_file_link(url):
            return url
        rule = self.config.playback_rule
        parts = self._split(url)

        segments = parts.path.split("/")
        filename = segments[-1]
        _, dot, extension = unquote(filename).rpartition(".")
        if not dot or not rule.applies_to_extension(extension):
            return url

        try:
            index = segments.index(rule.anchor_segment)
        except ValueError:
            logger.debug("No '{}' segment in file link {}", rule.anchor_segment, url)
            return url
        if index >= len(segments) - 1:
            logger.debug("'{}' is the last segment of file link {}", rule.anchor_segment, url)
            return url

        rewritten = segments[: index + 1] + [rule.inserted_segment] + segments[index + 1 :]
        rewritten.append(filename + rule.appended_suffix)
        return urlunsplit(parts._replace(path="/".join(rewritten)))

    # -- sharing --------------------------------------------------------

    def add_sharing_provenance(self, url: str, variant: SharingVariant | str) -> str:
        tag = SharingVariant(variant).provenance_tag
        try:
            parts = self._split(url)
        except MalformedURL as exc:
            logger.debug("Sharing provenance not added: {}", exc)
            return url
        return urlunsplit(parts._replace(query=urlencode([(PROVENANCE_QUERY_NAME, tag)])))

    def url_for_text_sharing(self, url: str) -> str:
        return self.add_sharing_provenance(url, SharingVariant.TEXT)

    def url_for_image_sharing(self, url: str) -> str:
        return self.add_sharing_provenance(url, SharingVariant.IMAGE)

    # -- classification -------------------------------------------------

    def is_non_standard_url(self, url: str) -> bool:
        return self.extract_language(url) is None or self.wiki_resource_path(url) is None
