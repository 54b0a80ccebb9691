class WikiLinkError(ValueError):
    """Base class for every failure raised by the link normalizer."""


class MalformedURL(WikiLinkError):
    """The input cannot be parsed as a URL."""


class InvalidTitle(WikiLinkError):
    """The title is empty or otherwise unusable."""


class NotAWikiURL(WikiLinkError):
    """The operation needs a /wiki/<title> path and the URL has none."""


class UnresolvableHref(WikiLinkError):
    """A relative href could not be turned into an absolute URL."""
