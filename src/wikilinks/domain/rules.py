import re
from urllib.parse import quote, unquote

from src.wikilinks.domain.errors import InvalidTitle

WIKI_PATH_PREFIX = "/wiki/"
W_PATH_PREFIX = "/w/"

# Explicit allow-lists. Anything outside them is percent-encoded as UTF-8.
UNRESERVED_CHARACTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
SUB_DELIMITERS = "!$&'()*+,;="
TITLE_PATH_ALLOWED = UNRESERVED_CHARACTERS + SUB_DELIMITERS + ":@"
RELATIVE_PATH_AND_FRAGMENT_ALLOWED = TITLE_PATH_ALLOWED + "/?#"
FRAGMENT_ALLOWED = TITLE_PATH_ALLOWED + "/?"

_PERCENT_ESCAPE = re.compile(r"(%[0-9A-Fa-f]{2})")
_WIKI_RESOURCE_PATH = re.compile(r"^/wiki/(.+)$", re.S)
_W_RESOURCE_PATH = re.compile(r"^/w/(.+)$", re.S)
_URI_REFERENCE = re.compile(r"(?:[A-Za-z0-9\-._~!$&'()*+,;=:/?#\[\]@]|%[0-9A-Fa-f]{2})*")


def normalize_title(title: str) -> str:
    return title.replace("_", " ")


def denormalize_title(title: str) -> str:
    return title.replace(" ", "_")


def percent_encode(text: str, allowed: str) -> str:
    return quote(text, safe=allowed)


def percent_encode_preserving_escapes(text: str, allowed: str) -> str:
    """Encode ``text`` like :func:`percent_encode` but keep valid ``%XX`` escapes.

    Hrefs coming out of rendered article HTML are frequently already
    encoded; encoding their ``%`` again would change the target.
    """
    parts = _PERCENT_ESCAPE.split(text)
    return "".join(part if _PERCENT_ESCAPE.fullmatch(part) else quote(part, safe=allowed) for part in parts)


def percent_encode_title_for_path(title: str) -> str:
    if not title:
        raise InvalidTitle("title must not be empty")
    return percent_encode(denormalize_title(title), TITLE_PATH_ALLOWED)


def decode_title_path_component(component: str) -> str:
    return unquote(component)


def wiki_resource_path(path: str) -> str | None:
    match = _WIKI_RESOURCE_PATH.match(path or "")
    if not match:
        return None
    return match.group(1)


def w_resource_path(path: str) -> str | None:
    match = _W_RESOURCE_PATH.match(path or "")
    if not match:
        return None
    return match.group(1)


def split_title_fragment(title: str) -> tuple[str, str | None]:
    title_part, sep, fragment = title.partition("#")
    return title_part, (fragment if sep else None)


def uppercase_first(title: str) -> str:
    if not title:
        return title
    return title[0].upper() + title[1:]


def wiki_id_for_language(language: str) -> str:
    return f"{language.replace('-', '_')}wiki"


def is_uri_reference(text: str) -> bool:
    """True when ``text`` only uses RFC 3986 characters and well-formed escapes."""
    return _URI_REFERENCE.fullmatch(text) is not None
