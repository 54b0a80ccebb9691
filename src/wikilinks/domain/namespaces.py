"""Namespace prefix tables.

Keys are namespace names as they appear before the ``:`` in a title. Lookups
fold both the keys and the prefix with :func:`normalize_namespace_prefix`, so
tables may be written with natural names. The canonical (English) names are
valid on every wiki; the per-language tables add the localized names and
aliases used by that wiki.
"""

from typing import Mapping

from src.wikilinks.domain.models import PageNamespace

NS = PageNamespace


def normalize_namespace_prefix(prefix: str) -> str:
    return " ".join(prefix.replace("_", " ").split()).casefold()


def _table(names: Mapping[str, PageNamespace]) -> dict[str, PageNamespace]:
    return {normalize_namespace_prefix(name): namespace for name, namespace in names.items()}


CANONICAL_NAMESPACES: dict[str, PageNamespace] = _table(
    {
        "Media": NS.MEDIA,
        "Special": NS.SPECIAL,
        "Talk": NS.TALK,
        "User": NS.USER,
        "User talk": NS.USER_TALK,
        "Project": NS.PROJECT,
        "Project talk": NS.PROJECT_TALK,
        "File": NS.FILE,
        "File talk": NS.FILE_TALK,
        "Image": NS.FILE,
        "Image talk": NS.FILE_TALK,
        "MediaWiki": NS.MEDIAWIKI,
        "MediaWiki talk": NS.MEDIAWIKI_TALK,
        "Template": NS.TEMPLATE,
        "Template talk": NS.TEMPLATE_TALK,
        "Help": NS.HELP,
        "Help talk": NS.HELP_TALK,
        "Category": NS.CATEGORY,
        "Category talk": NS.CATEGORY_TALK,
        "Portal": NS.PORTAL,
        "Portal talk": NS.PORTAL_TALK,
        "Draft": NS.DRAFT,
        "Draft talk": NS.DRAFT_TALK,
        "TimedText": NS.TIMED_TEXT,
        "TimedText talk": NS.TIMED_TEXT_TALK,
        "Module": NS.MODULE,
        "Module talk": NS.MODULE_TALK,
    }
)

LANGUAGE_NAMESPACES: dict[str, dict[str, PageNamespace]] = {
    "en": _table(
        {
            "Wikipedia": NS.PROJECT,
            "Wikipedia talk": NS.PROJECT_TALK,
            "WP": NS.PROJECT,
            "WT": NS.PROJECT_TALK,
        }
    ),
    "de": _table(
        {
            "Medium": NS.MEDIA,
            "Spezial": NS.SPECIAL,
            "Diskussion": NS.TALK,
            "Benutzer": NS.USER,
            "Benutzerin": NS.USER,
            "Benutzer Diskussion": NS.USER_TALK,
            "Benutzerin Diskussion": NS.USER_TALK,
            "Wikipedia": NS.PROJECT,
            "Wikipedia Diskussion": NS.PROJECT_TALK,
            "Datei": NS.FILE,
            "Bild": NS.FILE,
            "Datei Diskussion": NS.FILE_TALK,
            "MediaWiki Diskussion": NS.MEDIAWIKI_TALK,
            "Vorlage": NS.TEMPLATE,
            "Vorlage Diskussion": NS.TEMPLATE_TALK,
            "Hilfe": NS.HELP,
            "Hilfe Diskussion": NS.HELP_TALK,
            "Kategorie": NS.CATEGORY,
            "Kategorie Diskussion": NS.CATEGORY_TALK,
            "Portal Diskussion": NS.PORTAL_TALK,
        }
    ),
    "fr": _table(
        {
            "Média": NS.MEDIA,
            "Spécial": NS.SPECIAL,
            "Discussion": NS.TALK,
            "Utilisateur": NS.USER,
            "Utilisatrice": NS.USER,
            "Discussion utilisateur": NS.USER_TALK,
            "Discussion utilisatrice": NS.USER_TALK,
            "Wikipédia": NS.PROJECT,
            "Discussion Wikipédia": NS.PROJECT_TALK,
            "Fichier": NS.FILE,
            "Discussion fichier": NS.FILE_TALK,
            "Discussion MediaWiki": NS.MEDIAWIKI_TALK,
            "Modèle": NS.TEMPLATE,
            "Discussion modèle": NS.TEMPLATE_TALK,
            "Aide": NS.HELP,
            "Discussion aide": NS.HELP_TALK,
            "Catégorie": NS.CATEGORY,
            "Discussion catégorie": NS.CATEGORY_TALK,
            "Portail": NS.PORTAL,
            "Discussion Portail": NS.PORTAL_TALK,
        }
    ),
    "es": _table(
        {
            "Medio": NS.MEDIA,
            "Especial": NS.SPECIAL,
            "Discusión": NS.TALK,
            "Usuario": NS.USER,
            "Usuaria": NS.USER,
            "Usuario discusión": NS.USER_TALK,
            "Usuaria discusión": NS.USER_TALK,
            "Wikipedia": NS.PROJECT,
            "Wikipedia discusión": NS.PROJECT_TALK,
            "Archivo": NS.FILE,
            "Imagen": NS.FILE,
            "Archivo discusión": NS.FILE_TALK,
            "MediaWiki discusión": NS.MEDIAWIKI_TALK,
            "Plantilla": NS.TEMPLATE,
            "Plantilla discusión": NS.TEMPLATE_TALK,
            "Ayuda": NS.HELP,
            "Ayuda discusión": NS.HELP_TALK,
            "Categoría": NS.CATEGORY,
            "Categoría discusión": NS.CATEGORY_TALK,
            "Portal discusión": NS.PORTAL_TALK,
        }
    ),
}


def namespace_table_for(
    language: str,
    tables: Mapping[str, Mapping[str, PageNamespace]] = LANGUAGE_NAMESPACES,
) -> dict[str, PageNamespace]:
    merged = dict(CANONICAL_NAMESPACES)
    merged.update(_table(tables.get(language, {})))
    return merged


def lookup_namespace(
    prefix: str,
    language: str,
    tables: Mapping[str, Mapping[str, PageNamespace]] = LANGUAGE_NAMESPACES,
) -> PageNamespace | None:
    return namespace_table_for(language, tables).get(normalize_namespace_prefix(prefix))
