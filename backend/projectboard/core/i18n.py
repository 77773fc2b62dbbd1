"""
Active locale and string lookup.

The locale lives in a ContextVar so every request (or ``with_locale`` block)
sees its own value. Representation cache keys include it.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from projectboard.core.config import settings

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "attributes.id": "ID",
        "attributes.subject": "Subject",
        "attributes.description": "Description",
        "attributes.project": "Project",
        "attributes.type": "Type",
        "attributes.start_date": "Start date",
        "attributes.due_date": "Finish date",
        "attributes.date": "Date",
        "attributes.category": "Category",
        "attributes.version": "Version",
        "attributes.author": "Author",
        "attributes.created_at": "Created on",
        "attributes.updated_at": "Updated on",
        "groups.people": "People",
        "groups.estimates_and_time": "Estimates and time",
        "groups.details": "Details",
        "groups.other": "Other",
        "groups.children": "Children",
        "label_attachments": "Files",
        "label_categories": "Categories",
        "label_versions": "Versions",
        "label_types": "Types",
        "label_work_packages": "Work packages",
        "label_work_package_new": "New work package",
        "label_created_by": "Created by",
        "label_last_updated_on": "Last updated on",
        "project.required_outside_context": "Please choose a project to create the work package in.",
        "project.context": "Project context",
        "project.click_to_switch_context": "Open this work package in that project.",
        "project.work_package_belongs_to": "This work package belongs to project {projectname}.",
        "work_packages.placeholders.description": "Click to enter description...",
    },
    "de": {
        "attributes.subject": "Thema",
        "attributes.description": "Beschreibung",
        "attributes.project": "Projekt",
        "attributes.type": "Typ",
        "attributes.start_date": "Startdatum",
        "attributes.due_date": "Endtermin",
        "attributes.date": "Datum",
        "attributes.category": "Kategorie",
        "attributes.version": "Version",
        "groups.people": "Personen",
        "groups.estimates_and_time": "Schätzungen und Zeit",
        "groups.details": "Details",
        "groups.other": "Sonstiges",
        "label_attachments": "Dateien",
        "label_categories": "Kategorien",
        "label_versions": "Versionen",
        "label_types": "Typen",
        "label_work_packages": "Arbeitspakete",
        "project.work_package_belongs_to": "Dieses Arbeitspaket gehört zum Projekt {projectname}.",
    },
    "fr": {
        "attributes.subject": "Sujet",
        "attributes.description": "Description",
        "attributes.project": "Projet",
        "attributes.start_date": "Date de début",
        "attributes.due_date": "Date de fin",
        "attributes.date": "Date",
        "groups.people": "Personnes",
        "groups.details": "Détails",
        "groups.other": "Autre",
        "label_attachments": "Fichiers",
        "label_work_packages": "Lots de travaux",
        "project.work_package_belongs_to": "Ce lot de travaux appartient au projet {projectname}.",
    },
}

_locale: ContextVar[str | None] = ContextVar("locale", default=None)


def current_locale() -> str:
    return _locale.get() or settings.DEFAULT_LOCALE


@contextmanager
def with_locale(locale: str) -> Iterator[str]:
    token = _locale.set(locale)
    try:
        yield locale
    finally:
        _locale.reset(token)


def negotiate_locale(accept_language: str | None) -> str:
    """Pick the first supported language from an Accept-Language header."""
    if not accept_language:
        return settings.DEFAULT_LOCALE
    for part in accept_language.split(","):
        lang = part.split(";")[0].strip().lower()
        if not lang:
            continue
        base = lang.split("-")[0]
        if base in settings.locales:
            return base
    return settings.DEFAULT_LOCALE


def translate(key: str, **params) -> str:
    text = TRANSLATIONS.get(current_locale(), {}).get(key)
    if text is None:
        text = TRANSLATIONS["en"].get(key, key)
    return text.format(**params) if params else text


t = translate
