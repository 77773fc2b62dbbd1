"""
Declarative HAL representers.

Subclasses implement ``properties()`` and declare links with the ``link``
decorator. A link declared with ``gated_by`` is permission-gated: it is
rendered only when the current user holds one of the listed permissions.
Gated links depend on the viewer, so they are evaluated on every render;
everything else is cached under ``json_cache_key``.
"""

from __future__ import annotations

import copy
import datetime as dt
import json
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from projectboard.core.cache import CacheStore
from projectboard.core.i18n import current_locale
from projectboard.core.permissions import Permission, UserContext
from projectboard.db.models._mixins import as_utc


@dataclass(frozen=True)
class LinkSpec:
    name: str
    render: Callable[["Representer"], dict | None]
    gated_by: tuple[str, ...] = ()

    @property
    def gated(self) -> bool:
        return bool(self.gated_by)


def link(name: str, gated_by: Iterable[Permission | str] = ()):
    """Declare a ``_links`` entry. The decorated method returns ``{href, ...}`` or None."""
    perms = tuple(p.value if isinstance(p, Permission) else p for p in gated_by)

    def deco(fn: Callable[["Representer"], dict | None]):
        fn._link_spec = LinkSpec(name=name, render=fn, gated_by=perms)
        return fn

    return deco


def format_datetime(value: dt.datetime | None) -> str | None:
    if value is None:
        return None
    return as_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_date(value: dt.date | None) -> str | None:
    return value.isoformat() if value else None


class Representer:
    type_name: str = ""
    # permissions that collections preload for all represented objects at once
    checked_permissions: list[str] = []
    _link_specs: tuple[LinkSpec, ...] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        specs: dict[str, LinkSpec] = {s.name: s for s in cls._link_specs}
        for attr in cls.__dict__.values():
            spec = getattr(attr, "_link_spec", None)
            if spec is not None:
                specs[spec.name] = spec
        cls._link_specs = tuple(specs.values())

    def __init__(self, represented: Any, current_user: UserContext, cache: CacheStore | None = None):
        self.represented = represented
        self.current_user = current_user
        self.cache = cache

    def properties(self) -> dict:
        return {}

    def embedded(self) -> dict | None:
        return None

    def cache_key_parts(self) -> list[str]:
        return [self.represented.cache_key]

    @property
    def json_cache_key(self) -> str:
        cls = type(self)
        parts = cls.__module__.split(".") + [cls.__qualname__, "json", current_locale()]
        return "/".join(parts + [str(p) for p in self.cache_key_parts()])

    def allowed_to(self, *permissions: str) -> bool:
        project = getattr(self.represented, "project", self.represented)
        return self.current_user.allowed_to_any(permissions, project)

    def _render_cacheable(self) -> dict:
        doc: dict[str, Any] = {"_type": self.type_name}
        doc.update(self.properties())
        doc["_links"] = {}
        for spec in self._link_specs:
            if spec.gated:
                continue
            value = spec.render(self)
            if value is not None:
                doc["_links"][spec.name] = value
        embedded = self.embedded()
        if embedded:
            doc["_embedded"] = embedded
        return doc

    def to_dict(self) -> dict:
        if self.cache is None:
            cached = self._render_cacheable()
        else:
            cached = copy.deepcopy(self.cache.fetch(self.json_cache_key, self._render_cacheable))

        links: dict[str, Any] = {}
        for spec in self._link_specs:
            if not spec.gated:
                if spec.name in cached["_links"]:
                    links[spec.name] = cached["_links"][spec.name]
                continue
            if not self.allowed_to(*spec.gated_by):
                continue
            value = spec.render(self)
            if value is not None:
                links[spec.name] = value
        cached["_links"] = links
        return cached

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class CollectionRepresenter:
    """A page-less collection of elements rendered with ``element_representer``."""

    def __init__(self, elements: list, self_link: str, current_user: UserContext,
                 element_representer: type[Representer], cache: CacheStore | None = None):
        self.elements = list(elements)
        self.self_link = self_link
        self.current_user = current_user
        self.element_representer = element_representer
        self.cache = cache

    def _preload_permissions(self) -> None:
        if not self.element_representer.checked_permissions:
            return
        projects = [getattr(e, "project", e) for e in self.elements]
        self.current_user.preload(projects)

    def to_dict(self) -> dict:
        self._preload_permissions()
        elements = [
            self.element_representer(e, self.current_user, self.cache).to_dict()
            for e in self.elements
        ]
        return {
            "_type": "Collection",
            "total": len(elements),
            "count": len(elements),
            "_embedded": {"elements": elements},
            "_links": {"self": {"href": self.self_link}},
        }
