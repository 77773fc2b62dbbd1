import pytest

from projectboard.core.i18n import current_locale, negotiate_locale, t, with_locale
from projectboard.views.hooks import HookService


@pytest.mark.parametrize("header,expected", [
    (None, "en"),
    ("", "en"),
    ("de", "de"),
    ("fr-CH, fr;q=0.9, en;q=0.8", "fr"),
    ("ja, de;q=0.5", "de"),
    ("ja", "en"),
])
def test_negotiate_locale(header, expected):
    assert negotiate_locale(header) == expected


def test_with_locale_restores_previous():
    assert current_locale() == "en"
    with with_locale("de"):
        assert current_locale() == "de"
        assert t("label_categories") == "Kategorien"
    assert current_locale() == "en"


def test_missing_translation_falls_back_to_english_then_key():
    with with_locale("fr"):
        assert t("label_categories") == "Categories"
        assert t("no.such.key") == "no.such.key"


def test_interpolation():
    assert t("project.work_package_belongs_to", projectname="Demo") == "This work package belongs to project Demo."


def test_hooks_collect_non_none_results_in_order():
    hooks = HookService()

    @hooks.hook("greet")
    def first(name):
        return f"hi {name}"

    hooks.register("greet", lambda name: None)
    hooks.register("greet", lambda name: f"hello {name}")

    assert hooks.call("greet", "bob") == ["hi bob", "hello bob"]
    assert hooks.call("unknown") == []

    hooks.clear("greet")
    assert hooks.call("greet", "bob") == []
