from __future__ import annotations

from json_form_schema.config import FormOptions, default_form_options
from json_form_schema.constants import DEFAULT_MAX_DEPTH


def test_defaults():
    options = FormOptions()
    assert (options.id_prefix, options.id_separator, options.custom_merge_all_of) == ("root", "_", None)
    assert options.max_depth == DEFAULT_MAX_DEPTH


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("JSON_FORM_ID_PREFIX", "form")
    monkeypatch.setenv("JSON_FORM_ID_SEPARATOR", "__")
    monkeypatch.setenv("JSON_FORM_MAX_DEPTH", "12")
    options = default_form_options()
    assert (options.id_prefix, options.id_separator, options.max_depth) == ("form", "__", 12)


def test_bad_environment_values_fall_back(monkeypatch):
    monkeypatch.setenv("JSON_FORM_ID_PREFIX", "")
    monkeypatch.setenv("JSON_FORM_MAX_DEPTH", "deep")
    options = default_form_options()
    assert options.id_prefix == "root"
    assert options.max_depth == DEFAULT_MAX_DEPTH
    monkeypatch.setenv("JSON_FORM_MAX_DEPTH", "0")
    assert default_form_options().max_depth == DEFAULT_MAX_DEPTH


def test_custom_merge_is_passed_through():
    merger = lambda fragments: fragments[0]  # noqa: E731
    assert default_form_options(merger).custom_merge_all_of is merger
