"""Tests for option layering and filter parsing."""

import json
import os

from bemtree.config import (
    DEFAULTS,
    FilterConfig,
    load_manifest_options,
    merge_options,
    parse_pairs,
    parse_prefixes,
    resolve_options,
)


class TestParsePrefixes:
    def test_whitespace_and_empty_entries(self):
        assert parse_prefixes(" nav, card__x ,, ") == ("nav", "card__x")

    def test_false_and_none_degrade_to_empty(self):
        assert parse_prefixes(False) == ()
        assert parse_prefixes(None) == ()
        assert parse_prefixes("") == ()


class TestFilterConfig:
    def test_from_options(self):
        filters = FilterConfig.from_options({"use": "nav", "omit": "nav__hidden"})
        assert filters.allows("nav__link")
        assert not filters.allows("nav__hidden")
        assert not filters.allows("card")

    def test_empty_allows_everything(self):
        assert FilterConfig.from_options({}).allows("anything_at__all")


class TestParsePairs:
    def test_key_value(self):
        assert parse_pairs(["to=out", "js=src/main.js", "prefix=a=b", "style-ext=css"]) == {
            "to": "out",
            "js": "src/main.js",
            "prefix": "a=b",
            "style_ext": "css",
        }

    def test_items_without_equals_are_ignored(self, capsys):
        assert parse_pairs(["oops"]) == {}
        assert "oops" in capsys.readouterr().err


class TestManifest:
    def test_reads_bemtree_block(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"name": "site", "bemtree": {"to": "blocks", "omit": False}}), encoding="utf-8")
        assert load_manifest_options(str(tmp_path)) == {"to": "blocks", "omit": ""}

    def test_missing_file_or_block(self, tmp_path):
        assert load_manifest_options(str(tmp_path)) == {}
        (tmp_path / "package.json").write_text('{"name": "site"}', encoding="utf-8")
        assert load_manifest_options(str(tmp_path)) == {}

    def test_invalid_json_warns(self, tmp_path, capsys):
        (tmp_path / "package.json").write_text("{not json", encoding="utf-8")
        assert load_manifest_options(str(tmp_path)) == {}
        assert "[WARN]" in capsys.readouterr().err


class TestResolveOptions:
    def test_priority_order(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"bemtree": {"to": "pkg", "from": "pkg/*.html", "use": "pkg"}}), encoding="utf-8")
        environ = {"BEMTREE_FROM": "env/*.html", "BEMTREE_USE": "env"}
        options = resolve_options({"cwd": str(tmp_path), "use": "cli"}, environ=environ)

        assert options["to"] == "pkg"
        assert options["from"] == "env/*.html"
        assert options["use"] == "cli"
        assert options["suffix"] == DEFAULTS["suffix"]
        assert options["cwd"] == str(tmp_path)

    def test_cwd_from_env_locates_manifest(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"bemtree": {"js": "src/main.js"}}), encoding="utf-8")
        options = resolve_options({}, environ={"BEMTREE_CWD": str(tmp_path)})
        assert options["js"] == "src/main.js"
        assert options["cwd"] == str(tmp_path)

    def test_defaults_use_process_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        options = resolve_options({}, environ={})
        assert options["cwd"] == os.getcwd()
        assert options["from"] == "./src/**/*.html"


def test_merge_options_stringifies_values(tmp_path):
    options = merge_options({"cwd": str(tmp_path), "omit": False, "to": "out"})
    assert options["omit"] == ""
    assert options["to"] == "out"
    assert options["js"] == ""
