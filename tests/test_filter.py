"""Tests for script selection by name / pattern."""

from __future__ import annotations

import pytest

from script_exporter.errors import InvalidPatternError, MissingSelectorError
from script_exporter.scripts.filter import filter_scripts
from script_exporter.scripts.models import ScriptSpec


class TestScriptFilter:
    def test_requires_a_selector(self, probe_scripts) -> None:
        with pytest.raises(MissingSelectorError) as exc:
            filter_scripts(probe_scripts, "", "")
        assert str(exc.value) == "name or pattern required"

    def test_name_match(self, probe_scripts) -> None:
        assert filter_scripts(probe_scripts, "success", "") == [probe_scripts[0]]

    def test_name_match_is_exact_and_case_sensitive(self, probe_scripts) -> None:
        assert filter_scripts(probe_scripts, "succ", "") == []
        assert filter_scripts(probe_scripts, "Success", "") == []

    def test_pattern_match(self, probe_scripts) -> None:
        assert filter_scripts(probe_scripts, "", "fail.*") == [probe_scripts[1]]

    def test_pattern_is_unanchored(self, probe_scripts) -> None:
        assert filter_scripts(probe_scripts, "", "out") == [probe_scripts[2]]

    def test_union_keeps_store_order_without_duplicates(self, probe_scripts) -> None:
        assert filter_scripts(probe_scripts, "success", ".*") == probe_scripts

    def test_union_of_disjoint_selectors(self, probe_scripts) -> None:
        result = filter_scripts(probe_scripts, "timeout", "^succ")
        assert result == [probe_scripts[0], probe_scripts[2]]

    def test_no_match_is_empty(self, probe_scripts) -> None:
        assert filter_scripts(probe_scripts, "missing", "zzz") == []

    def test_duplicate_names_all_returned(self) -> None:
        scripts = [ScriptSpec("dup", "exit 0"), ScriptSpec("other", "exit 0"), ScriptSpec("dup", "exit 1")]
        assert filter_scripts(scripts, "dup", "") == [scripts[0], scripts[2]]

    def test_invalid_pattern(self, probe_scripts) -> None:
        with pytest.raises(InvalidPatternError) as exc:
            filter_scripts(probe_scripts, "", "fail(")
        assert exc.value.pattern == "fail("
