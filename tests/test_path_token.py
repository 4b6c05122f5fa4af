"""Tests for ``{{ key }}`` token scanning."""

from __future__ import annotations

from move_scaffold.core.path_token import PathToken, find_tokens


class TestFindTokens:
    """Token keys and literal spans, left to right."""

    def test_keys_and_literals_with_brace_overlap(self) -> None:
        scan = find_tokens("{{123}}{{ 456 }}{{{789}}")

        assert scan.keys() == ["123", "456", "789"]
        assert scan.literals() == ["{{123}}", "{{ 456 }}", "{{{789}}"]

    def test_scan_is_restartable(self) -> None:
        scan = find_tokens("a {{x}} b {{y}}")

        first = list(scan)
        second = list(scan)

        assert first == second
        assert [t.key for t in first] == ["x", "y"]

    def test_records_start_offsets(self) -> None:
        tokens = list(find_tokens("ab{{x}}cd{{ y }}"))

        assert tokens == [
            PathToken(key="x", literal="{{x}}", start=2),
            PathToken(key="y", literal="{{ y }}", start=9),
        ]

    def test_unterminated_opening_marker_is_ignored(self) -> None:
        assert find_tokens("{{x}} and {{ never closed").keys() == ["x"]

    def test_text_without_markers_yields_nothing(self) -> None:
        assert list(find_tokens("plain text } { }")) == []

    def test_whitespace_and_newlines_trimmed_from_key(self) -> None:
        assert find_tokens("{{\n  package_name\t}}").keys() == ["package_name"]

    def test_repeated_tokens_are_all_reported(self) -> None:
        assert find_tokens("{{x}}-{{x}}").literals() == ["{{x}}", "{{x}}"]

    def test_scanning_resumes_after_closing_marker(self) -> None:
        # "}}" inside the first token closes it; the rest is plain text
        assert find_tokens("{{a}}}}{{b}}").keys() == ["a", "b"]
