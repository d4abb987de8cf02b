"""Tests for artie_lens.scanning.languages."""

import pytest

from artie_lens.scanning.languages import LanguageTarget, language_target_for


@pytest.mark.parametrize(
    "path,expected",
    [
        ("a.ts", LanguageTarget.TYPESCRIPT),
        ("src/a.mts", LanguageTarget.TYPESCRIPT),
        ("a.tsx", LanguageTarget.TSX),
        ("a.js", LanguageTarget.JAVASCRIPT),
        ("a.JSX", LanguageTarget.JAVASCRIPT),
        ("a.cjs", LanguageTarget.JAVASCRIPT),
        ("a.vue", LanguageTarget.TYPESCRIPT),
    ],
)
def test_language_target_for(path, expected):
    assert language_target_for(path) is expected
