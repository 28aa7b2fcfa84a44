from __future__ import annotations

import pytest

from revsync.adapters.sparql import InvalidTermError, iri, literal


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("1.0.0", '"1.0.0"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("back\\slash", '"back\\\\slash"'),
        ("line\nbreak\ttab", '"line\\nbreak\\ttab"'),
    ],
)
def test_literal_escapes_special_characters(value: str, expected: str) -> None:
    assert literal(value) == expected


def test_iri_wraps_valid_values() -> None:
    assert iri("http://example.com/services/1") == "<http://example.com/services/1>"


@pytest.mark.parametrize("value", ["", "http://x/a b", "http://x/>", 'http://x/"'])
def test_iri_rejects_values_that_would_break_the_term(value: str) -> None:
    with pytest.raises(InvalidTermError):
        iri(value)
