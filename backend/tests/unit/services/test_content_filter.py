# tests/unit/services/test_content_filter.py
from __future__ import annotations

import pytest
from chirpy.services._shared.errors import TooLongError
from chirpy.services.chirps.content_filter import MASK, clean_body


def test_masks_denylisted_word_case_insensitively():
    assert clean_body("Sharbert is great") == "**** is great"


def test_masks_every_denylisted_word_and_keeps_order():
    body = "I had something interesting for breakfast kerfuffle fornax FORNAX"
    assert clean_body(body) == "I had something interesting for breakfast **** **** ****"


def test_only_whole_words_are_masked():
    assert clean_body("Sharbertx is not a word") == "Sharbertx is not a word"
    assert clean_body("Sharbert! stays") == "Sharbert! stays"


def test_body_of_exactly_140_characters_is_accepted():
    body = "a" * 140
    assert clean_body(body) == body


def test_masking_applies_to_a_140_character_body():
    body = "fornax " + "b" * 133
    assert len(body) == 140
    assert clean_body(body) == f"{MASK} " + "b" * 133


def test_body_of_141_characters_is_rejected():
    with pytest.raises(TooLongError) as excinfo:
        clean_body("a" * 141)
    assert excinfo.value.length == 141
    assert excinfo.value.limit == 140


def test_runs_of_spaces_split_into_empty_words():
    # Empty words between delimiters survive the rejoin.
    assert clean_body("kerfuffle  fornax") == "****  ****"
