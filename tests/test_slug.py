import pytest

from pollhub.common import ID_LENGTH
from pollhub.slug import slugify

ALLOWED = set("abcdefghijklmnopqrstuvwxyz0123456789-")

SAMPLES = [
    "Hello World",
    "  Leading and trailing  ",
    "Best\tFood!!  Ever?",
    "Mixed CASE 123 and symbols #$%",
    "점심 메뉴 Lunch",
    "a" * 200,
    "word " * 40,
    "",
]


def test_simple_phrase():
    assert slugify("Hello World") == "hello-world"


def test_punctuation_dropped_and_spaces_collapsed():
    assert slugify("Best   Food!!") == "best-food"


def test_leading_space_kept_as_hyphen():
    assert slugify(" hi") == "-hi"


def test_only_symbols_gives_empty():
    assert slugify("!!!???") == ""


def test_non_ascii_letters_are_dropped():
    assert slugify("설문조사") == ""


@pytest.mark.parametrize("text", SAMPLES)
def test_output_alphabet(text):
    assert set(slugify(text)) <= ALLOWED


@pytest.mark.parametrize("text", SAMPLES)
def test_no_trailing_hyphen(text):
    assert not slugify(text).endswith("-")


@pytest.mark.parametrize("text", SAMPLES)
def test_no_double_hyphen(text):
    assert "--" not in slugify(text)


@pytest.mark.parametrize("text", SAMPLES)
def test_default_length_limit(text):
    assert len(slugify(text)) <= ID_LENGTH - 1


@pytest.mark.parametrize("max_len", [1, 2, 5, 10, 64])
def test_truncation_to_max_len(max_len):
    assert slugify("a" * 100, max_len) == "a" * (max_len - 1)


def test_lowercases():
    assert slugify("ABC") == slugify("abc")


def test_invalid_max_len():
    with pytest.raises(ValueError):
        slugify("abc", 0)