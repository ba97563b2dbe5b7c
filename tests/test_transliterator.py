import re

import pytest

import transliterator
from transliterator import to_translit, get_transliterator


@pytest.mark.parametrize("cyrillic, expected", [
    ("новости", "novosti"),
    ("Москва", "moskva"),
    ("путешествия", "puteshestviya"),
    ("чай", "chay"),
    ("щука", "shchuka"),
    ("юла", "yula"),
    ("ёжик", "ezhik"),
    ("подъезд", "podezd"),
    ("хлеб-соль", "khleb-sol"),
    ("улица", "ulitsa"),
])
def test_to_translit_russian_words(cyrillic, expected):
    assert to_translit(cyrillic) == expected


@pytest.mark.parametrize("text", ["novosti", "some-slug", "", "-a--b-"])
def test_to_translit_keeps_latin_slugs(text):
    assert to_translit(text) == text


@pytest.mark.parametrize("text", [
    "Новости дня",
    "Фото 2017!",
    "Hello, World",
    "123",
    "café",
    "Ёлка & «Шишка»",
])
def test_to_translit_output_is_slug_and_idempotent(text):
    slug = to_translit(text)
    assert re.fullmatch(r'[a-z-]*', slug)
    assert to_translit(slug) == slug


@pytest.mark.parametrize("text, expected", [
    ("новости дня", "novostidnya"),
    ("a1b", "ab"),
    ("а--б", "a--b"),
    ("-чай-", "-chay-"),
    ("Фото 2017!", "foto"),
])
def test_to_translit_drops_characters_without_separators(text, expected):
    assert to_translit(text) == expected


def test_to_translit_digits_only_gives_empty_slug():
    assert to_translit("2017") == ""


def test_get_transliterator_is_shared():
    assert get_transliterator() is get_transliterator()
    assert isinstance(get_transliterator(), transliterator.Transliterator)
