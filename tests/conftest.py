from pathlib import Path

import pytest

import email_generator as eg


def write_lists(directory: Path, words=("ana", "bravo"), city_codes=("abc",), tlds=("com",)) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / eg.WORDS_FILE).write_text("\n".join(words) + "\n", encoding="utf-8")
    (directory / eg.CITY_CODES_FILE).write_text("\n".join(city_codes) + "\n", encoding="utf-8")
    (directory / eg.TLDS_FILE).write_text("\n".join(tlds) + "\n", encoding="utf-8")
    return directory


@pytest.fixture
def dict_dir(tmp_path):
    """Directory holding the two-word dictionaries used across the tests."""
    return write_lists(tmp_path / "dicts")


@pytest.fixture
def make_dicts():
    return write_lists
