import pytest

from roost.settings import (
    DEFAULT_LOG_LEVEL,
    STATIC_DIRECTORY,
    STATIC_ENDPOINT,
    LogLevel,
    normalize_static_dir,
)


def test_log_levels_are_ordered_by_severity():
    levels = [LogLevel(number) for number in range(5)]
    assert levels == sorted(levels)
    assert levels == [
        LogLevel.DEBUG,
        LogLevel.INFO,
        LogLevel.WARNING,
        LogLevel.ERROR,
        LogLevel.CRITICAL,
    ]


def test_log_level_from_number():
    assert LogLevel(0) is LogLevel.DEBUG
    assert LogLevel(4) is LogLevel.CRITICAL


def test_default_log_level_is_info():
    assert LogLevel(1) is DEFAULT_LOG_LEVEL


def test_unknown_log_level_number_raises():
    with pytest.raises(ValueError):
        LogLevel(5)


def test_static_defaults():
    assert normalize_static_dir(STATIC_DIRECTORY) == "static/"
    assert normalize_static_dir(STATIC_ENDPOINT.rsplit("/", 1)[0]) == "/static/"


def test_normalize_adds_trailing_slash():
    assert normalize_static_dir("static") == "static/"


def test_normalize_keeps_existing_slash():
    assert normalize_static_dir(STATIC_DIRECTORY) == STATIC_DIRECTORY


def test_normalize_replaces_backslashes():
    result = normalize_static_dir("assets\\public")
    assert "\\" not in result
    assert result == "assets/public/"


def test_normalize_trailing_backslash_becomes_single_slash():
    result = normalize_static_dir("files\\")
    assert result.endswith("/")
    assert not result.endswith("//")


@pytest.mark.parametrize("path", ["static", "a\\b", "x/y/", "\\"])
def test_normalize_is_idempotent(path):
    once = normalize_static_dir(path)
    assert normalize_static_dir(once) == once


def test_normalize_rejects_empty():
    with pytest.raises(ValueError):
        normalize_static_dir("")