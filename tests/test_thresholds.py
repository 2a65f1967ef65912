from __future__ import annotations

import pytest

from gigafind.core.model.thresholds import (
    Threshold,
    build_config,
    parse_threshold,
    resolve_mode,
)
from gigafind.core.model.types import KindFilter, ModeChoice, ScanMode, SizeUnit
from gigafind.errors import ConfigError, SizeParseError, UnitConversionError


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("200MB", Threshold(200.0, SizeUnit.MEGABYTE, "200MB")),
        ("1.5G", Threshold(1.5, SizeUnit.GIGABYTE, "1.5G")),
        ("100K", Threshold(100.0, SizeUnit.KILOBYTE, "100K")),
        ("4096", Threshold(4096.0, SizeUnit.BYTE, "4096")),
    ],
)
def test_parse_threshold(token: str, expected: Threshold) -> None:
    assert parse_threshold(token) == expected


def test_parse_threshold_rejects_invalid_input() -> None:
    with pytest.raises(SizeParseError):
        parse_threshold("lots")
    with pytest.raises(UnitConversionError):
        parse_threshold("1T")


@pytest.mark.parametrize(
    ("choice", "count", "size_given", "dir_given", "expected"),
    [
        (ModeChoice.AUTO, 500, False, False, ScanMode.BY_COUNT),
        (ModeChoice.AUTO, 500, True, False, ScanMode.BY_SIZE),
        (ModeChoice.AUTO, 500, False, True, ScanMode.BY_SIZE),
        (ModeChoice.AUTO, 0, False, False, ScanMode.BY_SIZE),
        (ModeChoice.AUTO, None, False, False, ScanMode.BY_SIZE),
        (ModeChoice.SIZE, 500, False, False, ScanMode.BY_SIZE),
        (ModeChoice.COUNT, 10, True, True, ScanMode.BY_COUNT),
    ],
)
def test_resolve_mode(
    choice: ModeChoice,
    count: int | None,
    size_given: bool,  # noqa: FBT001
    dir_given: bool,  # noqa: FBT001
    expected: ScanMode,
) -> None:
    assert (
        resolve_mode(
            choice,
            minimum_file_count=count,
            size_threshold_given=size_given,
            dir_threshold_given=dir_given,
        )
        is expected
    )


def test_forced_count_mode_needs_a_count() -> None:
    with pytest.raises(ConfigError, match="positive"):
        resolve_mode(ModeChoice.COUNT, minimum_file_count=0, size_threshold_given=False, dir_threshold_given=False)


def test_defaults_select_count_mode() -> None:
    config = build_config()
    assert config.mode is ScanMode.BY_COUNT
    assert config.minimum_file_count == 500
    assert config.kinds is KindFilter.DIRECTORIES
    assert config.unit_label == "files"


def test_explicit_default_size_selects_size_mode() -> None:
    # presence of the option decides, not its value
    config = build_config(minimum_file_size="200MB")
    assert config.mode is ScanMode.BY_SIZE
    assert config.target_unit is SizeUnit.MEGABYTE
    assert config.file_bar() == 200.0


def test_directory_threshold_is_normalized_into_target_unit() -> None:
    config = build_config(minimum_file_size="500M", minimum_dir_size="2G")
    assert config.target_unit is SizeUnit.MEGABYTE
    assert config.dir_bar() == 2048.0


def test_directory_threshold_falls_back_to_file_threshold() -> None:
    config = build_config(minimum_file_size="1G")
    assert config.dir_threshold is None
    assert config.dir_bar() == config.file_bar() == 1.0


def test_dir_threshold_alone_uses_default_file_threshold_unit() -> None:
    config = build_config(minimum_dir_size="1G")
    assert config.mode is ScanMode.BY_SIZE
    assert config.target_unit is SizeUnit.MEGABYTE
    assert config.dir_bar() == 1024.0


def test_malformed_threshold_fails_before_scanning() -> None:
    with pytest.raises(SizeParseError):
        build_config(minimum_file_size="big")
    with pytest.raises(SizeParseError):
        build_config(minimum_file_size="1G", minimum_dir_size="x1G")


def test_count_mode_rejects_files_only() -> None:
    with pytest.raises(ConfigError, match="count mode"):
        build_config(mode=ModeChoice.COUNT, kinds=KindFilter.FILES)


def test_negative_count_is_rejected() -> None:
    with pytest.raises(ConfigError, match="non-negative"):
        build_config(minimum_file_count=-1)


def test_exclusions_are_carried_into_the_policy() -> None:
    config = build_config(minimum_file_size="1G", exclude=["*/cache/*"])
    assert config.exclusions.patterns == ("*/cache/*",)
