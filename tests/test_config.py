"""Tests for DiskConfig."""

from __future__ import annotations

import dataclasses

import pytest

from disk_entities._config import DEFAULT_CONFIG, DiskConfig


class TestDiskConfig:
    def test_defaults(self) -> None:
        cfg = DiskConfig()
        assert cfg.large_file_threshold == 2 * 1024**3
        assert cfg.encoding == "utf-8"
        assert cfg.strict is False
        assert cfg.probe_attempts == 3
        assert cfg.max_concurrent_probes == 64

    def test_default_instance(self) -> None:
        assert DEFAULT_CONFIG == DiskConfig()

    def test_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.strict = True  # type: ignore[misc]

    def test_validate_ok(self) -> None:
        DiskConfig().validate()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"large_file_threshold": -1},
            {"probe_attempts": 0},
            {"probe_backoff": -0.5},
            {"max_concurrent_probes": 0},
            {"encoding": "no-such-codec"},
        ],
    )
    def test_validate_rejects(self, kwargs: dict[str, object]) -> None:
        with pytest.raises(ValueError):
            DiskConfig(**kwargs).validate()  # type: ignore[arg-type]


class TestFromDict:
    def test_round_trip(self) -> None:
        cfg = DiskConfig.from_dict({"strict": True, "probe_attempts": 5})
        assert cfg.strict is True
        assert cfg.probe_attempts == 5
        assert cfg.encoding == "utf-8"

    def test_empty(self) -> None:
        assert DiskConfig.from_dict({}) == DiskConfig()

    def test_unknown_key(self) -> None:
        with pytest.raises(TypeError, match="bogus"):
            DiskConfig.from_dict({"bogus": 1})

    def test_validates(self) -> None:
        with pytest.raises(ValueError):
            DiskConfig.from_dict({"probe_attempts": 0})
