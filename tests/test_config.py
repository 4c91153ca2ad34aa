"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from jsonmend import MaxDepthExceeded, repair_json
from jsonmend.utils.config import Settings, settings


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings(_env_file=None)
        assert s.max_depth == 256
        assert s.log_level == "WARNING"
        assert s.logs_dir is None

    def test_reads_prefixed_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.setenv("JSONMEND_MAX_DEPTH", "12")
        monkeypatch.setenv("JSONMEND_LOG_LEVEL", "debug")
        monkeypatch.setenv("JSONMEND_LOGS_DIR", str(tmp_path))
        s = Settings(_env_file=None)
        assert s.max_depth == 12
        assert s.log_level == "DEBUG"
        assert s.logs_dir == str(tmp_path)

    def test_reads_env_file(self, tmp_path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("JSONMEND_MAX_DEPTH=7\nUNRELATED=1\n", encoding="utf-8")
        assert Settings(_env_file=str(env_file)).max_depth == 7

    @pytest.mark.parametrize("value", [0, -3])
    def test_rejects_non_positive_depth(self, value: int) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_depth=value)

    def test_rejects_unknown_log_level(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")


class TestSettingsDriveRepair:
    def test_default_depth_comes_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "max_depth", 1)
        assert repair_json("[1]") == "[1]"
        with pytest.raises(MaxDepthExceeded):
            repair_json("[[1]]")

    def test_explicit_depth_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "max_depth", 1)
        assert repair_json("[[1]]", max_depth=5) == "[[1]]"
