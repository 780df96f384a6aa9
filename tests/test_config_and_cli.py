"""
Tests for Configuration and CLI
"""

import json

import pytest

from platewise import cli
from platewise.cli import main
from platewise.config import PlatewiseConfig
from platewise.schemas import ValidationPolicy


class TestConfig:
    """Test configuration loading"""

    def test_defaults(self):
        """Test default values"""
        config = PlatewiseConfig()
        assert config.default_policy == ValidationPolicy.STRICT
        assert config.batch_pacing_seconds == 1.0
        assert config.log_level == "INFO"

    def test_from_env(self, monkeypatch):
        """Test environment overrides"""
        monkeypatch.setenv("PLATEWISE_POLICY", "traffic_camera")
        monkeypatch.setenv("PLATEWISE_PACING_SECONDS", "0")
        monkeypatch.setenv("PLATEWISE_LOG_LEVEL", "debug")

        config = PlatewiseConfig.from_env()

        assert config.default_policy == ValidationPolicy.TRAFFIC_CAMERA
        assert config.batch_pacing_seconds == 0.0
        assert config.log_level == "DEBUG"

    def test_invalid_values(self):
        """Test invalid policy or pacing raise"""
        with pytest.raises(ValueError):
            PlatewiseConfig(default_policy="paranoid")
        with pytest.raises(ValueError):
            PlatewiseConfig(batch_pacing_seconds=-0.5)


class TestCli:
    """Test the command-line entry point"""

    def test_json_output(self, tmp_path, capsys):
        """Test JSON report over saved responses"""
        good = tmp_path / "good.txt"
        good.write_text(
            '```json\n{"vehicles": [{"plate_number": "2224865", "color": "white", '
            '"type": "sedan", "confidence_score": 95}], '
            '"timestamp": "22/09/2025 15:55:54"}\n```',
            encoding="utf-8",
        )
        bad = tmp_path / "bad.txt"
        bad.write_text("Invalid JSON response", encoding="utf-8")

        code = main([str(good), str(bad), "--policy", "traffic_camera", "--pacing", "0", "--json"])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data["results"][0]["cars"][0]["plate_number"] == "2224865"
        assert data["results"][0]["timestamp"] == "2025-09-22T15:55:54"
        assert data["results"][1]["success"] is False
        assert data["summary"]["timestamps_extracted"] == 1

    def test_missing_file_is_failed_item(self, tmp_path, capsys):
        """Test unreadable files fail alone and text report is printed"""
        good = tmp_path / "good.txt"
        good.write_text('[{"plate_number": "AB-123", "color": "red", "type": "bus"}]', encoding="utf-8")

        code = main([str(good), str(tmp_path / "missing.txt"), "--policy", "strict", "--pacing", "0"])
        out = capsys.readouterr().out

        assert code == 0
        assert "AB-123" in out
        assert "SUMMARY" in out
        assert "Error:" in out

    def test_exit_code_when_nothing_found(self, tmp_path, capsys):
        """Test non-zero exit when no item succeeds"""
        empty = tmp_path / "empty.txt"
        empty.write_text("[]", encoding="utf-8")

        assert main([str(empty), "--pacing", "0"]) == 1

    def test_pacing_defaults_to_config(self, tmp_path, monkeypatch, capsys):
        """Test --pacing falls back to PLATEWISE_PACING_SECONDS"""
        monkeypatch.setenv("PLATEWISE_PACING_SECONDS", "0.25")
        seen = {}

        class RecordingProcessor(cli.BatchProcessor):
            def __init__(self, **kwargs):
                seen.update(kwargs)
                super().__init__(sleep=lambda seconds: None, **kwargs)

        monkeypatch.setattr(cli, "BatchProcessor", RecordingProcessor)
        response = tmp_path / "one.txt"
        response.write_text('[{"plate_number": "AB-123", "color": "red", "type": "bus"}]', encoding="utf-8")

        assert main([str(response)]) == 0
        assert seen["pacing_seconds"] == 0.25

        main([str(response), "--pacing", "0"])
        assert seen["pacing_seconds"] == 0.0
