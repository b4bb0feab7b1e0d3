"""Tests for the command-line interface."""

import yaml
from typer.testing import CliRunner

from auth_log import __version__
from auth_log.cli import app

runner = CliRunner()


class TestConfigure:
    """Tests for the configuration wizard."""
    
    def test_writes_remote_provider_config(self, tmp_path):
        output = tmp_path / "config" / "auth_log.yaml"
        
        result = runner.invoke(
            app,
            ["configure", "--output", str(output)],
            input="security@acme.dev\nAcme\nn\nip_api\n",
        )
        
        assert result.exit_code == 0, result.output
        data = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert data["auth_log"]["messenger"] is False
        assert data["auth_log"]["transports"]["sender_email"] == "security@acme.dev"
        assert data["auth_log"]["transports"]["sender_name"] == "Acme"
        assert data["auth_log"]["location"] == {"provider": "ip_api"}
    
    def test_geoip2_asks_for_database_path(self, tmp_path):
        output = tmp_path / "auth_log.yaml"
        
        result = runner.invoke(
            app,
            ["configure", "--output", str(output)],
            input="\n\ny\ngeoip2\n/data/GeoLite2-City.mmdb\n",
        )
        
        assert result.exit_code == 0, result.output
        data = yaml.safe_load(output.read_text(encoding="utf-8"))["auth_log"]
        assert data["messenger"] is True
        assert data["transports"]["sender_email"] == "no-reply@example.com"
        assert data["location"] == {
            "provider": "geoip2",
            "geoip2_database_path": "/data/GeoLite2-City.mmdb",
        }
    
    def test_no_location(self, tmp_path):
        output = tmp_path / "auth_log.yaml"
        
        result = runner.invoke(
            app,
            ["configure", "--output", str(output)],
            input="\n\n\nnone\n",
        )
        
        assert result.exit_code == 0, result.output
        assert "location" not in yaml.safe_load(output.read_text(encoding="utf-8"))["auth_log"]


class TestCommands:
    """Tests for the other commands."""
    
    def test_version(self):
        result = runner.invoke(app, ["version"])
        
        assert result.exit_code == 0
        assert __version__ in result.output
    
    def test_locate_without_provider(self, tmp_path):
        config = tmp_path / "auth_log.yaml"
        config.write_text("auth_log:\n  messenger: false\n", encoding="utf-8")
        
        result = runner.invoke(app, ["locate", "8.8.8.8", "--config", str(config)])
        
        assert result.exit_code == 1
        assert "No location provider configured" in result.output
    
    def test_locate_with_missing_database(self, tmp_path):
        config = tmp_path / "auth_log.yaml"
        config.write_text(
            "auth_log:\n"
            "  location:\n"
            "    provider: geoip2\n"
            f"    geoip2_database_path: {tmp_path / 'missing.mmdb'}\n",
            encoding="utf-8",
        )
        
        result = runner.invoke(app, ["locate", "8.8.8.8", "--config", str(config)])
        
        assert result.exit_code == 0
        assert "No location found for 8.8.8.8" in result.output
    
    def test_invalid_config_exits(self, tmp_path):
        config = tmp_path / "auth_log.yaml"
        config.write_text("auth_log:\n  location:\n    provider: geoip2\n", encoding="utf-8")
        
        result = runner.invoke(app, ["locate", "8.8.8.8", "--config", str(config)])
        
        assert result.exit_code == 1
    
    def test_demo_records_login(self):
        result = runner.invoke(app, ["demo", "--ip", "203.0.113.5"])
        
        assert result.exit_code == 0, result.output
        assert "Recorded authentication log" in result.output
        assert "203.0.113.5" in result.output
        assert "Chrome on Windows" in result.output
