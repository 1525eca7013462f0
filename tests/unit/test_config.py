"""
Tests for CLI Configuration Management
"""

import json

import pytest

from cli.config import ConfigurationManager, ConfigurationError, DEFAULT_CONFIG


def make_manager(config_file=None, environ=None):
    return ConfigurationManager(config_file, environ=environ or {}, search_paths=[])


class TestConfigurationManager:
    """Test hierarchical configuration loading."""

    def test_defaults(self):
        manager = make_manager()

        assert manager.get('generator.count') == 1000
        assert manager.get('generator.output') == 'scripts.json'
        assert manager.get('generator.mode') == 'valid'
        assert manager.get('generator.seed') is None
        assert manager.get('policy.emergency') == 'computed'
        assert manager.get('progress.interval') == 100
        assert manager.get_sources() == ["defaults"]
        assert manager.validate() == []

    def test_missing_key_default(self):
        assert make_manager().get('generator.missing', 'fallback') == 'fallback'

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("generator:\n  count: 25\n  mode: invalid\npolicy:\n  emergency: fixed\n")

        manager = make_manager(str(path))

        assert manager.get('generator.count') == 25
        assert manager.get('generator.mode') == 'invalid'
        assert manager.get('generator.output') == 'scripts.json'
        assert manager.get('policy.emergency') == 'fixed'
        assert manager.get_sources() == ["defaults", f"file:{path}"]

    def test_json_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"generator": {"seed": 99}}))

        assert make_manager(str(path)).get('generator.seed') == 99

    def test_search_paths(self, tmp_path):
        path = tmp_path / ".erp-fixtures.yml"
        path.write_text("progress:\n  interval: 10\n")

        manager = ConfigurationManager(environ={}, search_paths=[tmp_path / "absent.yml", path])

        assert manager.get('progress.interval') == 10

    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("generator:\n  count: 25\n")

        manager = make_manager(str(path), environ={
            'ERP_GENERATOR_COUNT': '50',
            'ERP_GENERATOR_OUTPUT': 'out/fixtures.json',
            'ERP_JSON_INDENT': '2',
            'UNRELATED': 'x',
        })

        assert manager.get('generator.count') == 50
        assert manager.get('generator.output') == 'out/fixtures.json'
        assert manager.get('json.indent') == 2
        assert manager.get_sources()[-1] == "environment"

    def test_defaults_not_mutated(self):
        make_manager(environ={'ERP_GENERATOR_COUNT': '5'}).load()

        assert DEFAULT_CONFIG['generator']['count'] == 1000

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            make_manager(str(tmp_path / "nope.yml")).load()

    def test_unknown_file_format(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("")

        with pytest.raises(ConfigurationError):
            make_manager(str(path)).load()

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            make_manager(str(path)).load()

    def test_validation_errors(self):
        manager = make_manager(environ={
            'ERP_GENERATOR_COUNT': '-1',
            'ERP_GENERATOR_MODE': 'sometimes',
            'ERP_POLICY_EMERGENCY': 'majority',
        })

        errors = manager.validate()

        assert len(errors) == 3
        assert any("generator.count" in error for error in errors)
        assert any("generator mode" in error for error in errors)
        assert any("emergency threshold policy" in error for error in errors)

    def test_reset(self):
        manager = make_manager()
        manager.load()
        manager.environ = {'ERP_GENERATOR_COUNT': '7'}

        assert manager.get('generator.count') == 1000
        manager.reset()
        assert manager.get('generator.count') == 7
