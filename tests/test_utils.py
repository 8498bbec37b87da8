import sys
import os
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
import yaml

from pathplanner.utils import (
    ConfigManager,
    SystemConfig,
    load_config,
    log_exceptions,
    setup_logging,
    validate_config,
)

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), "..")


class TestConfigLoader:

    @pytest.fixture
    def config_file(self, tmp_path):

        path = tmp_path / "planner.yaml"
        path.write_text(yaml.safe_dump({
            'planning': {'default_algorithm': 'dijkstra', 'options': {'goal_bias': 0.1}},
            'scene': {'rows': 10, 'cols': 12},
            'training': {'epochs': 3},
        }), encoding='utf-8')
        return path

    def test_load_yaml(self, config_file):

        config = load_config(str(config_file))

        assert isinstance(config, SystemConfig)
        assert config.planning['default_algorithm'] == 'dijkstra'
        assert config.scene['rows'] == 10
        assert config.get('training') is None

    def test_missing_file_gives_empty_config(self, tmp_path):

        config = load_config(str(tmp_path / "missing.yaml"))

        assert config.planning == {}
        assert validate_config(config) == {}

    def test_environment_overrides(self, config_file, monkeypatch):

        monkeypatch.setenv("PATH_PLANNER_PLANNING__OPTIONS__GOAL_BIAS", "0.25")
        monkeypatch.setenv("PATH_PLANNER_SCENE__ROWS", "30")
        monkeypatch.setenv("PATH_PLANNER_PLANNING__SNAPSHOT_GRID", "false")

        config = load_config(str(config_file))

        assert config.planning['options']['goal_bias'] == 0.25
        assert config.planning['default_algorithm'] == 'dijkstra'
        assert config.scene['rows'] == 30
        assert config.planning['snapshot_grid'] is False

    def test_shipped_config_is_valid(self):

        config = load_config(os.path.join(PROJECT_ROOT, "config", "main_config.yaml"))

        assert config.planning['default_algorithm'] == 'astar'
        assert config.planning['options']['iterations'] == 2500
        assert validate_config(config) == {}

    def test_validate_config_reports_errors(self):

        config = SystemConfig(
            planning={'options': {'goal_bias': 1.5, 'step': 0, 'iterations': -3}},
            scene={'rows': 0, 'wall_density': 2.0},
        )

        errors = validate_config(config)

        assert len(errors['planning']) == 3
        assert len(errors['scene']) == 2

    def test_manager_caches_and_saves(self, tmp_path):

        manager = ConfigManager(str(tmp_path))
        (tmp_path / "main_config.yaml").write_text("planning:\n  default_algorithm: rrt_star\n", encoding='utf-8')

        first = manager.load_config("main")
        assert manager.load_config("main") is first

        output = tmp_path / "out" / "saved.json"
        manager.save_config(first, str(output))

        assert load_config(str(output)).planning['default_algorithm'] == 'rrt_star'


class TestLogging:

    @pytest.fixture
    def restore_logging(self):

        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        yield
        for handler in list(root.handlers):
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        for handler in handlers:
            if handler not in root.handlers:
                root.addHandler(handler)
        root.setLevel(level)

    def test_setup_logging_writes_files(self, tmp_path, restore_logging):

        system_logger = setup_logging({'log_dir': str(tmp_path), 'console_logging': False})

        logging.getLogger("pathplanner.planning.test").error("planner failure")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert (tmp_path / "system.log").exists()
        assert "planner failure" in (tmp_path / "errors.log").read_text()
        assert set(system_logger.component_loggers) == {"planning", "scene", "evaluation", "utils"}

    def test_component_levels(self, tmp_path, restore_logging):

        setup_logging({
            'log_dir': str(tmp_path),
            'console_logging': False,
            'components': {'scene': {'level': 'DEBUG'}, 'evaluation': {'enabled': False}},
        })

        assert logging.getLogger("pathplanner.scene").level == logging.DEBUG

    def test_structured_events(self, tmp_path, restore_logging):

        system_logger = setup_logging({'log_dir': str(tmp_path), 'console_logging': False})

        system_logger.log_performance_metrics("evaluation", {"success_rate": 0.75})
        try:
            raise ValueError("goal occupied")
        except ValueError as e:
            system_logger.log_error_with_context("planning", e, {"goal": (1, 2)})

        for handler in logging.getLogger().handlers:
            handler.flush()

        system_log = (tmp_path / "system.log").read_text()
        assert '"event_type": "performance_metrics"' in system_log
        assert '"success_rate": 0.75' in system_log
        assert '"error_type": "ValueError"' in (tmp_path / "errors.log").read_text()

    def test_log_exceptions_reraises(self, caplog):

        @log_exceptions("pathplanner.utils")
        def explode():
            raise RuntimeError("boom")

        with caplog.at_level(logging.ERROR, logger="pathplanner.utils"):
            with pytest.raises(RuntimeError):
                explode()

        assert "Exception in explode: boom" in caplog.text
        assert explode.__name__ == "explode"
