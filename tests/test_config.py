import logging

from ekflow.utils.config import DEFAULT_CONFIG, Config
from ekflow.utils.logging_utils import setup_main_logger


class TestConfig:
    def test_defaults_when_file_missing(self, tmp_path):
        config = Config(str(tmp_path / "missing.yaml"))

        assert config.get('solver.max_augmentations') is None
        assert config.get('output.results_directory') == 'data/results'
        assert config.get('solver.unknown', 'fallback') == 'fallback'

    def test_file_overrides_are_merged(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("solver:\n  max_augmentations: 5\nvisualization:\n  style: dark\n")
        config = Config(str(path))

        assert config.get('solver.max_augmentations') == 5
        assert config.get('solver.validate_input') is False
        assert config.get('visualization.style') == 'dark'
        assert config.get('visualization.save_plots') is False

    def test_invalid_yaml_falls_back(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("solver: [unclosed\n")
        config = Config(str(path))
        assert config.as_dict() == DEFAULT_CONFIG

    def test_set_and_save(self, tmp_path):
        path = tmp_path / "config.yaml"
        config = Config(str(path))
        config.set('solver.log_every', 10)
        config.set('extra.key', 'value')
        config.save()

        reloaded = Config(str(path))
        assert reloaded.get('solver.log_every') == 10
        assert reloaded.get('extra.key') == 'value'

    def test_defaults_are_not_shared(self, tmp_path):
        config = Config(str(tmp_path / "missing.yaml"))
        config.set('solver.max_augmentations', 3)
        assert DEFAULT_CONFIG['solver']['max_augmentations'] is None


class TestLogging:
    def test_main_logger_writes_file(self, tmp_path):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        listener = setup_main_logger(str(tmp_path), "instance")
        try:
            root.info("solved")
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

        assert listener is None
        assert "solved" in (tmp_path / "instance.log").read_text()
