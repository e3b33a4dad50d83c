import logging

from swagger_extract.log import LOGGER_NAME, configure_logging


class TestConfigureLogging:
    def test_console_handler(self):
        logger = configure_logging(logging.DEBUG)
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = configure_logging(logging.INFO, log_file=log_file, console=False)
        logging.getLogger(f"{LOGGER_NAME}.pipeline").info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    def test_reconfigure_replaces_handlers(self):
        configure_logging(logging.INFO)
        logger = configure_logging(logging.WARNING)
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
