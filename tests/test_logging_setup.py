"""setup_logging 테스트"""

import logging
from unittest.mock import patch

from npcsim.core.logging import QUIET_LOGGERS, get_logger, setup_logging


class TestSetupLogging:
    @patch("npcsim.core.logging.logging.basicConfig")
    def test_level_name_case_insensitive(self, mock_config):
        setup_logging("debug")
        assert mock_config.call_args.kwargs["level"] == logging.DEBUG

    @patch("npcsim.core.logging.logging.basicConfig")
    def test_unknown_level_defaults_to_info(self, mock_config):
        setup_logging("chatty")
        assert mock_config.call_args.kwargs["level"] == logging.INFO

    @patch("npcsim.core.logging.logging.basicConfig")
    def test_library_loggers_quieted(self, _mock_config):
        setup_logging("DEBUG")
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_get_logger_named(self):
        assert get_logger("npcsim.test").name == "npcsim.test"
