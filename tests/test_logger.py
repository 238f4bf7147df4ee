"""
Justitia Logger Tests

Values echoed from settings files pass through TerminalSafeFormatter, which
must strip terminal escape sequences and control characters.
"""

import logging

import pytest

from justitia.constants import LOGGER_DEFAULTS, LOG_FORMAT
from justitia.logger import LogManager, TerminalSafeFormatter


class TestTerminalSafeFormatter:

    def test_plain_text_unchanged(self):
        assert TerminalSafeFormatter.sanitize("node.id = 127.0.0.1:8080") == "node.id = 127.0.0.1:8080"

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_passthrough(self, text):
        assert TerminalSafeFormatter.sanitize(text) == text

    def test_ansi_colors_stripped(self):
        text = "\x1b[31mred\x1b[0m policy \x1b[1;32mfbft\x1b[m"
        assert TerminalSafeFormatter.sanitize(text) == "red policy fbft"

    def test_cursor_and_screen_sequences_stripped(self):
        text = "\x1b[2J\x1b[Hcleared\x1b[1A\x1b[Kline"
        assert TerminalSafeFormatter.sanitize(text) == "clearedline"

    def test_two_byte_escape_stripped(self):
        assert TerminalSafeFormatter.sanitize("a\x1bMb") == "ab"

    def test_carriage_return_removed(self):
        # a bare \r would let a value overwrite the start of the log line
        assert TerminalSafeFormatter.sanitize("ok\rFAKE") == "okFAKE"

    def test_control_characters_removed(self):
        text = "mem\x00ory\x07db\x08\x0b\x0c\x1f\x7f"
        assert TerminalSafeFormatter.sanitize(text) == "memorydb"

    def test_tab_and_newline_kept(self):
        assert TerminalSafeFormatter.sanitize("a\tb\nc") == "a\tb\nc"

    def test_format_sanitizes_record(self):
        formatter = TerminalSafeFormatter(fmt="%(levelname)s %(message)s")
        record = logging.LogRecord(
            name="justitia.config", level=logging.ERROR, pathname="", lineno=0,
            msg="Setting %s bad", args=("\x1b[31mrole\x1b[0m\r",), exc_info=None,
        )
        assert formatter.format(record) == "ERROR Setting role bad"


class TestValidateLogFormat:

    def test_valid_format_kept(self):
        assert LogManager.validate_log_format("%(name)s: %(message)s") == "%(name)s: %(message)s"

    def test_empty_falls_back_to_default(self):
        assert LogManager.validate_log_format("") == LOGGER_DEFAULTS["LOG_FORMAT"]

    def test_broken_format_falls_back_to_default(self, capsys):
        assert LogManager.validate_log_format("%(missing_field)s") == LOGGER_DEFAULTS["LOG_FORMAT"]
        assert "Validation Error" in capsys.readouterr().err

    def test_environment_format_is_a_string(self):
        assert isinstance(LOG_FORMAT, str)
