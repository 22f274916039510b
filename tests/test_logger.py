"""Tests for log file format and rotation."""
import logging

from lampfm.core.logger import get_logger, setup_logging


class TestLogFormat:

    def test_line_shape(self, tmp_path, log_reader):
        """Each line is '<timestamp> [<LEVEL>] <message>'."""
        log_file = tmp_path / "lampfm.log"
        setup_logging(str(log_file))

        logger = get_logger("lampfm.tests")
        logger.info("Installing php")
        logger.error("Failed to install php")

        assert log_reader(log_file) == [
            ("INFO", "Installing php"),
            ("ERROR", "Failed to install php"),
        ]

    def test_debug_only_when_verbose(self, tmp_path):
        log_file = tmp_path / "lampfm.log"
        setup_logging(str(log_file))
        get_logger("lampfm.tests").debug("Query: dpkg -s php")
        assert "dpkg" not in log_file.read_text()

        setup_logging(str(log_file), verbose=True)
        get_logger("lampfm.tests").debug("Query: dpkg -s php")
        assert "Query: dpkg -s php" in log_file.read_text()

    def test_append_only(self, tmp_path):
        """Existing log content survives a new invocation."""
        log_file = tmp_path / "lampfm.log"
        setup_logging(str(log_file))
        get_logger("lampfm.tests").info("first run")
        setup_logging(str(log_file))
        get_logger("lampfm.tests").info("second run")

        content = log_file.read_text()
        assert "first run" in content and "second run" in content

    def test_setup_replaces_handlers(self, tmp_path):
        setup_logging(str(tmp_path / "a.log"))
        setup_logging(str(tmp_path / "b.log"))
        assert len(logging.getLogger("lampfm").handlers) == 2

    def test_get_logger_namespace(self):
        assert get_logger("lampfm.core.installer").name == "lampfm.core.installer"
        assert get_logger("tests").name == "lampfm.tests"


class TestRotation:

    def test_rotates_when_over_threshold(self, tmp_path):
        """Oversized log is renamed aside and a fresh log started."""
        log_file = tmp_path / "lampfm.log"
        old_content = "2024-01-01 00:00:00 [INFO] old line\n" * 10
        log_file.write_text(old_content)

        setup_logging(str(log_file), max_bytes=128)
        get_logger("lampfm.tests").info("fresh line")

        rotated = tmp_path / "lampfm.log.1"
        assert rotated.exists()
        assert rotated.read_text() == old_content

        lines = log_file.read_text().splitlines()
        assert len(lines) == 1
        assert lines[0].endswith("[INFO] fresh line")

    def test_no_rotation_below_threshold(self, tmp_path):
        log_file = tmp_path / "lampfm.log"
        setup_logging(str(log_file), max_bytes=1024 * 1024)
        get_logger("lampfm.tests").info("small")
        assert not (tmp_path / "lampfm.log.1").exists()
