"""Unit tests for logging configuration."""

import json

from loguru import logger

from legislature_api.core.logging import logged_job, setup_logging


class TestLogging:
    """Tests for Loguru logging setup."""

    def test_setup_logging_does_not_raise(self) -> None:
        """setup_logging with valid log level does not raise."""
        setup_logging("DEBUG")
        setup_logging("INFO")
        setup_logging("WARNING")

    def test_setup_logging_case_insensitive(self) -> None:
        """setup_logging accepts case-insensitive log levels."""
        setup_logging("info")
        setup_logging("debug")

    def test_log_dir_creates_file_sink(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        log_dir = tmp_path / "logs"
        setup_logging("INFO", str(log_dir))
        logger.info("file sink check")
        logger.complete()

        log_file = log_dir / "legislature-api.log"
        assert log_file.exists()
        assert "file sink check" in log_file.read_text()
        setup_logging("INFO")

    def test_json_output_records_are_serialized(self, capsys) -> None:  # type: ignore[no-untyped-def]
        setup_logging("INFO")
        logger.bind(json_output=True).info("job_summary")
        logger.info("plain line")

        lines = [line for line in capsys.readouterr().err.splitlines() if line.startswith("{")]
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "job_summary"

    def test_summary_line_is_flat_json_with_bound_counts(self, capsys) -> None:  # type: ignore[no-untyped-def]
        setup_logging("INFO")
        logger.bind(json_output=True, job="bills", created=3, failed=0).info("job_summary")

        line = next(line for line in capsys.readouterr().err.splitlines() if line.startswith("{"))
        payload = json.loads(line)
        assert payload["job"] == "bills"
        assert payload["created"] == 3
        assert payload["failed"] == 0
        assert payload["level"] == "INFO"
        assert "json_output" not in payload

    def test_plain_lines_are_tagged_api_by_default(self, capsys) -> None:  # type: ignore[no-untyped-def]
        setup_logging("INFO")
        logger.info("serving request")

        line = next(line for line in capsys.readouterr().err.splitlines() if "serving request" in line)
        assert "| api " in line

    async def test_logged_job_tags_records_while_running(self, capsys) -> None:  # type: ignore[no-untyped-def]
        setup_logging("INFO")

        @logged_job("legislators")
        async def run() -> str:
            logger.info("inside job")
            return "done"

        assert await run() == "done"
        logger.info("after job")

        err = capsys.readouterr().err
        inside = next(line for line in err.splitlines() if "inside job" in line)
        after = next(line for line in err.splitlines() if "after job" in line)
        assert "| legislators " in inside
        assert "| api " in after
