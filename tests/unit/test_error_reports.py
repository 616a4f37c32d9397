import json
from datetime import datetime, timedelta, timezone

import pytest

from core.config import LoggingSettings
from core.error_logger import get_error_reporter
from core.log_config import configure_logging
from scripts.view_error_reports import ErrorReportsViewer, error_category, main


@pytest.fixture
def file_logging(tmp_path):
    configure_logging(LoggingSettings(level="INFO", directory=str(tmp_path), to_files=True))
    yield tmp_path
    configure_logging(LoggingSettings(level="INFO", to_files=False))


def _write_reports(path, rows):
    with open(path / "errors.json", "w", encoding="utf-8") as f:
        for row in rows:
            f.write(row if isinstance(row, str) else json.dumps(row))
            f.write("\n")


def test_error_reporter_writes_json_lines(file_logging):
    reporter = get_error_reporter()
    try:
        raise ConnectionError("downloader down")
    except ConnectionError as e:
        reporter.log_api_error(e, service_name="Downloader", endpoint="/api/extract", status_code=None)

    lines = (file_logging / "errors.json").read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[-1])

    assert record["level"] == "ERROR"
    assert record["logger"] == "error_reports"
    assert "ConnectionError - downloader down" in record["message"]
    assert record["context"]["service"] == "Downloader"
    assert "ConnectionError" in record["exception"]
    assert (file_logging / "errors.log").exists()

    recent = ErrorReportsViewer(file_logging).get_recent_errors(hours=1)
    assert len(recent) == 1
    assert error_category(recent[0]) == "api:Downloader"


def test_get_recent_errors_filters_and_sorts(tmp_path):
    now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    _write_reports(
        tmp_path,
        [
            {"timestamp": (now - timedelta(hours=2)).isoformat(), "logger": "error_reports", "message": "older"},
            "{not json",
            {"timestamp": (now - timedelta(hours=30)).isoformat(), "logger": "error_reports", "message": "stale"},
            {"timestamp": (now - timedelta(minutes=5)).isoformat(), "logger": "error_reports", "message": "newest",
             "context": {"stage": "body"}},
            {"message": "no timestamp"},
        ],
    )

    errors = ErrorReportsViewer(tmp_path).get_recent_errors(hours=24, now=now)

    assert [e["message"] for e in errors] == ["newest", "older"]
    assert error_category(errors[0]) == "stream:body"
    assert error_category(errors[1]) == "error_reports"


def test_missing_log_file_yields_no_errors(tmp_path):
    assert ErrorReportsViewer(tmp_path).get_recent_errors() == []


def test_cli_summary_and_detail(tmp_path, capsys):
    now = datetime.now(timezone.utc)
    _write_reports(
        tmp_path,
        [{"timestamp": now.isoformat(), "logger": "error_reports", "message": "Media stream error",
          "context": {"stage": "connect", "media_id": "abc"}}],
    )

    assert main(["summary", "6"], logs_dir=tmp_path) == 0
    out = capsys.readouterr().out
    assert "stream:connect" in out
    assert "Media stream error" in out

    assert main(["detail", "0"], logs_dir=tmp_path) == 0
    out = capsys.readouterr().out
    assert '"media_id": "abc"' in out


def test_cli_rejects_bad_arguments(tmp_path, capsys):
    assert main(["summary", "many"], logs_dir=tmp_path) == 2
    assert main(["explode"], logs_dir=tmp_path) == 2
    assert main(["help"], logs_dir=tmp_path) == 0
