import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

from core.config import LoggingSettings
from core.error_logger import setup_error_reporting


ERROR_LOGGER_NAME = "error_reports"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Человекочитаемый формат для errors.log
ERROR_REPORT_FORMAT = """%(asctime)s - ERROR REPORT
=====================================
Logger: %(name)s
Level: %(levelname)s
Message: %(message)s
Module: %(module)s
Function: %(funcName)s
Line: %(lineno)d
Process: %(process)d
Thread: %(thread)d

--- END ERROR REPORT ---
"""


class JsonErrorFormatter(logging.Formatter):
	"""Одна запись = одна строка валидного JSON (читается scripts/view_error_reports.py)"""

	def format(self, record: logging.LogRecord) -> str:
		payload = {
			"timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
			"level": record.levelname,
			"logger": record.name,
			"message": record.getMessage(),
			"module": record.module,
			"function": record.funcName,
			"line": record.lineno,
			"exception": self.formatException(record.exc_info) if record.exc_info else None,
		}
		error_info = getattr(record, "error_info", None)
		if error_info:
			payload["context"] = error_info.get("context")
		return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(settings: LoggingSettings) -> logging.Logger:
	"""Настроить корневое логирование и отдельный логгер для error отчетов.

	Возвращает логгер ``error_reports``, которым инициализируется ErrorReporter.
	"""
	level = getattr(logging, settings.level.upper(), logging.INFO)

	console_handler = logging.StreamHandler()
	console_handler.setLevel(level)
	handlers: list[logging.Handler] = [console_handler]

	logs_dir = Path(settings.directory)
	if settings.to_files:
		logs_dir.mkdir(parents=True, exist_ok=True)
		file_handler = logging.handlers.RotatingFileHandler(
			logs_dir / "app.log",
			maxBytes=10*1024*1024,  # 10MB
			backupCount=5,
			encoding="utf-8",
		)
		file_handler.setLevel(logging.WARNING)  # в файл только WARNING+
		handlers.append(file_handler)

	logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)

	error_logger = logging.getLogger(ERROR_LOGGER_NAME)
	error_logger.setLevel(logging.ERROR)
	# без propagation, чтобы не дублировать отчеты в корневом логгере
	error_logger.propagate = False
	for handler in list(error_logger.handlers):
		error_logger.removeHandler(handler)
		handler.close()

	if settings.to_files:
		error_file_handler = logging.handlers.TimedRotatingFileHandler(
			logs_dir / "errors.log",
			when="midnight",
			interval=1,
			backupCount=30,  # Храним 30 дней
			encoding="utf-8",
		)
		error_file_handler.setFormatter(logging.Formatter(fmt=ERROR_REPORT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
		error_file_handler.setLevel(logging.ERROR)

		json_error_handler = logging.handlers.RotatingFileHandler(
			logs_dir / "errors.json",
			maxBytes=50*1024*1024,  # 50MB
			backupCount=10,
			encoding="utf-8",
		)
		json_error_handler.setFormatter(JsonErrorFormatter())
		json_error_handler.setLevel(logging.ERROR)

		error_logger.addHandler(error_file_handler)
		error_logger.addHandler(json_error_handler)
	else:
		error_logger.addHandler(console_handler)

	# Шумные библиотеки
	logging.getLogger("httpx").setLevel(logging.WARNING)
	logging.getLogger("httpcore").setLevel(logging.WARNING)

	setup_error_reporting(error_logger)
	return error_logger
