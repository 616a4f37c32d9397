"""
Модуль для логирования ошибок в отдельные файлы.
Предоставляет структурированное логирование ошибок с детальной информацией.
"""

import logging
import json
import traceback
from typing import Any, Dict, Optional
from datetime import datetime


class ErrorReporter:
    """Класс для структурированного логирования ошибок"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        message: str = "",
        include_traceback: bool = True
    ) -> None:
        """
        Логирует ошибку с детальной информацией

        Args:
            error: Исключение для логирования
            context: Дополнительный контекст ошибки (media_id, url, etc.)
            message: Дополнительное сообщение об ошибке
            include_traceback: Включать ли traceback в лог
        """
        error_info = {
            "error_type": type(error).__name__,
            "error_message": str(error),
            "timestamp": datetime.now().isoformat(),
            "context": context or {},
            "custom_message": message
        }

        if include_traceback:
            error_info["traceback"] = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )

        log_message = f"Error: {error_info['error_type']} - {error_info['error_message']}"
        if message:
            log_message = f"{message} | {log_message}"
        if context:
            log_message += f" | Context: {json.dumps(context, ensure_ascii=False, default=str)}"

        exc_info = (type(error), error, error.__traceback__) if include_traceback else None
        self.logger.error(log_message, exc_info=exc_info, extra={
            "error_info": error_info
        })

    def log_api_error(
        self,
        error: Exception,
        service_name: str,
        endpoint: str,
        request_data: Optional[Dict[str, Any]] = None,
        response_data: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ) -> None:
        """Логирует ошибки запросов к внешним сервисам"""
        context = {
            "service": service_name,
            "endpoint": endpoint,
            "status_code": status_code,
            "request": request_data,
            "response": response_data
        }

        message = f"API Error in {service_name}"
        self.log_error(error, context, message)

    def log_stream_error(
        self,
        error: Exception,
        media_id: str,
        origin_url: str,
        stage: str,
        status_code: Optional[int] = None
    ) -> None:
        """Логирует ошибки проксирования медиа (stage: connect / status / body)"""
        context = {
            "media_id": media_id,
            "origin_url": origin_url,
            "stage": stage,
            "status_code": status_code
        }

        message = f"Media stream error at stage '{stage}'"
        self.log_error(error, context, message)


# Глобальный экземпляр ErrorReporter (инициализируется в core.log_config / create_app)
error_reporter: Optional[ErrorReporter] = None


def get_error_reporter() -> ErrorReporter:
    """Получить глобальный экземпляр ErrorReporter"""
    if error_reporter is None:
        raise RuntimeError("Error reporter not initialized. Call setup_error_reporting() first.")
    return error_reporter


def setup_error_reporting(error_logger: logging.Logger) -> None:
    """Инициализировать глобальный ErrorReporter"""
    global error_reporter
    error_reporter = ErrorReporter(error_logger)


def is_error_reporting_configured() -> bool:
    return error_reporter is not None
