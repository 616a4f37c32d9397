#!/usr/bin/env python3
"""
Скрипт для просмотра error отчетов relay-сервиса.
Читает logs/errors.json (одна JSON-запись на строку) и показывает последние ошибки,
сгруппированные по источнику: внешний загрузчик, стрим медиа, необработанные ошибки.
"""

import json
import sys
from pathlib import Path
from datetime import datetime, timedelta, timezone
from typing import List, Dict, Any, Optional


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def error_category(error: Dict[str, Any]) -> str:
    """Категория отчета: service для ошибок API, stage для стрима, иначе логгер"""
    context = error.get('context') or {}
    if context.get('service'):
        return f"api:{context['service']}"
    if context.get('stage'):
        return f"stream:{context['stage']}"
    return error.get('logger', 'UNKNOWN')


class ErrorReportsViewer:
    """Класс для просмотра error отчетов"""

    def __init__(self, logs_dir: Path = Path("logs")):
        self.logs_dir = logs_dir
        self.errors_json = logs_dir / "errors.json"

    def get_recent_errors(self, hours: int = 24, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """Получить ошибки за последние N часов (новые сверху)"""
        errors = []
        cutoff_time = (now or datetime.now(timezone.utc)) - timedelta(hours=hours)

        if not self.errors_json.exists():
            return errors

        with open(self.errors_json, 'r', encoding='utf-8') as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    error_data = json.loads(line)
                    error_time = _parse_timestamp(error_data['timestamp'])
                except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                    # битые строки (например, обрезанные при ротации) пропускаем
                    continue
                if error_time > cutoff_time:
                    errors.append(error_data)

        errors.sort(key=lambda x: _parse_timestamp(x['timestamp']), reverse=True)
        return errors

    def print_error_summary(self, hours: int = 24) -> None:
        """Вывести сводку по ошибкам"""
        errors = self.get_recent_errors(hours)

        if not errors:
            print(f"✅ За последние {hours} часов ошибок не найдено!")
            return

        print(f"🚨 Найдено {len(errors)} ошибок за последние {hours} часов:")
        print("=" * 80)

        categories: Dict[str, List[Dict[str, Any]]] = {}
        for error in errors:
            categories.setdefault(error_category(error), []).append(error)

        for category, category_errors in categories.items():
            print(f"\n🔴 {category}: {len(category_errors)} ошибок")

            for error in category_errors[:5]:  # Показываем первые 5 каждой категории
                print(f"  📅 {error.get('timestamp', 'UNKNOWN')}")
                print(f"  💬 {(error.get('message') or 'No message')[:100]}")
                print()

    def print_detailed_error(self, error_index: int = 0, hours: int = 24) -> None:
        """Вывести детальную информацию об ошибке"""
        errors = self.get_recent_errors(hours)

        if not errors:
            print("Ошибок не найдено!")
            return

        if error_index >= len(errors):
            print(f"Индекс {error_index} вне диапазона. Доступно {len(errors)} ошибок.")
            return

        print("📋 ДЕТАЛЬНАЯ ИНФОРМАЦИЯ ОБ ОШИБКЕ")
        print("=" * 80)

        for key, value in errors[error_index].items():
            if key == 'exception' and value:
                print(f"{key.upper()}:")
                print(f"  {value}")
            elif key == 'context' and value:
                print(f"{key.upper()}: {json.dumps(value, ensure_ascii=False)}")
            else:
                print(f"{key.upper()}: {value}")

    def show_help(self) -> None:
        """Показать справку"""
        print("📊 ПРОСМОТР ERROR ОТЧЕТОВ")
        print("=" * 50)
        print("Использование:")
        print("  python view_error_reports.py summary [часы]  - сводка ошибок")
        print("  python view_error_reports.py detail [индекс] [часы]  - детальная ошибка")
        print("  python view_error_reports.py help  - эта справка")
        print()
        print("Каталог логов берется из LOG_DIRECTORY (по умолчанию ./logs)")


def _int_arg(argv: List[str], index: int, default: int, label: str) -> Optional[int]:
    if len(argv) <= index:
        return default
    try:
        return int(argv[index])
    except ValueError:
        print(f"Ошибка: {label} должен быть числом")
        return None


def main(argv: Optional[List[str]] = None, logs_dir: Optional[Path] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if logs_dir is None:
        from core.config import LoggingSettings
        logs_dir = Path(LoggingSettings().directory)
    viewer = ErrorReportsViewer(logs_dir)

    if not argv:
        viewer.print_error_summary()
        return 0

    command = argv[0].lower()

    if command == "summary":
        hours = _int_arg(argv, 1, 24, "параметр часы")
        if hours is None:
            return 2
        viewer.print_error_summary(hours)

    elif command == "detail":
        error_index = _int_arg(argv, 1, 0, "индекс")
        hours = _int_arg(argv, 2, 24, "параметр часы")
        if error_index is None or hours is None:
            return 2
        viewer.print_detailed_error(error_index, hours)

    elif command == "help":
        viewer.show_help()

    else:
        print(f"Неизвестная команда: {command}")
        viewer.show_help()
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
