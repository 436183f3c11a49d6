"""
Error report utility for the notifier.

Writes pipeline-level failures (configuration errors, failed deliveries) to
timestamped files an operator can inspect.
"""

import os
from datetime import datetime
from typing import Any


def _log_dir() -> str:
    default = os.path.join(os.path.dirname(__file__), "logs")
    return os.getenv("NOTIFY_ERROR_LOG_DIR", default)


def log_notification_error(
    error_type: str, error_message: str, context: dict[str, Any] | None = None
) -> str:
    """
    Log a notification error to a timestamped file.

    Args:
        error_type: Type of error (e.g., 'configuration', 'delivery')
        error_message: The error message
        context: Optional dictionary with additional context (repository, consumer, etc.)

    Returns:
        Path to the log file created
    """
    log_dir = _log_dir()
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    filename = os.path.join(log_dir, f"notification_error_{timestamp}.txt")

    with open(filename, "w", encoding="utf-8") as f:
        f.write(f"Notification Error Report - {datetime.now()}\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"Error Type: {error_type}\n")
        f.write(f"Error Message: {error_message}\n\n")

        if context:
            f.write("Context:\n")
            f.write("-" * 60 + "\n")
            for key, value in context.items():
                f.write(f"{key}: {value}\n")

    return filename
