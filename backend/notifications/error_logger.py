"""
Error logging utility for the notification pipeline.

Writes a timestamped report for each failed lookup or send so the failure
can be inspected after the request has returned.
"""

import os
from datetime import datetime
from typing import Any

LOG_DIR = os.path.join(os.path.dirname(__file__), "logs")


def log_notification_error(
    error_type: str, error_message: str, context: dict[str, Any] | None = None
) -> str:
    """
    Log a notification error to a timestamped file.

    Args:
        error_type: Stage that failed ('lookup' or 'sending')
        error_message: The error message or provider diagnostic
        context: Optional request context (category, found_item_id, ...)

    Returns:
        Path to the log file created
    """
    os.makedirs(LOG_DIR, exist_ok=True)

    now = datetime.now()
    filename = os.path.join(
        LOG_DIR, f"notify_{error_type}_{now.strftime('%Y%m%d_%H%M%S_%f')}.txt"
    )

    with open(filename, "w", encoding="utf-8") as f:
        f.write(f"Found-Item Notification Failure - {now}\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"Stage: {error_type}\n")
        f.write(f"Error: {error_message}\n")

        if context:
            f.write("\nRequest:\n")
            f.write("-" * 60 + "\n")
            for key, value in context.items():
                if value is not None:
                    f.write(f"{key}: {value}\n")

    return filename
