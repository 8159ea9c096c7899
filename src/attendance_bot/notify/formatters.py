"""
Message formatters for Telegram notifications.

Formats attendance alerts into clean, readable Telegram messages.
"""

import re

from attendance_bot.models import AlertPayload, ChangeStatus, CourseAlert, Severity

DIVIDER = "━" * 30

STATUS_LABELS = {
    ChangeStatus.PRESENT: "✅ PRESENT",
    ChangeStatus.ABSENT: "❌ ABSENT",
    ChangeStatus.UNKNOWN: "⚠️ UNKNOWN",
}


class MessageFormatter:
    """
    Formats notification content for Telegram messages.

    Creates well-structured, emoji-enhanced messages that are
    easy to read on mobile devices.
    """

    @staticmethod
    def _truncate(text: str, max_length: int = 500) -> str:
        """Truncate text with ellipsis if too long."""
        if len(text) <= max_length:
            return text
        return text[:max_length - 3].rsplit(" ", 1)[0] + "..."

    @staticmethod
    def _bold(text: str) -> str:
        """
        Bold text for Telegram Markdown.

        Markdown characters cannot be escaped inside an entity, so the bold
        run is closed around each escaped character.
        """
        parts = re.split(r"([_*`\[])", text)
        return "".join(
            f"\\{part}" if i % 2 else f"*{part}*"
            for i, part in enumerate(parts)
            if part
        )

    @staticmethod
    def status_label(status: ChangeStatus) -> str:
        return STATUS_LABELS.get(status, STATUS_LABELS[ChangeStatus.UNKNOWN])

    @classmethod
    def format_payload(cls, payload: AlertPayload) -> str:
        """
        Format an attendance alert payload for Telegram.

        Args:
            payload: Computed alert figures

        Returns:
            str: Formatted message string
        """
        lines = [
            f"📚 {cls._bold(payload.course_label)}",
            DIVIDER,
            cls.status_label(payload.status),
            f"📊 Attendance: {payload.present}/{payload.total} lectures",
            f"📈 Percentage: *{payload.percentage:.1f}%*",
            DIVIDER,
        ]

        if payload.severity is Severity.CRITICAL:
            lines.extend([
                "⚠️ __CRITICAL ALERT__",
                "📉 Below minimum requirement!",
                f"🎯 *Action Required:* Attend next {payload.action_count} lecture(s)",
            ])
        else:
            lines.extend([
                "✅ __ATTENDANCE SECURE__",
                "🎉 Above 75% requirement!",
                f"🏖 *Flexibility:* Can skip up to {payload.action_count} lecture(s)",
            ])

        return "\n".join(lines) + "\n"

    @classmethod
    def format_alert(cls, alert: CourseAlert) -> str:
        """Format a detected course change."""
        return cls.format_payload(alert.payload)

    @classmethod
    def format_error(cls, error_message: str) -> str:
        """
        Format an error notification.

        Args:
            error_message: The error to report

        Returns:
            str: Formatted error message
        """
        return f"Attendance Bot Error: {cls._truncate(error_message, 500)}"
