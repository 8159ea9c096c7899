"""Telegram notification module for the Attendance Bot."""

from attendance_bot.notify.base import Notifier
from attendance_bot.notify.formatters import MessageFormatter
from attendance_bot.notify.telegram import TelegramNotifier

__all__ = ["Notifier", "TelegramNotifier", "MessageFormatter"]
