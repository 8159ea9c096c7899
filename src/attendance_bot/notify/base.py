"""Notifier interface."""

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Delivers a rendered text message somewhere a human will read it."""

    @abstractmethod
    def send_message(self, message: str) -> bool:
        """
        Send a message.

        Implementations swallow delivery errors and return False instead.
        """
