"""
Telegram Bot API client.

Sends notifications via Telegram Bot API.
https://core.telegram.org/bots/api
"""

import logging
from typing import Optional

import requests

from attendance_bot.config import Settings, get_settings
from attendance_bot.notify.base import Notifier

logger = logging.getLogger(__name__)

# Telegram Bot API endpoint
TELEGRAM_API_URL = "https://api.telegram.org/bot{token}/sendMessage"


class TelegramNotifier(Notifier):
    """
    Telegram Bot API client for sending notifications.

    Uses Telegram's Bot API to send text messages to a configured
    chat (user, group, or channel).
    """

    def __init__(
        self,
        token: Optional[str] = None,
        chat_id: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize Telegram notifier.

        Args:
            token: Telegram Bot API token (from @BotFather)
            chat_id: Telegram chat ID (user, group, or channel)
            settings: Optional settings instance, used for missing arguments
        """
        if token is None or chat_id is None:
            settings = settings or get_settings()
            token = token or settings.telegram_bot_token
            chat_id = chat_id or settings.telegram_chat_id

        self.token = token
        self.chat_id = chat_id

        self.api_url = TELEGRAM_API_URL.format(token=self.token)
        self.session = requests.Session()

    def send_message(self, message: str, parse_mode: str = "Markdown") -> bool:
        """
        Send a text message via Telegram.

        Args:
            message: The message text to send
            parse_mode: Message formatting mode (Markdown or HTML)

        Returns:
            bool: True if message was sent successfully
        """
        if not self.token or not self.chat_id:
            logger.warning("Telegram bot token or chat ID not set. Skipping message.")
            return False

        payload = {
            "chat_id": self.chat_id,
            "text": message,
            "parse_mode": parse_mode,
            "disable_web_page_preview": True,
        }

        try:
            response = self.session.post(self.api_url, json=payload, timeout=30)

            if response.status_code == 200:
                data = response.json()
                if data.get("ok"):
                    message_id = data.get("result", {}).get("message_id", "unknown")
                    logger.info(f"Telegram message sent successfully: {message_id}")
                    return True
                else:
                    logger.error(f"Telegram API error: {data.get('description')}")
                    return False
            else:
                logger.error(
                    f"Telegram API error: {response.status_code} - {response.text}"
                )
                return False

        except requests.exceptions.Timeout:
            logger.error("Telegram API request timed out")
            return False
        except requests.exceptions.RequestException as e:
            logger.error(f"Telegram API request failed: {e}")
            return False
        except ValueError as e:
            logger.error(f"Telegram API returned invalid JSON: {e}")
            return False
