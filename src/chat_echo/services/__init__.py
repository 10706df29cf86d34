"""Services for chat-echo."""

from chat_echo.services.config_service import ConfigService

__all__ = ["ConfigService"]
