from .logging_dispatcher import LoggingNotificationDispatcher

__all__ = ["LoggingNotificationDispatcher"]
