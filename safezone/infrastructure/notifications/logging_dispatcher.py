"""Default notification dispatcher.

Host applications replace it with one that shows a real local notification
or an in-app prompt; this one records the signal in the log and keeps the
notifications that were sent and not cancelled.
"""

from typing import Dict

import structlog

from safezone.domain.interfaces.notifications import INotificationDispatcher, Notification

logger = structlog.get_logger(__name__)


class LoggingNotificationDispatcher(INotificationDispatcher):
    def __init__(self):
        self.active: Dict[str, Notification] = {}

    async def send(self, notification: Notification) -> str:
        self.active[notification.notification_id] = notification
        logger.info(
            "notification_dispatched",
            notification_event=notification.event,
            title=notification.title,
            notification_id=notification.notification_id,
        )
        return notification.notification_id

    async def cancel(self, notification_id: str) -> None:
        if self.active.pop(notification_id, None) is not None:
            logger.info("notification_cancelled", notification_id=notification_id)
