"""Notification dispatcher interface.

Local notification scheduling lives outside this library; the client only
needs somewhere to send user-facing signals such as "session expired".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping
from uuid import uuid4


@dataclass(frozen=True, slots=True)
class Notification:
    event: str
    title: str
    message: str
    data: Mapping[str, Any] = field(default_factory=dict)
    notification_id: str = field(default_factory=lambda: uuid4().hex)


class INotificationDispatcher(ABC):
    @abstractmethod
    async def send(self, notification: Notification) -> str:
        """Dispatches a notification and returns its id."""
        raise NotImplementedError

    @abstractmethod
    async def cancel(self, notification_id: str) -> None:
        raise NotImplementedError
