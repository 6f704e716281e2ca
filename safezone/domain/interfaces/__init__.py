"""Domain interfaces.

Components depend on these abstractions; concrete implementations live in
``safezone.infrastructure`` and are wired together by the client container.
"""

from .credential_store import ICredentialStore
from .notifications import INotificationDispatcher, Notification
from .request_executor import IRequestExecutor
from .storage import IKeyValueStorage

__all__ = [
    "ICredentialStore",
    "IKeyValueStorage",
    "INotificationDispatcher",
    "IRequestExecutor",
    "Notification",
]
