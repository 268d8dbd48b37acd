"""
Flash-style notifications for page controllers.

A single queue holds messages in two scopes. TRANSIENT messages are shown by
the view rendered for the current response. CARRIED_OVER messages are written
to the session after the response and read back once by a later request.
"""

import logging
from enum import Enum
from typing import Dict, List, Mapping

logger = logging.getLogger(__name__)


class NotifyType(str, Enum):
    SUCCESS = 'success'
    ERROR = 'error'


class NotificationScope(str, Enum):
    TRANSIENT = 'transient'
    CARRIED_OVER = 'carried_over'


def notification_key(namespace: str, notify_type: NotifyType) -> str:
    """Compose the storage key, e.g. 'portal.notifications.success'."""
    return f"{namespace}.notifications.{NotifyType(notify_type).value}"


class NotificationQueue:
    """Ordered notification lists per (scope, severity)."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        self._bags: Dict[NotificationScope, Dict[str, List[str]]] = {
            scope: {} for scope in NotificationScope
        }

    def key_for(self, notify_type: NotifyType) -> str:
        return notification_key(self.namespace, notify_type)

    def add(self, notify_type: NotifyType, message: str, scope: NotificationScope) -> None:
        """Append a message; earlier messages for the same scope and severity are kept."""
        bag = self._bags[NotificationScope(scope)]
        key = self.key_for(notify_type)
        if key not in bag:
            bag[key] = []
        bag[key].append(message)

    def messages(self, notify_type: NotifyType, scope: NotificationScope) -> List[str]:
        """Return a copy of the pending messages without consuming them."""
        return list(self._bags[NotificationScope(scope)].get(self.key_for(notify_type), []))

    def consume(self, notify_type: NotifyType) -> List[str]:
        """
        Read the messages to display for a severity.

        Carried-over messages come first (they were raised by an earlier
        request) and are removed so they are shown only once.
        """
        key = self.key_for(notify_type)
        carried = self._bags[NotificationScope.CARRIED_OVER].pop(key, [])
        transient = self._bags[NotificationScope.TRANSIENT].get(key, [])
        return carried + list(transient)

    def load_carried(self, data: Mapping[str, List[str]]) -> None:
        """Prepend messages restored from the session to the carried-over scope."""
        bag = self._bags[NotificationScope.CARRIED_OVER]
        for notify_type in NotifyType:
            key = self.key_for(notify_type)
            restored = data.get(key)
            if restored:
                bag[key] = list(restored) + bag.get(key, [])

    def pending_carried(self) -> Dict[str, List[str]]:
        """Unread carried-over messages, keyed for the session."""
        return {
            key: list(messages)
            for key, messages in self._bags[NotificationScope.CARRIED_OVER].items()
            if messages
        }
