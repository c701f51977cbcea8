"""
Realtime notifier collaborators.

A notifier publishes an event to an audience string: `user:<id>`,
`property:<id>` or `role:<role>`. The default backend only logs; a
pub/sub backend can be plugged in through NOTIFIER_BACKEND.
"""
import logging

logger = logging.getLogger(__name__)


def user_audience(user_id):
    return f"user:{user_id}"


def property_audience(property_id):
    return f"property:{property_id}"


def role_audience(role):
    return f"role:{role}"


class Notifier:
    """Base notifier; subclasses deliver events somewhere"""

    def notify(self, event: str, audience: str, payload: dict):
        raise NotImplementedError

    def close(self):
        """Release any held connections"""


class LoggingNotifier(Notifier):
    """Writes every event to the log"""

    def notify(self, event, audience, payload):
        logger.info(f"Notify {event} -> {audience} | Payload: {payload}")


class InMemoryNotifier(Notifier):
    """Keeps events in a list; used by tests and local debugging"""

    def __init__(self):
        self.events = []

    def notify(self, event, audience, payload):
        self.events.append((event, audience, payload))

    def close(self):
        self.events.clear()
