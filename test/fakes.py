"""Implementações de teste para os ports Logger / NotificationSender."""


class RecordingLogger:
    def __init__(self):
        self.events = []

    def info(self, event, **kw):
        self.events.append(('info', event, kw))

    def error(self, event, **kw):
        self.events.append(('error', event, kw))

    def names(self):
        return [name for _, name, _ in self.events]


class SpySender:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def send_message(self, msg, timeout=10):
        self.calls.append((msg, timeout))
        if self.error is not None:
            raise self.error
