from inquiry.core import logging as logging_module
from inquiry.core.config import settings


class RecordingLogger:
    def __init__(self):
        self.sinks = []

    def remove(self):
        self.sinks.clear()

    def configure(self, **kwargs):
        self.configured = kwargs

    def add(self, sink, **kwargs):
        self.sinks.append(kwargs)


def test_sink_level_follows_setting(monkeypatch):
    recorder = RecordingLogger()
    monkeypatch.setattr(logging_module, "logger", recorder)
    monkeypatch.setattr(settings, "LOG_LEVEL", "debug")

    logging_module.setup_logging(settings.LOG_LEVEL)

    assert [sink["level"] for sink in recorder.sinks] == ["DEBUG"]
    assert recorder.sinks[0]["serialize"] is True
    assert recorder.configured["patcher"] is logging_module._patch_record
