import pytest

from geekbot_report.config import Settings

INPUT_NAMES = [
    "geekbot-token",
    "slack-token",
    "slack-channel",
    "heading",
    "duration",
    "start-time",
    "due-by-time",
    "work-days",
    "percentage-basis",
    "geekbot-api-url",
    "slack-api-url",
    "http-timeout",
]


@pytest.fixture
def clean_env(monkeypatch):
    # register every key so load_dotenv writes are undone
    for name in INPUT_NAMES:
        for key in (f"INPUT_{name.upper()}", name.replace("-", "_").upper()):
            monkeypatch.setenv(key, "")
            monkeypatch.delenv(key)
    return monkeypatch


def make_settings(**overrides):
    values = {
        "geekbot_token": "gb-token",
        "slack_token": "xoxb-token",
        "slack_channel": "C123",
    }
    values.update(overrides)
    return Settings(**values)
