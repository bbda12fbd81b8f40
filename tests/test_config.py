import pytest

from geekbot_report.config import (
    DEFAULT_HEADING,
    ConfigError,
    load_settings,
    parse_duration,
    parse_time,
    parse_work_days,
)
from geekbot_report.models import TimeOfDay
from tests.conftest import make_settings


def set_required(env):
    env.setenv("INPUT_GEEKBOT-TOKEN", "gb")
    env.setenv("INPUT_SLACK-TOKEN", "xoxb")
    env.setenv("INPUT_SLACK-CHANNEL", "C42")


def test_defaults(clean_env, tmp_path):
    set_required(clean_env)
    settings = load_settings(str(tmp_path / "missing.env"))

    assert settings.geekbot_token == "gb"
    assert settings.slack_channel == "C42"
    assert settings.heading == DEFAULT_HEADING
    assert settings.start_time == TimeOfDay(6, 0)
    assert settings.due_by_time is None
    assert settings.work_days == frozenset({1, 2, 3, 4, 5})
    assert settings.duration == 5
    assert settings.percentage_basis == "duration"


def test_action_inputs_are_parsed(clean_env, tmp_path):
    set_required(clean_env)
    clean_env.setenv("INPUT_WORK-DAYS", "0123")
    clean_env.setenv("INPUT_START-TIME", "08:15")
    clean_env.setenv("INPUT_DUE-BY-TIME", " 10:00 ")
    clean_env.setenv("INPUT_HEADING", "Standups")
    clean_env.setenv("INPUT_PERCENTAGE-BASIS", "work-days")
    settings = load_settings(str(tmp_path / "missing.env"))

    assert settings.work_days == frozenset({0, 1, 2, 3})
    assert settings.duration == 4
    assert settings.start_time == TimeOfDay(8, 15)
    assert settings.due_by_time == TimeOfDay(10, 0)
    assert settings.heading == "Standups"
    assert settings.percentage_basis == "work-days"


def test_plain_env_names_and_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("GEEKBOT_TOKEN=from-file\nSLACK_TOKEN=xoxb\nSLACK_CHANNEL=C1\nDURATION=7\n", encoding="utf-8")
    settings = load_settings(str(env_file))

    assert settings.geekbot_token == "from-file"
    assert settings.duration == 7


def test_missing_required_input(clean_env, tmp_path):
    clean_env.setenv("INPUT_GEEKBOT-TOKEN", "gb")
    with pytest.raises(ConfigError, match="slack-token"):
        load_settings(str(tmp_path / "missing.env"))


@pytest.mark.parametrize("value,message", [("9:00", "hh:mm"), ("24:00", "24 hours"), ("10:60", "60 minutes"), ("ab:cd", "hh:mm")])
def test_parse_time_rejects_bad_values(value, message):
    with pytest.raises(ConfigError, match=message):
        parse_time("start-time", value)


def test_parse_time_accepts_edges():
    assert parse_time("t", "00:00") == TimeOfDay(0, 0)
    assert parse_time("t", "23:59") == TimeOfDay(23, 59)


@pytest.mark.parametrize("value", ["", "7", "1a", "1,2"])
def test_parse_work_days_rejects_bad_values(value):
    with pytest.raises(ConfigError):
        parse_work_days(value)


@pytest.mark.parametrize("value", ["0", "-2", "five"])
def test_parse_duration_rejects_bad_values(value):
    with pytest.raises(ConfigError):
        parse_duration(value)


def test_settings_validation():
    with pytest.raises(ConfigError):
        make_settings(work_days=frozenset())
    with pytest.raises(ConfigError):
        make_settings(duration=0)
    with pytest.raises(ConfigError):
        make_settings(percentage_basis="calendar")


@pytest.mark.parametrize(
    "overrides",
    [
        {"start_time": TimeOfDay(24, 0)},
        {"start_time": TimeOfDay(6, 60)},
        {"start_time": TimeOfDay(-1, 0)},
        {"due_by_time": TimeOfDay(9, 60)},
        {"due_by_time": TimeOfDay(25, 0)},
    ],
)
def test_settings_rejects_out_of_range_times(overrides):
    with pytest.raises(ConfigError):
        make_settings(**overrides)


def test_time_of_day_renders_as_hh_mm():
    assert str(TimeOfDay(6, 5)) == "06:05"
    assert str(TimeOfDay(23, 59)) == "23:59"
