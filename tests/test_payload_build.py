from __future__ import annotations

from logslack.core.notifications.builder import NotificationBuilder
from logslack.core.notifications.events import LogEvent


def test_username_gets_logger_suffix_and_env_expansion(monkeypatch) -> None:
    monkeypatch.setenv("BOT_NAME", "deploy-bot")
    builder = NotificationBuilder(username="$BOT_NAME", username_append_logger_name=True, process_name="p", machine_name="m")

    payload = builder.build(LogEvent(level_name="INFO", logger_name="app.deploy", message="done"))

    assert payload.username == "deploy-bot - app.deploy"
    assert payload.text == "done"


def test_channel_and_icon_are_expanded_on_every_event(monkeypatch) -> None:
    builder = NotificationBuilder(channel="%ALERT_CHANNEL%", icon_emoji="${ALERT_EMOJI}", process_name="p", machine_name="m")
    event = LogEvent(level_name="ERROR", logger_name="app", message="x")

    monkeypatch.setenv("ALERT_CHANNEL", "#ops")
    monkeypatch.setenv("ALERT_EMOJI", ":fire:")
    first = builder.build(event)
    monkeypatch.setenv("ALERT_CHANNEL", "#oncall")
    second = builder.build(event)

    assert first.channel == "#ops"
    assert first.icon_emoji == ":fire:"
    assert second.channel == "#oncall"


def test_attachment_toggle_and_link_names() -> None:
    event = LogEvent(level_name="INFO", logger_name="app", message="x")

    plain = NotificationBuilder(add_attachment=False, process_name="p", machine_name="m").build(event)
    linked = NotificationBuilder(link_names=True, process_name="p", machine_name="m").build(event, text="rendered")

    assert plain.attachments == ()
    assert plain.link_names == 0
    assert len(linked.attachments) == 1
    assert linked.link_names == 1
    assert linked.text == "rendered"


def test_unset_username_stays_unset() -> None:
    payload = NotificationBuilder(process_name="p", machine_name="m").build(LogEvent(level_name="INFO", logger_name="a", message="x"))

    assert payload.username is None
    assert payload.channel is None
