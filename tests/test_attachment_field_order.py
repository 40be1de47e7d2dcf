from __future__ import annotations

from logslack.core.notifications.builder import TRACE_CHUNK_SIZE, NotificationBuilder
from logslack.core.notifications.events import ExceptionInfo, LogEvent


def _builder(**kwargs) -> NotificationBuilder:
    return NotificationBuilder(process_name="worker", machine_name="host-1", **kwargs)


def test_fields_without_exception() -> None:
    event = LogEvent(level_name="INFO", logger_name="app.jobs", message="started")

    attachment = _builder().build_attachment(event)

    assert [f.title for f in attachment.fields] == ["Logger", "Process", "Machine"]
    assert all(f.short for f in attachment.fields)
    assert attachment.fallback == "[INFO] app.jobs in worker on host-1"
    assert attachment.color == ""
    assert attachment.mrkdwn_in == ["fields"]


def test_field_order_with_multi_chunk_exception_trace() -> None:
    trace = "t" * (TRACE_CHUNK_SIZE * 2 + 5)
    event = LogEvent(
        level_name="ERROR",
        logger_name="app.db",
        message="query failed",
        exception=ExceptionInfo(message="connection reset", type_name="OperationalError", stack_trace=trace),
    )

    attachment = _builder().build_attachment(event)

    assert [f.title for f in attachment.fields] == [
        "Exception Message",
        "Exception Trace",
        "Exception Trace 2",
        "Exception Trace 3",
        "Exception Type",
        "Logger",
        "Process",
        "Machine",
    ]
    message_field = attachment.fields[0]
    assert message_field.value == "connection reset"
    assert message_field.short is False
    assert attachment.fields[4].value == "OperationalError"
    assert attachment.fields[4].short is True
    traces = [f.value for f in attachment.fields[1:4]]
    assert all(value.startswith("```") and value.endswith("```") for value in traces)
    assert "".join(value[3:-3] for value in traces) == trace
    assert attachment.color == "danger"


def test_logger_field_omitted_when_appended_to_username() -> None:
    event = LogEvent(
        level_name="WARNING",
        logger_name="app.api",
        message="slow",
        exception=ExceptionInfo(message="late", type_name="TimeoutError", stack_trace="frame\n"),
    )

    attachment = _builder(username_append_logger_name=True).build_attachment(event)

    assert [f.title for f in attachment.fields] == [
        "Exception Message",
        "Exception Trace",
        "Exception Type",
        "Process",
        "Machine",
    ]


def test_trace_fields_skipped_when_disabled_or_blank() -> None:
    with_trace = LogEvent(
        level_name="ERROR",
        logger_name="app",
        message="boom",
        exception=ExceptionInfo(message="boom", type_name="ValueError", stack_trace="frame\n"),
    )
    blank_trace = LogEvent(
        level_name="ERROR",
        logger_name="app",
        message="boom",
        exception=ExceptionInfo(message="boom", type_name="ValueError", stack_trace="   \n"),
    )

    disabled = _builder(add_exception_trace_field=False).build_attachment(with_trace)
    blank = _builder().build_attachment(blank_trace)

    expected = ["Exception Message", "Exception Type", "Logger", "Process", "Machine"]
    assert [f.title for f in disabled.fields] == expected
    assert [f.title for f in blank.fields] == expected


def test_exception_info_from_raised_exception() -> None:
    try:
        raise KeyError("missing")
    except KeyError as exc:
        info = ExceptionInfo.from_exception(exc)

    assert info.type_name == "KeyError"
    assert info.message == "'missing'"
    assert "test_exception_info_from_raised_exception" in info.stack_trace
