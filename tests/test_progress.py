import io
from datetime import timedelta

import pytest

from rustico.bytesize import format_bytes
from rustico.progress import (
    Progress,
    ProgressKind,
    ProgressOptions,
    fmt_duration,
    format_duration,
    parse_duration,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_parse_duration_units():
    assert parse_duration("1m 30s") == timedelta(minutes=1, seconds=30)
    assert parse_duration("100ms") == timedelta(milliseconds=100)
    assert parse_duration("2h") == parse_duration("120min")


@pytest.mark.parametrize("text", ["", "abc", "10 lightyears", "1.5s", "5"])
def test_parse_duration_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)


@pytest.mark.parametrize(
    "duration",
    [timedelta(0), timedelta(seconds=1), timedelta(milliseconds=250),
     timedelta(hours=3, minutes=2, seconds=1), timedelta(days=40, microseconds=7)],
)
def test_duration_round_trip(duration):
    assert parse_duration(format_duration(duration)) == duration


def test_fmt_duration():
    assert fmt_duration(0) == "[00:00:00]"
    assert fmt_duration(59.9) == fmt_duration(59)
    assert fmt_duration(timedelta(seconds=75)) == fmt_duration(75)


def test_options_defaults_and_merge():
    options = ProgressOptions()
    assert options.interval() == timedelta(0)
    options.merge(ProgressOptions(True, timedelta(seconds=2)))
    assert options.no_progress is True
    assert options.interval() == timedelta(seconds=2)
    options.merge(ProgressOptions(False, timedelta(seconds=9)))
    assert options.progress_interval == timedelta(seconds=2)
    assert options.no_progress is True


def test_options_dict_round_trip():
    options = ProgressOptions(True, timedelta(milliseconds=500))
    assert ProgressOptions.from_dict(options.to_dict()) == options
    assert ProgressOptions.from_dict({}) == ProgressOptions()


def test_options_reject_unknown_field():
    with pytest.raises(ValueError):
        ProgressOptions.from_dict({"progress": True})


def test_no_progress_gives_hidden():
    options = ProgressOptions(no_progress=True)
    for progress in (
        options.progress_spinner("scan"),
        options.progress_counter("scan"),
        options.progress_bytes("scan"),
        options.progress_hidden(),
    ):
        assert progress.is_hidden()
        assert progress.message() == ""


def test_factory_kinds(capsys):
    options = ProgressOptions()
    assert options.progress_counter("a").kind is ProgressKind.COUNTER
    assert options.progress_bytes("a").kind is ProgressKind.BYTES
    assert options.progress_spinner("a").is_hidden() is False


def test_ratio():
    progress = Progress(ProgressKind.COUNTER)
    assert progress.ratio() == 0.0
    progress.set_length(0)
    assert progress.ratio() == 0.0
    progress.set_length(4)
    progress.inc(1)
    assert progress.ratio() == 0.25


def test_spinner_message():
    clock = FakeClock()
    progress = Progress(ProgressKind.SPINNER, "scan", clock=clock)
    clock.now = 5
    assert progress.message() == f"{fmt_duration(5)} scan"
    progress.set_title("read")
    assert progress.message() == f"{fmt_duration(5)} read"


def test_counter_message_with_eta():
    clock = FakeClock()
    progress = Progress(ProgressKind.COUNTER, "files", clock=clock)
    progress.set_length(10)
    progress.inc(5)
    clock.now = 10
    assert progress.message() == "[00:00:10] files 5/10 ETA: [00:00:11]"


def test_counter_message_without_length():
    clock = FakeClock()
    progress = Progress(ProgressKind.COUNTER, "files", clock=clock)
    progress.inc(7)
    clock.now = 3
    assert progress.message() == f"{fmt_duration(3)} files 7 ETA: -"


def test_counter_message_complete_has_no_eta():
    progress = Progress(ProgressKind.COUNTER, "files", clock=FakeClock())
    progress.set_length(10)
    progress.inc(10)
    assert progress.message().endswith("10/10")


def test_bytes_message():
    progress = Progress(ProgressKind.BYTES, "data", clock=FakeClock())
    progress.set_length(4096)
    progress.inc(2048)
    expected = (
        f"{fmt_duration(0)} data {format_bytes(2048)}/{format_bytes(4096)}"
        f" ETA: {fmt_duration(1)}"
    )
    assert progress.message() == expected


def test_rendering_to_output():
    out = io.StringIO()
    progress = Progress(ProgressKind.COUNTER, "files", output=out, clock=FakeClock())
    progress.inc(3)
    assert progress.message() in out.getvalue()
    progress.finish()
    assert progress.finished is True
    assert out.getvalue().endswith("done\n")


def test_rendering_is_throttled_by_interval():
    out = io.StringIO()
    clock = FakeClock()
    progress = Progress(
        ProgressKind.COUNTER, "x", output=out, interval=timedelta(seconds=10), clock=clock
    )
    progress.inc(1)
    first = out.getvalue()
    progress.inc(1)
    assert out.getvalue() == first
    clock.now = 11
    progress.inc(1)
    assert out.getvalue().endswith(progress.message())