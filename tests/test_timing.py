import io
import re

import pytest

from tfhepoly.log import LogError
from tfhepoly.timing import ChronoTimer, StopWatch


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def advance_ms(self, ms):
        self.now += ms / 1000

    def __call__(self):
        return self.now


def test_timer_not_started_raises():
    timer = ChronoTimer(FakeClock())
    assert timer.is_started() is False
    with pytest.raises(LogError):
        timer.elapsed_ms()


def test_timer_measures_elapsed_time():
    clock = FakeClock()
    timer = ChronoTimer(clock)
    timer.start()
    assert timer.is_started() is True
    delta = 250
    clock.advance_ms(delta)
    assert timer.elapsed_ms() == delta


def test_timer_clear_stops_it():
    clock = FakeClock()
    timer = ChronoTimer(clock)
    timer.start()
    timer.clear()
    assert timer.is_started() is False
    with pytest.raises(LogError):
        timer.elapsed_ms()


def test_timer_restart_resets_origin():
    clock = FakeClock()
    timer = ChronoTimer(clock)
    timer.start()
    clock.advance_ms(500)
    timer.start()
    delta = 125
    clock.advance_ms(delta)
    assert timer.elapsed_ms() == delta


def test_real_clock_is_non_negative():
    timer = ChronoTimer()
    timer.start()
    assert timer.elapsed_ms() >= 0


def test_stopwatch_start_message():
    stream = io.StringIO()
    sw = StopWatch(stream, "bench", False)
    assert sw.is_started() is False
    sw.start("go")
    assert stream.getvalue() == "bench go\n"
    assert sw.is_started() is True


def test_stopwatch_start_without_message_writes_nothing():
    stream = io.StringIO()
    sw = StopWatch(stream, "bench", False)
    sw.start()
    assert stream.getvalue() == ""
    assert sw.is_started() is True


def test_stopwatch_default_activity_name():
    stream = io.StringIO()
    sw = StopWatch(stream)
    sw.start("start")
    assert stream.getvalue().endswith("StopWatch start\n")


def test_stopwatch_stop_reports_and_clears():
    stream = io.StringIO()
    sw = StopWatch(stream, "bench", False)
    sw.start()
    ms = sw.stop()
    assert ms >= 0
    assert stream.getvalue() == f"bench stop {ms}ms\n"
    assert sw.is_started() is False
    with pytest.raises(LogError):
        sw.stop()


def test_stopwatch_stop_custom_event():
    stream = io.StringIO()
    sw = StopWatch(stream, "bench", False)
    sw.start()
    ms = sw.stop("done")
    assert stream.getvalue() == f"bench done {ms}ms\n"


def test_stopwatch_started_on_construction():
    sw = StopWatch(io.StringIO(), "bench", True)
    assert sw.is_started() is True
    assert sw.lap() >= 0


def test_stopwatch_not_started_when_asked():
    sw = StopWatch(io.StringIO(), "bench", False)
    assert sw.is_started() is False
    with pytest.raises(LogError):
        sw.lap()


def test_stopwatch_laps_add_up_to_at_most_total():
    stream = io.StringIO()
    sw = StopWatch(stream, "bench", False)
    sw.start()
    first = sw.lap()
    second = sw.lap()
    assert first >= 0
    assert second >= 0
    total = sw.stop()
    assert first + second <= total


def test_stopwatch_show_prints_to_stdout(capsys):
    stream = io.StringIO()
    sw = StopWatch(stream, "bench", False)
    sw.start()
    sw.show(": ")
    assert re.fullmatch(r"bench: \d+ms\n", capsys.readouterr().out)
    assert stream.getvalue() == ""