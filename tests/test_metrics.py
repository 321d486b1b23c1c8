import io
from unittest import mock

from shuriken.metrics import Metric, Metrics, ScopedMetric, Stopwatch, get_time_millis


def test_new_metric_starts_empty():
    metrics = Metrics()
    metric = metrics.new_metric("lookup node")
    assert (metric.name, metric.count, metric.sum) == ("lookup node", 0, 0)
    assert metrics.metrics == [metric]


def test_record_reuses_metric_by_name():
    metrics = Metrics()
    for _ in range(3):
        with metrics.record("parse"):
            pass
    with metrics.record("other"):
        pass
    assert [m.name for m in metrics.metrics] == ["parse", "other"]
    assert metrics.metrics[0].count == 3
    assert metrics.metrics[0].sum >= 0


def test_scoped_metric_adds_elapsed_micros():
    metric = Metric("x")
    with mock.patch("time.perf_counter_ns", side_effect=[1_000_000, 3_000_000]):
        with ScopedMetric(metric):
            pass
    assert metric.count == 1
    assert metric.sum == 2000


def test_scoped_metric_without_metric_is_inert():
    scoped = ScopedMetric(None)
    with scoped as entered:
        pass
    assert entered is scoped
    assert scoped.metric is None


def test_report_header_and_row():
    metrics = Metrics()
    metric = metrics.new_metric("canonicalize path")
    metric.count = 2
    metric.sum = 3000
    out = io.StringIO()
    metrics.report(out)
    lines = out.getvalue().splitlines()
    assert lines[0] == "metric           \tcount \tavg (us) \ttotal (ms)"
    assert lines[1] == "canonicalize path\t2     \t1500.0  \t3.0"


def test_report_width_follows_longest_name():
    metrics = Metrics()
    metrics.new_metric("a")
    metrics.new_metric("a much longer name")
    out = io.StringIO()
    metrics.report(out)
    lines = out.getvalue().splitlines()
    assert len(lines) == 3
    width = len("a much longer name")
    assert all(len(line.split("\t")[0]) == width for line in lines)


def test_stopwatch_restart():
    watch = Stopwatch()
    with mock.patch("time.perf_counter_ns", side_effect=[5_000_000_000, 7_500_000_000]):
        watch.restart()
        assert abs(watch.elapsed() - 2.5) < 1e-9


def test_stopwatch_elapsed_grows():
    watch = Stopwatch()
    watch.restart()
    first = watch.elapsed()
    second = watch.elapsed()
    assert 0 <= first <= second


def test_get_time_millis_monotonic():
    a = get_time_millis()
    b = get_time_millis()
    assert a <= b