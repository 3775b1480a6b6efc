# tests/test_reporter.py
from datetime import datetime

from tsbench.reporter import format_final_summary, print_final_summary, print_pipeline_header
from tsbench.stats import QueryStats, summarize
from tsbench.utilities.display import format_duration_ns, format_integer, truncate_path_to_fit


def test_format_integer_groups_digits():
    assert format_integer(0) == "0"
    assert format_integer(999) == "999"
    assert format_integer(1234567) == "1,234,567"
    assert format_integer(None) == "n/a"


def test_format_duration_ns_units():
    assert format_duration_ns(950) == "950 ns"
    assert format_duration_ns(1_500) == "1.50 µs"
    assert format_duration_ns(1_536_000) == "1.54 ms"
    assert format_duration_ns(2_500_000_000) == "2.50 s"


def test_truncate_path_to_fit():
    assert truncate_path_to_fit("/short", "P: ", 50) == "/short"
    out = truncate_path_to_fit("/a/very/long/path/to/queries.csv", "Prefix: ", 20)
    assert out.startswith("...")
    assert len(out) == 12


def test_final_summary_lists_statistics():
    text = format_final_summary(summarize([1000, 3000, 2_000_000]), 5_000_000)
    assert "Stats in Nanosecond" in text
    assert "Total number of queries ran:  3" in text
    assert "5,000,000" in text
    assert "Median:                       3,000" in text
    assert "Max:                          2,000,000" in text
    assert "Min:                          1,000" in text


def test_final_summary_without_data():
    text = format_final_summary(QueryStats.no_data(), 12)
    assert "Total number of queries ran:  0" in text
    assert "No queries were run" in text
    assert "Median" not in text


def test_print_functions(capsys):
    start = datetime(2024, 5, 1, 12, 0, 0)
    print_pipeline_header(
        start_time=start,
        query_file="/data/query_params.csv",
        db_target="postgres://bench@postgres:5432/homework",
        total_queries=200,
        total_hosts=10,
        workers=3,
        worker_loads=[67, 67, 66],
    )
    print_final_summary(
        start_time=start,
        end_time=datetime(2024, 5, 1, 12, 0, 5),
        stats=summarize([10, 20]),
        total_elapsed_ns=40,
    )
    out, _ = capsys.readouterr()
    assert "Start Time: 2024-05-01 12:00:00" in out
    assert "Queries per worker:   [67, 67, 66]" in out
    assert "Total Runtime: 0:00:05" in out
