# tests/parallel/test_partitioning.py
from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from tsbench.parallel.partitioning import (
    GreedyLoadBalancer,
    count_queries_per_host,
    plan,
    sorted_host_counts,
    worker_loads,
)
from tsbench.parallel.types import QueryInput


DEMANDS = [
    {},
    {"a": 1},
    {"a": 5, "b": 3, "c": 3, "d": 1},
    {f"host_{i:06d}": (i * 7) % 11 + 1 for i in range(40)},
    {"big": 1000, "s1": 1, "s2": 1, "s3": 1},
    {"x": 2, "y": 2, "z": 2, "w": 2},
]


# ---------------------------- Helpers ----------------------------

def _replay(host_counts, num_workers):
    """Independent step-by-step greedy: linear scan for the least loaded worker."""
    sums = [0] * num_workers
    out = {}
    for host, count in sorted(host_counts.items(), key=lambda kv: (-kv[1], kv[0])):
        idx = sums.index(min(sums))
        out[host] = idx
        sums[idx] += count
    return out, sums


# ---------------------------- plan() ----------------------------

@pytest.mark.parametrize("host_counts", DEMANDS)
@pytest.mark.parametrize("num_workers", [1, 2, 3, 8, 64])
def test_assignment_covers_every_host_in_range(host_counts, num_workers):
    assignment = plan(host_counts, num_workers)
    assert set(assignment) == set(host_counts)
    assert all(0 <= w < num_workers for w in assignment.values())


@pytest.mark.parametrize("host_counts", DEMANDS)
@pytest.mark.parametrize("num_workers", [1, 2, 3, 8])
def test_matches_step_by_step_greedy(host_counts, num_workers):
    expected, expected_sums = _replay(host_counts, num_workers)
    assignment = plan(host_counts, num_workers)
    assert assignment == expected
    assert worker_loads(host_counts, assignment, num_workers) == expected_sums


@pytest.mark.parametrize("host_counts", DEMANDS)
@pytest.mark.parametrize("num_workers", [1, 4, 9])
def test_load_is_conserved(host_counts, num_workers):
    loads = worker_loads(host_counts, plan(host_counts, num_workers), num_workers)
    assert len(loads) == num_workers
    assert sum(loads) == sum(host_counts.values())


def test_repeated_calls_are_identical():
    host_counts = DEMANDS[3]
    first = plan(host_counts, 5)
    for _ in range(5):
        assert plan(dict(reversed(list(host_counts.items()))), 5) == first


def test_example_balanced_split():
    host_counts = {"a": 5, "b": 3, "c": 3, "d": 1}
    assignment = plan(host_counts, 2)
    assert worker_loads(host_counts, assignment, 2) == [6, 6]
    assert assignment == {"a": 0, "b": 1, "c": 1, "d": 0}


def test_single_worker_gets_everything():
    assignment = plan({"a": 9, "b": 1, "c": 4}, 1)
    assert set(assignment.values()) == {0}


def test_more_workers_than_hosts_leaves_idle_workers():
    host_counts = {"a": 3, "b": 2}
    loads = worker_loads(host_counts, plan(host_counts, 5), 5)
    assert loads == [3, 2, 0, 0, 0]


def test_dominant_host_stays_on_one_worker():
    host_counts = {"big": 100}
    assert plan(host_counts, 4) == {"big": 0}


def test_equal_counts_visit_hosts_by_name_and_fill_lowest_index():
    assert plan({"b": 1, "a": 1, "c": 1}, 3) == {"a": 0, "b": 1, "c": 2}


def test_empty_demand_returns_empty_assignment():
    assert plan({}, 3) == {}


@pytest.mark.parametrize("bad", [0, -1])
def test_rejects_non_positive_worker_count(bad):
    with pytest.raises(ValueError):
        plan({"a": 1}, bad)


def test_sorted_host_counts_orders_by_count_then_name():
    assert sorted_host_counts({"b": 2, "a": 2, "c": 5}) == [("c", 5), ("a", 2), ("b", 2)]


def test_worker_loads_requires_assignment_for_every_host():
    with pytest.raises(KeyError):
        worker_loads({"a": 1, "b": 1}, {"a": 0}, 2)


# ---------------------------- helpers / balancer ----------------------------

def test_count_queries_per_host():
    t = datetime(2017, 1, 1, tzinfo=timezone.utc)
    qs = [QueryInput(h, t, t) for h in ["h1", "h2", "h1", "h3", "h1"]]
    assert count_queries_per_host(qs) == {"h1": 3, "h2": 1, "h3": 1}
    assert count_queries_per_host([]) == {}


def test_greedy_balancer_logs_worker_loads(caplog):
    with caplog.at_level(logging.INFO, logger="tsbench.parallel.partitioning"):
        out = GreedyLoadBalancer().get_balanced_loads({"a": 5, "b": 3, "c": 3, "d": 1}, 2)
    assert out == plan({"a": 5, "b": 3, "c": 3, "d": 1}, 2)
    assert "[6, 6]" in caplog.text
