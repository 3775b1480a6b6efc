"""Worker pool that fans queries out to per-worker queues and gathers timings."""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import List, Mapping, Optional, Sequence, Tuple, TYPE_CHECKING

from .types import QueryInput
from .worker import query_worker

if TYPE_CHECKING:
    from tqdm import tqdm

    from tsbench.db.base import QueryExecutor

logger = logging.getLogger(__name__)

__all__ = ["run_worker_pool"]


def _check_assignment(
        query_inputs: Sequence[QueryInput],
        host_to_worker: Mapping[str, int],
        num_workers: int,
) -> None:
    """Fail before dispatching anything if a query cannot be routed."""
    for host_name in {q.host_name for q in query_inputs}:
        if host_name not in host_to_worker:
            raise KeyError(f"No worker assigned to host {host_name!r}")
        worker = host_to_worker[host_name]
        if not 0 <= worker < num_workers:
            raise ValueError(
                f"Host {host_name!r} assigned to worker {worker}, "
                f"expected 0..{num_workers - 1}"
            )


def run_worker_pool(
        query_inputs: Sequence[QueryInput],
        host_to_worker: Mapping[str, int],
        num_workers: int,
        executor: QueryExecutor,
        *,
        queue_depth: int = 1,
        progress: Optional[tqdm] = None,
) -> Tuple[List[int], int]:
    """
    Run every query on its assigned worker and collect the timings.

    One thread is started per worker, each with its own bounded input queue.
    Queries are routed in their original order, so each worker sees its hosts'
    queries in file order. After routing, every input queue receives a
    ``None`` sentinel. A supervisor thread joins all workers, records the
    total elapsed time and then closes the shared results queue with its own
    sentinel; this call drains that queue until the sentinel arrives.

    No timeout exists: a query that never returns blocks its worker, the
    join and therefore this call.

    Args:
        query_inputs: Queries to run, in dispatch order
        host_to_worker: Mapping of host name to worker index
        num_workers: Number of workers (must be >= 1)
        executor: Backend that runs a single query (shared by all workers)
        queue_depth: Capacity of each worker's input queue; 1 approximates a
            synchronous hand-off between the dispatcher and the worker
        progress: Optional progress bar advanced once per finished query

    Returns:
        Tuple of (durations_ns, total_elapsed_ns)
        - durations_ns: One entry per query; order across workers unspecified
        - total_elapsed_ns: Time from the start of dispatch until the last
          worker finished

    Raises:
        ValueError: If num_workers or queue_depth < 1, or an assignment points
            outside the worker range
        KeyError: If a queried host has no assigned worker
    """
    if num_workers < 1:
        raise ValueError(f"num_workers must be >= 1, got {num_workers}")
    if queue_depth < 1:
        raise ValueError(f"queue_depth must be >= 1, got {queue_depth}")

    _check_assignment(query_inputs, host_to_worker, num_workers)

    input_queues: List[queue.Queue] = [
        queue.Queue(maxsize=queue_depth) for _ in range(num_workers)
    ]
    results_queue: queue.Queue = queue.Queue(maxsize=num_workers)

    progress_lock = threading.Lock()  # tqdm.update is not thread-safe
    workers = []
    for worker_id, input_queue in enumerate(input_queues):
        thread = threading.Thread(
            target=query_worker,
            args=(
                worker_id, input_queue, results_queue, executor,
                progress, progress_lock,
            ),
            name=f"tsb:worker-{worker_id}",
            daemon=True,
        )
        thread.start()
        workers.append(thread)

    logger.info(
        "Started %d workers for %d queries", num_workers, len(query_inputs)
    )

    total_elapsed_ns = 0
    processing_start = time.perf_counter_ns()

    for query_input in query_inputs:
        input_queues[host_to_worker[query_input.host_name]].put(query_input)

    # Close every input queue
    for input_queue in input_queues:
        input_queue.put(None)

    def supervise() -> None:
        nonlocal total_elapsed_ns
        for thread in workers:
            thread.join()
        total_elapsed_ns = time.perf_counter_ns() - processing_start
        results_queue.put(None)

    supervisor = threading.Thread(
        target=supervise, name="tsb:supervisor", daemon=True
    )
    supervisor.start()

    durations: List[int] = []
    while True:
        worker_results = results_queue.get()
        if worker_results is None:  # Sentinel: all workers finished
            break
        durations.extend(worker_results)

    # Sentinel was put after total_elapsed_ns was written
    supervisor.join()

    logger.info(
        "All workers finished: %d queries in %s ns",
        len(durations),
        f"{total_elapsed_ns:,}",
    )
    return durations, total_elapsed_ns
