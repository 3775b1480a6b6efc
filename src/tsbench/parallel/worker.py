"""Worker loop that runs and times the queries routed to one worker."""
from __future__ import annotations

import queue
import threading
import time
from typing import List, Optional, TYPE_CHECKING

from setproctitle import setthreadtitle

if TYPE_CHECKING:
    from tqdm import tqdm

    from tsbench.db.base import QueryExecutor
    from tsbench.parallel.types import QueryInput

__all__ = ["query_worker"]


def query_worker(
        worker_id: int,
        input_queue: queue.Queue[Optional[QueryInput]],
        results_queue: queue.Queue[Optional[List[int]]],
        executor: QueryExecutor,
        progress: Optional[tqdm] = None,
        progress_lock: Optional[threading.Lock] = None,
) -> None:
    """
    Run queries from input_queue until the ``None`` sentinel arrives.

    Every query is timed with a monotonic nanosecond clock. The duration is
    recorded whether or not the executor raised; failures are neither logged
    nor retried and never stop the worker. When the sentinel is received the
    worker's durations (in completion order) are put on results_queue.

    Args:
        worker_id: Worker index, used for the thread title
        input_queue: This worker's private queue of queries
        results_queue: Queue shared by all workers for finished result lists
        executor: Backend that runs a single query
        progress: Optional progress bar advanced once per query
        progress_lock: Lock shared by all workers that update progress
    """
    setthreadtitle(f"tsb:worker[{worker_id:03d}]")

    durations: List[int] = []
    while True:
        query_input = input_queue.get()
        if query_input is None:  # Sentinel: no more work
            break

        start = time.perf_counter_ns()
        try:
            executor.run_cpu_usage_query(
                query_input.host_name,
                query_input.start_time,
                query_input.end_time,
            )
        except Exception:
            pass  # Failed queries still count toward timing
        durations.append(time.perf_counter_ns() - start)

        if progress is not None:
            if progress_lock is None:
                progress.update(1)
            else:
                with progress_lock:
                    progress.update(1)

    results_queue.put(durations)
