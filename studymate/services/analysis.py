"""Background aggregation over a frozen view of courses and assignments."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
import logging
import threading
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from studymate.domain.models import Assignment, Course

logger = logging.getLogger(__name__)


class PendingCreditAnalysis:
    """Sum of credit hours attributable to every non-completed assignment.

    Inputs are copied at construction time, so later mutations of the
    service's collections (or of the entities themselves) cannot leak into
    a running analysis.
    """

    def __init__(self, courses: Mapping[int, Course], assignments: Iterable[Assignment]):
        self.credits_by_course: Mapping[int, int] = MappingProxyType(
            {course_id: int(course.credit_hours) for course_id, course in courses.items()}
        )
        self.pending: tuple[tuple[int, int], ...] = tuple(
            (a.id, a.course_id) for a in assignments if not a.is_completed
        )

    def __call__(self) -> int:
        total = 0
        for _assignment_id, course_id in self.pending:
            total += self.credits_by_course.get(course_id, 0)
        logger.info("Pending credit analysis finished: %d credit hours over %d assignments", total, len(self.pending))
        return total


_executor: Optional[ThreadPoolExecutor] = None
_executor_workers = 0
_executor_lock = threading.Lock()


def _get_executor(max_workers: int = 2) -> ThreadPoolExecutor:
    """Shared pool sized to ``max_workers``.

    Asking for a different size replaces the pool; work already queued on the
    old one still runs to completion. Callers hold ``_executor_lock``.
    """
    global _executor, _executor_workers
    if _executor is not None and _executor_workers != max_workers:
        logger.debug("Resizing analysis pool from %d to %d workers", _executor_workers, max_workers)
        _executor.shutdown(wait=False)
        _executor = None
    if _executor is None:
        _executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="studymate-analysis")
        _executor_workers = max_workers
    return _executor


def submit(task: PendingCreditAnalysis, *, max_workers: int = 2) -> "Future[int]":
    """Run the analysis off the caller's thread; ``result()`` blocks until done."""
    with _executor_lock:
        return _get_executor(max_workers).submit(task)


def shutdown(wait: bool = True) -> None:
    global _executor, _executor_workers
    with _executor_lock:
        if _executor is not None:
            _executor.shutdown(wait=wait)
            _executor = None
            _executor_workers = 0
