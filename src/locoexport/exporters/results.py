"""Typed results for export tasks and the fan-out barrier.

Multi-format exports (ios, ioscat) run one task per sub-format. Each task
returns an ExportResult; the barrier waits for every task and aggregates
the results into an ExportSummary. Nothing is shared between tasks while
they run, and no task is cancelled because a sibling failed.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from locoexport.enums import TaskStatus
from locoexport.errors import ExportError, LocoError

__all__ = [
    "ExportResult",
    "ExportSummary",
    "guarded",
    "run_export_tasks",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Result of one export task.

    Attributes:
        name: Task name (vendor filter or tag)
        status: Task outcome
        files_written: Number of files written
        error: Exception if the task failed, None otherwise
    """

    name: str
    status: TaskStatus
    files_written: int = 0
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        """Check if the task completed."""
        return self.status == TaskStatus.SUCCESS


@dataclass(frozen=True, slots=True)
class ExportSummary:
    """Immutable aggregate of export task results.

    Attributes:
        results: All task results, in task order
    """

    results: tuple[ExportResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"ExportSummary(total={self.total}, ok={self.successful}, "
            f"failed={self.total - self.successful}, files={self.files_written})"
        )

    @property
    def total(self) -> int:
        """Number of tasks."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of completed tasks."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def files_written(self) -> int:
        """Total files written across tasks."""
        return sum(r.files_written for r in self.results)

    @property
    def all_successful(self) -> bool:
        """Check if every task completed."""
        return self.successful == self.total

    def get_failed(self) -> tuple[ExportResult, ...]:
        """Get all failed results."""
        return tuple(r for r in self.results if not r.is_success)


type ExportTask = Callable[[], ExportResult]


def run_export_tasks(tasks: Sequence[ExportTask], *, label: str) -> ExportSummary:
    """Run tasks concurrently and wait for all of them.

    Args:
        tasks: Callables, each returning an ExportResult
        label: Command name for log and error messages

    Returns:
        Summary of all results

    Raises:
        ExportError: After every task finished, if any of them failed
    """
    with ThreadPoolExecutor(max_workers=max(len(tasks), 1), thread_name_prefix=label) as pool:
        futures = [pool.submit(task) for task in tasks]
        summary = ExportSummary(results=tuple(future.result() for future in futures))

    for failed in summary.get_failed():
        logger.error("Error processing %s (%s): %s", failed.name, failed.status, failed.error)
    logger.info("%s export finished: %r", label, summary)

    if not summary.all_successful:
        msg = f"did not process {summary.total} sets as expected ({summary.successful} succeeded)"
        raise ExportError(msg, summary)
    return summary


def guarded[T](name: str, fetch: Callable[[], T], process: Callable[[T], int]) -> ExportResult:
    """Run one fetch-then-process task, converting failures into a result.

    Fetch failures become FETCH_FAILED, processing failures WRITE_FAILED.
    Only LocoError and OSError are converted; anything else is a bug and
    propagates through the barrier.
    """
    try:
        payload = fetch()
    except LocoError as e:
        return ExportResult(name=name, status=TaskStatus.FETCH_FAILED, error=e)
    logger.info("Processing %s", name)
    try:
        written = process(payload)
    except (LocoError, OSError) as e:
        return ExportResult(name=name, status=TaskStatus.WRITE_FAILED, error=e)
    return ExportResult(name=name, status=TaskStatus.SUCCESS, files_written=written)
