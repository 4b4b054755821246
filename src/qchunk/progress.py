"""Rich progress bar usable as an ``on_progress`` callback."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from qchunk.types import ProgressSnapshot


class RichProgressReporter:
    """Render run progress with ``rich.progress``.

    Use as a context manager and pass the instance as ``on_progress``::

        with RichProgressReporter("fetch") as reporter:
            await run_batched(tasks, 10, on_progress=reporter)
    """

    def __init__(self, description: str = "tasks", console: Console | None = None) -> None:
        self._description = description
        self._progress = Progress(
            TextColumn("[bold]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
        )
        self._task_id = self._progress.add_task(description, total=None)
        self._last: ProgressSnapshot | None = None

    @property
    def last_snapshot(self) -> ProgressSnapshot | None:
        """Most recent snapshot, e.g. to recover partial results after an abort."""
        return self._last

    def __call__(self, snapshot: ProgressSnapshot) -> None:
        self._last = snapshot
        rejected = sum(not r.ok for r in snapshot.results)
        description = self._description
        if rejected:
            description = f"{description} [red]({rejected} failed)"
        self._progress.update(
            self._task_id,
            completed=snapshot.done,
            total=snapshot.total,
            description=description,
        )

    def __enter__(self) -> RichProgressReporter:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._progress.stop()
