from __future__ import annotations

import os
import time
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from .base import Reporter, TaskStatus, TaskRecord, format_stats, get_verbosity

TRANSIENT_ENV = "ENTCOMP_PROGRESS_TRANSIENT"

_STATUS_ICON = {
    TaskStatus.SUCCESS: "✔",
    TaskStatus.FAILED: "✖",
    TaskStatus.SKIPPED: "→",
}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").lower() in ("1", "true", "yes")


class RichReporter(Reporter):
    """Console reporter with rules for sections and live progress bars."""

    supports_progress = True

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True, highlight=False, soft_wrap=False)
        self._transient = _env_flag(TRANSIENT_ENV)
        self.progress: Progress | None = None
        self._tasks: Dict[str, TaskRecord] = {}
        self._task_ids: Dict[str, TaskID] = {}
        self._deferred: List[str] = []

    def _ensure_progress(self) -> Progress:
        if self.progress is None:
            self.progress = Progress(
                SpinnerColumn(spinner_name="dots"),
                TextColumn("{task.fields[name]}", justify="left"),
                BarColumn(bar_width=None),
                TextColumn("{task.completed}/{task.total}"),
                TextColumn("{task.fields[item]}", style="dim"),
                TimeElapsedColumn(),
                transient=self._transient,
                console=self.console,
                expand=True,
            )
            self.progress.start()
        return self.progress

    def _completion_line(self, rec: TaskRecord) -> str:
        icon = _STATUS_ICON.get(rec.status, "")
        count = f" {rec.completed}/{rec.total}" if rec.total is not None else ""
        # stats render as "[k=v ...]", which is not markup
        return escape(
            f"{icon} {rec.name}{count} ({rec.duration:.2f}s){format_stats(rec.meta)}"
        )

    def start_task(
        self, task_id: str, name: str, total: int | None = None, **meta: Any
    ) -> None:
        # tasks without a total render as a header rule only
        if total is None:
            self.console.rule(name)
            return
        progress = self._ensure_progress()
        self._task_ids[task_id] = progress.add_task("", total=total, name=name, item="")
        self._tasks[task_id] = TaskRecord(task_id, name, total, meta=meta)

    def advance(self, task_id: str, step: int = 1, **meta: Any) -> None:
        rec = self._tasks.get(task_id)
        rid = self._task_ids.get(task_id)
        if not rec or rid is None or self.progress is None:
            return
        rec.completed += step
        rec.meta.update(meta)
        item = meta.get("current_item") or ""
        self.progress.update(rid, completed=rec.completed, item=item)

    def end_task(
        self,
        task_id: str,
        status: TaskStatus = TaskStatus.SUCCESS,
        **final_meta: Any,
    ) -> None:
        rec = self._tasks.pop(task_id, None)
        if not rec:
            return
        rec.status = status
        rec.end_time = time.time()
        rec.meta.update(final_meta)
        if status == TaskStatus.SUCCESS and rec.total is not None:
            rec.completed = rec.total
        rid = self._task_ids.pop(task_id, None)
        if rid is not None and self.progress is not None:
            self.progress.update(rid, completed=rec.completed, item="")
        line = self._completion_line(rec)
        if self._transient:
            self._deferred.append(line)
        else:
            self.console.print(line)
        if not self._tasks:
            self.flush()

    def status(self, message: str, **fields: Any) -> None:
        self.console.print(f"[green]INFO[/]: {escape(message)}")

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() < level:
            return
        self.console.print(f"[cyan]VERB{level}[/]: {escape(message)}")

    def error(self, message: str, **fields: Any) -> None:
        self.console.print(f"[bold red]ERROR[/]: {escape(message)}")

    def warning(self, message: str, **fields: Any) -> None:
        self.console.print(f"[yellow]WARN[/]: {escape(message)}")

    def section(self, title: str) -> None:
        self.console.rule(title)

    def flush(self) -> None:
        if self.progress is not None:
            try:
                self.progress.stop()
            finally:
                self.progress = None
                self._task_ids.clear()
        if self._deferred:
            self.console.print("\n".join(self._deferred))
            self._deferred.clear()
