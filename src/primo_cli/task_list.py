"""Ordered, position-addressed task collection."""

from typing import Iterable, Iterator, List, Optional

from .errors import IndexOutOfRangeError
from .task import Task


class TaskList:
    """The session's tasks in insertion order.

    Indices are 0-based here; the 1-based numbers users type are converted
    by the parser before they reach this class.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self.get(index)

    @property
    def tasks(self) -> List[Task]:
        """A copy of the tasks, safe to hand to callers."""
        return list(self._tasks)

    def _check_index(self, index: int) -> None:
        size = len(self._tasks)
        if index < 0 or index >= size:
            if size == 0:
                message = "There are no tasks in your list yet!"
            else:
                message = (f"Please select within the indexes of the tasklist! "
                           f"(1 to {size}, got {index + 1})")
            raise IndexOutOfRangeError(message, index=index, size=size)

    def add(self, task: Task) -> Task:
        self._tasks.append(task)
        return task

    def get(self, index: int) -> Task:
        self._check_index(index)
        return self._tasks[index]

    def remove(self, index: int) -> Task:
        """Remove and return the task at ``index``; later tasks shift down."""
        self._check_index(index)
        return self._tasks.pop(index)

    def mark(self, index: int) -> Task:
        task = self.get(index)
        task.mark_done()
        return task

    def unmark(self, index: int) -> Task:
        task = self.get(index)
        task.mark_undone()
        return task

    def find(self, keyword: str) -> List[Task]:
        """Tasks whose description contains ``keyword`` (case-sensitive), in list order."""
        return [task for task in self._tasks if keyword in task.description]

    def render(self, tasks: Optional[Iterable[Task]] = None) -> str:
        """Number tasks from 1 as ``1.[T][ ] description``, one per line."""
        source = self._tasks if tasks is None else tasks
        return "\n".join(f"{number}.{task}" for number, task in enumerate(source, start=1))
