"""
TASKCLI - Task Manager
======================
Handles persistence and state transitions for the task tracker.
The JSON task file is loaded once per invocation and saved after every
mutating operation.
"""

import contextlib
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, List, Dict, Union
import logging

from pydantic import ValidationError

from .schema import TaskBook, Task, TaskStatus, task_book_from_legacy

logger = logging.getLogger("taskcli")

DEFAULT_TASKS_FILE = "tasks.json"


class TaskError(Exception):
    """Base class for errors reported back to the user"""


class InvalidArgument(TaskError, ValueError):
    """Malformed id, blank description or unknown status"""


class NotFound(TaskError, LookupError):
    """No task with the requested id"""

    def __init__(self, task_id: int):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class StorageError(TaskError):
    """Task file cannot be read as a task book, or cannot be written"""


def parse_task_id(raw: Union[str, int]) -> int:
    """Convert a command-line id to a positive int"""
    try:
        task_id = int(str(raw).strip())
    except ValueError:
        raise InvalidArgument(f"Invalid task ID: {raw!r}") from None
    if task_id < 1:
        raise InvalidArgument(f"Invalid task ID: {raw!r}")
    return task_id


def parse_status(raw: Union[str, TaskStatus, None]) -> Optional[TaskStatus]:
    """Convert a status filter to TaskStatus (None means no filter)"""
    if raw is None or isinstance(raw, TaskStatus):
        return raw
    if not isinstance(raw, str):
        raise InvalidArgument(f"Unknown status {raw!r}")
    try:
        return TaskStatus(raw.strip().lower())
    except ValueError:
        choices = ", ".join(s.value for s in TaskStatus)
        raise InvalidArgument(f"Unknown status {raw!r} (expected one of: {choices})") from None


class TaskManager:
    """
    Task store backed by a single JSON file.

    Storage: {tasks_file} holding a TaskBook document

    Ids are assigned from TaskBook.next_id and never reused, so an id
    keeps pointing at the same task (or at nothing) for the file's lifetime.
    """

    def __init__(self, tasks_file: Union[str, Path] = DEFAULT_TASKS_FILE):
        self.tasks_file = Path(tasks_file)
        self._book: TaskBook = self.load()

    # ========================================
    # PERSISTENCE OPERATIONS
    # ========================================

    def load(self) -> TaskBook:
        """Load the task book from file (empty book if the file is missing)"""
        if not self.tasks_file.exists():
            logger.debug(f"No task file at {self.tasks_file}, starting empty")
            self._book = TaskBook()
            return self._book

        try:
            with open(self.tasks_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:  # ValueError covers JSONDecodeError and UnicodeDecodeError
            raise StorageError(f"Cannot read task file {self.tasks_file}: {e}") from e

        try:
            if isinstance(data, list):
                book = task_book_from_legacy(data)
                logger.info(f"Migrated {len(book.tasks)} tasks from legacy format in {self.tasks_file}")
            else:
                book = TaskBook.model_validate(data)
        except (ValidationError, KeyError, TypeError) as e:
            raise StorageError(f"Invalid task file {self.tasks_file}: {e}") from e

        highest = max((t.id for t in book.tasks), default=0)
        if book.next_id <= highest:
            logger.warning(f"Repairing next_id in {self.tasks_file}: {book.next_id} -> {highest + 1}")
            book.next_id = highest + 1

        ids = [t.id for t in book.tasks]
        if len(ids) != len(set(ids)):
            raise StorageError(f"Invalid task file {self.tasks_file}: duplicate task ids")

        self._book = book
        logger.debug(f"Loaded {len(book.tasks)} tasks from {self.tasks_file}")
        return book

    def save(self) -> None:
        """Write the task book atomically (temp file, then replace)"""
        self._book.updated_at = datetime.now(timezone.utc)

        tmp = self.tasks_file.with_name(self.tasks_file.name + ".tmp")
        try:
            self.tasks_file.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, 'w', encoding='utf-8') as f:
                json.dump(self._book.model_dump(mode='json'), f, indent=2)
            tmp.replace(self.tasks_file)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StorageError(f"Cannot write task file {self.tasks_file}: {e}") from e

        logger.debug(f"Saved {len(self._book.tasks)} tasks to {self.tasks_file}")

    @property
    def book(self) -> TaskBook:
        return self._book

    # ========================================
    # TASK OPERATIONS
    # ========================================

    def add_task(self, description: str) -> Task:
        """Append a new pending task with the next sequential id"""
        if not isinstance(description, str) or not description.strip():
            raise InvalidArgument("Task description must not be empty")

        task = Task(id=self._book.next_id, description=description)
        self._book.tasks.append(task)
        self._book.next_id += 1
        try:
            self.save()
        except StorageError:
            self._book.tasks.pop()
            self._book.next_id -= 1
            raise

        logger.info(f"Added task {task.id}: {task.description}")
        return task

    def list_tasks(self, status: Union[str, TaskStatus, None] = None) -> List[Task]:
        """Tasks in insertion order, optionally restricted to one status"""
        wanted = parse_status(status)
        if wanted is None:
            return list(self._book.tasks)
        return [t for t in self._book.tasks if t.status == wanted]

    def get_task(self, task_id: int) -> Task:
        """Get task by ID"""
        for task in self._book.tasks:
            if task.id == task_id:
                return task
        raise NotFound(task_id)

    def complete_task(self, task_id: int) -> Task:
        """Mark task as completed"""
        task = self.get_task(task_id)
        if task.is_completed:
            logger.info(f"Task {task_id} already completed")
            return task

        task.status = TaskStatus.COMPLETED
        task.completed_at = datetime.now(timezone.utc)
        try:
            self.save()
        except StorageError:
            task.status = TaskStatus.PENDING
            task.completed_at = None
            raise

        logger.info(f"Completed task {task_id}: {task.description}")
        return task

    def remove_task(self, task_id: int) -> Task:
        """Delete a task and return it"""
        task = self.get_task(task_id)
        index = self._book.tasks.index(task)
        del self._book.tasks[index]
        try:
            self.save()
        except StorageError:
            self._book.tasks.insert(index, task)
            raise

        logger.info(f"Removed task {task_id}: {task.description}")
        return task

    # ========================================
    # REPORTING
    # ========================================

    def status_summary(self) -> Dict[str, int]:
        return self._book.status_summary

    @staticmethod
    def format_task(task: Task) -> str:
        return f"{task.id}. {task.description} ({task.status.label})"
