"""
TASKCLI - Command-Line Task Tracker
===================================

Add, list, complete and remove tasks kept in a local JSON file.

Usage:
    from taskcli import TaskManager

    manager = TaskManager("tasks.json")
    task = manager.add_task("Write the report")
    manager.complete_task(task.id)
    print(manager.list_tasks("completed"))
"""

from .schema import (
    TaskBook,
    Task,
    TaskStatus,
    task_book_from_legacy
)

from .manager import (
    TaskManager,
    TaskError,
    InvalidArgument,
    NotFound,
    StorageError,
    parse_task_id
)

__version__ = "1.0.0"
__all__ = [
    "TaskManager",
    "TaskBook",
    "Task",
    "TaskStatus",
    "task_book_from_legacy",
    "TaskError",
    "InvalidArgument",
    "NotFound",
    "StorageError",
    "parse_task_id"
]
