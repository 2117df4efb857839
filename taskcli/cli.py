#!/usr/bin/env python3
"""
TASKCLI - CLI Interface
=======================
Command-line tool for tracking tasks in a local JSON file.

Usage:
    taskcli add "Write the report"
    taskcli list
    taskcli list --filter pending
    taskcli complete 1
    taskcli remove 1
"""

import argparse
import json
import logging
import os
import sys
from typing import Optional, Sequence

from .manager import DEFAULT_TASKS_FILE, TaskError, TaskManager, parse_task_id
from .schema import TaskStatus

ENV_TASKS_FILE = "TASKCLI_FILE"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskcli",
        description="Task Manager CLI - manage pending tasks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  taskcli add "Buy milk"             Add a new task
  taskcli list                       List all tasks
  taskcli list --filter completed    List completed tasks only
  taskcli complete 2                 Mark task 2 as completed
  taskcli remove 2                   Remove task 2
        """
    )
    parser.add_argument(
        "--file",
        default=os.environ.get(ENV_TASKS_FILE, DEFAULT_TASKS_FILE),
        help=f"Task file (default: ${ENV_TASKS_FILE} or {DEFAULT_TASKS_FILE})"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ADD command
    add_parser = subparsers.add_parser("add", help="Add a new task")
    add_parser.add_argument("description", nargs="+", help="Task description")

    # LIST command
    list_parser = subparsers.add_parser("list", help="List the tasks")
    list_parser.add_argument(
        "--filter",
        choices=[s.value for s in TaskStatus],
        help="Filter by 'pending' or 'completed'"
    )
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # COMPLETE command
    complete_parser = subparsers.add_parser("complete", help="Mark a task as completed")
    complete_parser.add_argument("task_id", help="Task ID")

    # REMOVE command
    remove_parser = subparsers.add_parser("remove", help="Remove a task")
    remove_parser.add_argument("task_id", help="Task ID")

    return parser


def run(args: argparse.Namespace) -> int:
    manager = TaskManager(tasks_file=args.file)

    if args.command == "add":
        task = manager.add_task(" ".join(args.description))
        print(f"Task '{task.description}' added successfully! (id {task.id})")

    elif args.command == "list":
        tasks = manager.list_tasks(args.filter)

        if args.json:
            print(json.dumps([t.model_dump(mode='json') for t in tasks], indent=2))
        elif not tasks:
            print("No tasks found.")
        else:
            for task in tasks:
                print(manager.format_task(task))
            summary = manager.status_summary()
            print("-" * 40)
            print(", ".join(f"{count} {status}" for status, count in summary.items()))

    elif args.command == "complete":
        task = manager.complete_task(parse_task_id(args.task_id))
        print(f"Task {task.id} marked as completed!")

    elif args.command == "remove":
        task = manager.remove_task(parse_task_id(args.task_id))
        print(f"Task '{task.description}' removed successfully!")

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        return run(args)
    except TaskError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
