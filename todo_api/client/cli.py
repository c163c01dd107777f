"""
Todo API Client - Command Line Interface

    todo register alice
    todo login alice
    todo add "Buy milk" --due 2024-05-01
    todo list
    todo done <id>
    todo logout

Task commands need a stored session; without one they ask the user to log in.
"""

import argparse
import asyncio
import getpass
import logging
import os
import sys
from datetime import date
from typing import List, Optional

import httpx

from todo_api.client.api import ClientError, NotAuthenticated, TodoClient, TokenRejected
from todo_api.client.token_store import FileTokenStore, TokenStore
from todo_api.tasks.schemas import TaskResponse

DEFAULT_API_URL = "http://localhost:8000"

TASK_COMMANDS = {"list", "add", "show", "edit", "done", "undone", "delete"}


def format_due_date(value: Optional[date]) -> str:
    return value.strftime("%Y-%m-%d") if value else "-"


def render_task(task: TaskResponse) -> str:
    """One line per task: status box, due date, title, id."""
    mark = "x" if task.completed else " "
    return f"[{mark}] {format_due_date(task.due_date):<10}  {task.title}  ({task.id})"


def render_task_details(task: TaskResponse) -> str:
    lines = [
        render_task(task),
        f"    description: {task.description or '-'}",
        f"    created:     {task.created_at.isoformat()}",
        f"    updated:     {task.updated_at.isoformat()}",
    ]
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo", description="Multi-user to-do list client")
    parser.add_argument(
        "--api-url",
        default=os.getenv("TODO_API_URL", DEFAULT_API_URL),
        help="Base URL of the Todo API (env TODO_API_URL)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("register", "Create an account"), ("login", "Log in and store the token")):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("username")
        sub.add_argument("--password", help="Password (prompted for when omitted)")

    commands.add_parser("logout", help="Forget the stored token")
    commands.add_parser("list", help="List todos, soonest due first")

    add = commands.add_parser("add", help="Create a todo")
    add.add_argument("title")
    add.add_argument("--description")
    add.add_argument("--due", type=date.fromisoformat, help="Due date, YYYY-MM-DD")

    show = commands.add_parser("show", help="Show one todo")
    show.add_argument("id")

    edit = commands.add_parser("edit", help="Change fields of a todo")
    edit.add_argument("id")
    edit.add_argument("--title")
    edit.add_argument("--description")
    edit.add_argument("--due", type=date.fromisoformat, help="Due date, YYYY-MM-DD")
    edit.add_argument("--clear-description", action="store_true")
    edit.add_argument("--clear-due", action="store_true")

    for name, help_text in (("done", "Mark a todo completed"), ("undone", "Mark a todo not completed")):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("id")

    delete = commands.add_parser("delete", help="Delete a todo")
    delete.add_argument("id")

    return parser


def _edit_fields(args: argparse.Namespace) -> dict:
    fields = {}
    if args.title is not None:
        fields["title"] = args.title
    if args.clear_description:
        fields["description"] = None
    elif args.description is not None:
        fields["description"] = args.description
    if args.clear_due:
        fields["due_date"] = None
    elif args.due is not None:
        fields["due_date"] = args.due
    return fields


async def _run(args: argparse.Namespace, client: TodoClient) -> int:
    command = args.command

    if command == "register":
        password = args.password or getpass.getpass("Password: ")
        print(await client.register(args.username, password))
    elif command == "login":
        password = args.password or getpass.getpass("Password: ")
        session = await client.login(args.username, password)
        print(f"Logged in as {session.username}")
    elif command == "logout":
        client.logout()
        print("Logged out")
    elif command == "list":
        todos = await client.list_todos()
        if not todos:
            print("No todos yet")
        for task in todos:
            print(render_task(task))
    elif command == "add":
        task = await client.create_todo(args.title, description=args.description, due_date=args.due)
        print(render_task(task))
    elif command == "show":
        print(render_task_details(await client.get_todo(args.id)))
    elif command == "edit":
        fields = _edit_fields(args)
        if not fields:
            print("Nothing to change", file=sys.stderr)
            return 1
        print(render_task(await client.update_todo(args.id, **fields)))
    elif command in ("done", "undone"):
        task = await client.update_todo(args.id, completed=command == "done")
        print(render_task(task))
    elif command == "delete":
        await client.delete_todo(args.id)
        print(f"Deleted {args.id}")
    return 0


def main(
    argv: Optional[List[str]] = None,
    token_store: Optional[TokenStore] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    token_store = token_store or FileTokenStore()
    if args.command in TASK_COMMANDS and token_store.load() is None:
        print("Not logged in. Run `todo login <username>` first.", file=sys.stderr)
        return 1

    async def run() -> int:
        async with TodoClient(args.api_url, token_store, transport=transport) as client:
            return await _run(args, client)

    try:
        return asyncio.run(run())
    except (NotAuthenticated, TokenRejected):
        print("Session expired. Run `todo login <username>` again.", file=sys.stderr)
        return 1
    except ClientError as e:
        print(f"Error: {e.detail}", file=sys.stderr)
        for error in e.errors:
            print(f"  {error.get('field')}: {error.get('message')}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"Could not reach {args.api_url}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
