"""CLI entry point for tasktimer.

Usage:
    tasktimer          # Pick an open task issue and time a sitting
    tasktimer --all    # Include closed issues in the list
"""

import logging

import click

from tasktimer.core.config import (
    ConfigError,
    get_data_store_path,
    get_log_path,
    load_repository_id,
)
from tasktimer.core.github import GitHubError, Issue, list_issues
from tasktimer.core.logging_config import setup_logging
from tasktimer.core.store import SessionStore, StoreError
from tasktimer.core.timer import format_minutes
from tasktimer.tui.app import SittingError, run_sitting

logger = logging.getLogger(__name__)


def prompt_for_issue(issues: list[Issue]) -> Issue:
    """Show a numbered list of issues and ask the user to pick one."""
    for index, issue in enumerate(issues, start=1):
        click.echo(f"{index:>3}. {issue}")
    choice = click.prompt("Select an issue", type=click.IntRange(1, len(issues)))
    return issues[choice - 1]


@click.command()
@click.option(
    "--all",
    "-a",
    "include_closed",
    is_flag=True,
    help="Include closed issues in the list",
)
def main(include_closed: bool) -> None:
    """tasktimer - Time your work on GitHub task issues.

    Lists issues labelled "task" (yours first, then unassigned), shows how
    long you have spent on the one you pick, and starts a full-screen timer.
    Press P to pause or resume and Q to quit and save the session.

    Examples:

        tasktimer

        tasktimer --all
    """
    try:
        setup_logging(get_log_path())

        store_path = get_data_store_path()
        store = SessionStore.load(store_path)

        repository = load_repository_id()
        issues = list_issues(repository, include_closed=include_closed)
        if not issues:
            click.echo(f"No task issues found in {repository}.")
            return

        issue = prompt_for_issue(issues)
        click.echo(
            f"You have spent {format_minutes(store.time_on_task(issue.number))} "
            f"on task #{issue.number}.\n"
        )

        if not click.confirm("Would you like to start a new session?", default=True):
            logger.info("Sitting on task #%s declined", issue.number)
            return

        duration = run_sitting(issue.number, issue.title)
        store.record_session(issue.number, issue.title, duration)
        store.persist(store_path)
    except (ConfigError, GitHubError, StoreError, SittingError, OSError) as e:
        logger.error("%s", e)
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(
        f"\nYou have now spent {format_minutes(store.time_on_task(issue.number))} "
        f"on task #{issue.number}.\n"
    )
