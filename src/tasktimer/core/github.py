"""GitHub issue source for tasktimer.

Issues are listed with the gh CLI, which must be installed and
authenticated. Only issues labelled "task" are offered.
"""

import logging
import subprocess
from dataclasses import dataclass

import orjson

logger = logging.getLogger(__name__)

TASK_LABEL = "task"

# gh search qualifiers, in display order
ASSIGNED_TO_ME = "assignee:@me"
UNASSIGNED = "no:assignee"


class GitHubError(Exception):
    """Raised when a gh command fails or returns unusable output."""

    pass


@dataclass(frozen=True)
class Issue:
    """A selectable task.

    Attributes:
        number: Issue number, used as the task id.
        title: Issue title.
    """

    number: int
    title: str

    def __str__(self) -> str:
        return f"#{self.number} | {self.title}"


def _gh_issue_list_cmd(repository: str, search: str, include_closed: bool) -> list[str]:
    """Build the gh command listing issues for one assignee filter."""
    return [
        "gh",
        "issue",
        "list",
        "--label",
        TASK_LABEL,
        "--json",
        "number,title",
        "--state",
        "all" if include_closed else "open",
        "--repo",
        repository,
        "--search",
        search,
    ]


def _run_gh_issue_list(repository: str, search: str, include_closed: bool) -> list[Issue]:
    """Run one gh issue list query and parse its JSON output.

    Raises:
        GitHubError: If gh is missing, exits nonzero, or prints unexpected JSON.
    """
    cmd = _gh_issue_list_cmd(repository, search, include_closed)
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise GitHubError("gh is not installed. See https://cli.github.com/") from e

    if result.returncode != 0:
        raise GitHubError(
            f"received exit status {result.returncode} while running gh.\n"
            f"{result.stdout}\n{result.stderr}".rstrip()
        )

    try:
        raw_issues = orjson.loads(result.stdout)
    except orjson.JSONDecodeError as e:
        raise GitHubError(f"gh returned invalid JSON: {e}") from e

    if not isinstance(raw_issues, list):
        raise GitHubError("gh returned JSON that is not a list of issues")
    issues = []
    for raw in raw_issues:
        try:
            issues.append(Issue(number=int(raw["number"]), title=str(raw["title"])))
        except (KeyError, TypeError, ValueError) as e:
            raise GitHubError(f"gh returned a malformed issue: {raw!r}") from e
    logger.info("gh listed %d issue(s) for %s (%s)", len(issues), repository, search)
    return issues


def list_issues(repository: str, include_closed: bool = False) -> list[Issue]:
    """List task issues for a repository.

    Issues assigned to the current user come first, then unassigned ones.
    Each group is sorted by issue number, and an issue appearing in both is
    kept only in the first.

    Args:
        repository: Repository identifier, e.g. "owner/name".
        include_closed: Also list closed issues.

    Returns:
        Ordered list of issues.

    Raises:
        GitHubError: If either gh query fails.
    """
    issues: list[Issue] = []
    seen: set[int] = set()
    for search in (ASSIGNED_TO_ME, UNASSIGNED):
        group = _run_gh_issue_list(repository, search, include_closed)
        for issue in sorted(group, key=lambda i: i.number):
            if issue.number not in seen:
                seen.add(issue.number)
                issues.append(issue)
    return issues
