"""Command line access to a Jira server.

Usage:
    jiracore projects [--config=<path>] [--log-level=<level>]
    jiracore issue-types [--config=<path>] [--log-level=<level>]
    jiracore users <project> [--config=<path>] [--log-level=<level>]
    jiracore issue <issue_key> [--config=<path>] [--log-level=<level>]
    jiracore search <jql> [--fields=<fields>] [--limit=<n>] [--config=<path>] [--log-level=<level>]
    jiracore --help

Commands:
    projects        List all projects visible to the user
    issue-types     List all issue types
    users           List users assignable to a project
    issue           Show a single issue
    search          Search issues with JQL

Options:
    -h --help              Show this help message
    --config=<path>        Path to the YAML config file
    --fields=<fields>      Comma separated fields to return for each issue
    --limit=<n>            Maximum number of issues to return
    --log-level=<level>    Logging level [default: WARNING]
"""

from __future__ import annotations

import json
import sys
from typing import Any, Sequence

from docopt import docopt

from .config import build_jira_config, load_config
from .credentials import ConsoleCredentialProvider
from .errors import JiraClientError
from .jira_client import JiraClient
from .logger import setup_logging


def _split_fields(raw: str | None) -> list[str] | None:
    fields = [item.strip() for item in (raw or "").split(",") if item.strip()]
    return fields or None


def _build_client(config_path: str | None) -> JiraClient:
    cfg = load_config(config_path)
    return JiraClient(build_jira_config(cfg, credential_provider=ConsoleCredentialProvider()))


def execute(args: dict[str, Any], client: JiraClient) -> Any:
    if args["projects"]:
        return client.get_projects()
    if args["issue-types"]:
        return client.get_issue_types()
    if args["users"]:
        return client.get_assignable_users(args["<project>"])
    if args["issue"]:
        return client.get_issue(args["<issue_key>"])
    if args["search"]:
        limit = int(args["--limit"]) if args["--limit"] else None
        return client.search_issues(args["<jql>"], fields=_split_fields(args["--fields"]), limit=limit)
    raise ValueError("No command given")


def main(argv: Sequence[str] | None = None, client: JiraClient | None = None) -> int:
    args = docopt(__doc__, argv=list(argv) if argv is not None else None)
    setup_logging(args["--log-level"])

    try:
        runtime_client = client or _build_client(args["--config"])
        result = execute(args, runtime_client)
    except (JiraClientError, FileNotFoundError, ValueError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
