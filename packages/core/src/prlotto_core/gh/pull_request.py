from __future__ import annotations

from github import Github


def get_client(token: str) -> Github:
    return Github(token)


def full_repo_name(repo_name: str, org: str) -> str:
    """`name` → `org/name`; names that already carry an owner are left alone."""
    return repo_name if "/" in repo_name else f"{org}/{repo_name}"


def get_repo(gh: Github, repo_name: str, org: str):
    return gh.get_repo(full_repo_name(repo_name, org))


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def get_issue(repo, number: int):
    return repo.get_issue(number)


def get_team(gh: Github, org: str, team: str):
    """Look up a team by numeric id or by slug."""
    organization = gh.get_organization(org)
    if team.isdigit():
        return organization.get_team(int(team))
    return organization.get_team_by_slug(team)


def label_names(issue) -> list[str]:
    return [label.name for label in issue.labels]


def assignee_login(issue_or_pull) -> str | None:
    assignee = issue_or_pull.assignee
    return assignee.login if assignee is not None else None
