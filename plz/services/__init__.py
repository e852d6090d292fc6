"""Application services: repository selection and command execution."""

from plz.services.runner import CommandRunner, RunSummary, UnhandledCommand
from plz.services.selector import cached_repositories, select_repositories

__all__ = [
    "CommandRunner",
    "RunSummary",
    "UnhandledCommand",
    "cached_repositories",
    "select_repositories",
]
