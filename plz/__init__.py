"""git-plz: run git operations across every repository under a directory."""

__version__ = "0.4.0"
