"""tagge: semantic version tagging and changelogs for git repositories."""

__version__ = "0.1.0"
