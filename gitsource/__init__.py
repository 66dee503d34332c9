"""gitsource: git-backed source acquisition for build tool dependencies."""

__version__ = "0.1.0"
