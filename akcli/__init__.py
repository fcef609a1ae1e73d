"""Core pieces of a package-based command-line toolkit: versions, paths, logging,
terminal and spinner, INI configuration, git repositories, package descriptions
and release checks."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "git_repo",
    "log",
    "packages",
    "spinner",
    "terminal",
    "tools",
    "upgrade",
    "version",
]