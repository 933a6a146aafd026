"""Changelog Promoter.

Normalizes project changelog sources (live git-chglog output or a committed
CHANGELOG.md) into a single VersionEntry and turns it into a release
announcement prompt for an LLM.
"""

__version__ = "0.1.0"
