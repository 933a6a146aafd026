"""Content-quality heuristics for changelog bodies."""

from __future__ import annotations

import re

COMMIT_ID_RE = re.compile(r"^[a-f0-9]{7,40}$")


def is_only_commit_ids(content: str) -> bool:
    """Return True when most non-blank lines are bare commit hashes.

    A changelog body that is mostly a list of abbreviated or full commit ids
    carries little narrative value. More than half of the non-blank lines
    must match, and there must be at least one non-blank line.

    Not consulted by the adapters yet; whether a low-information body should
    trigger a diff-based fallback is undecided.
    """
    non_blank = 0
    commit_ids = 0
    for line in content.splitlines():
        line = line.strip()
        if not line:
            continue
        non_blank += 1
        if COMMIT_ID_RE.match(line):
            commit_ids += 1
    return non_blank > 0 and commit_ids / non_blank > 0.5
