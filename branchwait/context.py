"""Resolve the Git branch name from the GitHub Actions environment."""

import os
from typing import Mapping, Optional

HEADS_PREFIX = "refs/heads/"


def resolve_branch_name(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the branch being built, or None when it cannot be determined.

    Pull request runs expose the source branch as GITHUB_HEAD_REF; push runs
    only have GITHUB_REF, e.g. ``refs/heads/feat-x``.
    """
    env = os.environ if environ is None else environ
    head_ref = env.get("GITHUB_HEAD_REF")
    if head_ref:
        return head_ref

    ref = env.get("GITHUB_REF") or ""
    if ref.startswith(HEADS_PREFIX):
        return ref[len(HEADS_PREFIX):] or None
    return None
