"""Git hash capture with dirty-tree detection.

Benchmark results store the short git SHA so every result.json can be
traced back to the code that produced it.
"""

import subprocess
from pathlib import Path


def _git(args: list[str], cwd: Path | None) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        check=False,
    )


def get_git_hash(cwd: Path | str | None = None) -> str:
    """Get the short git SHA of HEAD, flagging uncommitted changes.

    Args:
        cwd: Directory inside the repository. Defaults to the process cwd.

    Returns:
        One of:
        - "a3f9c1d" for a clean working tree
        - "a3f9c1d-dirty" when staged or unstaged changes are present
        - "unknown" outside a git repository or without git
    """
    cwd = Path(cwd) if cwd is not None else None
    try:
        head = _git(["rev-parse", "--short", "HEAD"], cwd)
    except FileNotFoundError:
        return "unknown"
    if head.returncode != 0:
        return "unknown"

    sha = head.stdout.decode().strip()
    for diff_args in (["diff", "--quiet"], ["diff", "--quiet", "--cached"]):
        if _git(diff_args, cwd).returncode != 0:
            return f"{sha}-dirty"
    return sha
