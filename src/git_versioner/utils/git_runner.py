"""
Centralized Git command runner with dubious ownership handling.

Build agents frequently check out repositories as a different user than the
one running the build, which makes git refuse to operate ("dubious
ownership"). Every command run through this module marks the repository as
a safe directory for the duration of the call.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_GIT_TIMEOUT = 10.0


def get_git_environment(project_dir: Path) -> Dict[str, str]:
    """
    Get environment variables for git commands to handle dubious ownership.

    The first GIT_CONFIG_COUNT pairs of GIT_CONFIG_KEY_n/GIT_CONFIG_VALUE_n
    from the calling environment are shifted up by one so that
    safe.directory can take index 0 without clobbering them. Pairs at or
    beyond the caller's count stay inactive.

    Args:
        project_dir: Path to the project directory

    Returns:
        Dictionary of environment variables for git commands
    """
    env = os.environ.copy()

    count = os.environ.get("GIT_CONFIG_COUNT", "").strip()
    existing = int(count) if count.isdigit() else 0

    for idx in range(existing):
        env[f"GIT_CONFIG_KEY_{idx + 1}"] = os.environ.get(f"GIT_CONFIG_KEY_{idx}", "")
        env[f"GIT_CONFIG_VALUE_{idx + 1}"] = os.environ.get(
            f"GIT_CONFIG_VALUE_{idx}", ""
        )

    env["GIT_CONFIG_KEY_0"] = "safe.directory"
    env["GIT_CONFIG_VALUE_0"] = str(project_dir.resolve())
    env["GIT_CONFIG_COUNT"] = str(existing + 1)

    return env


def run_git_command(
    cmd: List[str],
    cwd: Path,
    check: bool = True,
    timeout: Optional[float] = DEFAULT_GIT_TIMEOUT,
) -> subprocess.CompletedProcess:
    """
    Run a git command with proper environment handling for dubious ownership.

    Args:
        cmd: Git command as a list (e.g., ["git", "status"])
        cwd: Working directory for the command
        check: Whether to raise CalledProcessError on non-zero exit
        timeout: Timeout in seconds, None to wait indefinitely

    Returns:
        CompletedProcess with decoded stdout and stderr

    Raises:
        ValueError: If the command does not start with 'git'
        FileNotFoundError: If the git binary is not installed
        subprocess.CalledProcessError: If check=True and command fails
        subprocess.TimeoutExpired: If timeout is exceeded
    """
    if not cmd or cmd[0] != "git":
        raise ValueError("Command must start with 'git'")

    logger.debug(f"Running git command in {cwd}: {' '.join(cmd)}")

    return subprocess.run(
        cmd,
        cwd=cwd,
        check=check,
        capture_output=True,
        text=True,
        timeout=timeout,
        env=get_git_environment(cwd),
    )
