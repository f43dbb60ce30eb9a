"""Extract git history with per-file line counts via subprocess."""

import os
import re
import signal
import subprocess
import threading
from pathlib import Path
from typing import Optional

from ..logging_config import get_logger
from .models import Commit, FileChange, GitHistory

logger = get_logger(__name__)


class GitExtractor:
    """Parse `git log --numstat` into structured GitHistory."""

    def __init__(self, repo_path: str, max_commits: int = 1000, timeout: int = 60):
        self.repo_path = str(Path(repo_path).resolve())
        self.max_commits = max_commits
        self.timeout = timeout

    def is_git_repo(self) -> bool:
        try:
            result = subprocess.run(
                ["git", "-C", self.repo_path, "rev-parse", "--git-dir"],
                capture_output=True,
                text=True,
                timeout=5,
            )
            return result.returncode == 0
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return False

    def extract(self) -> Optional[GitHistory]:
        """Run git log and parse it. Return None if not a git repo or git fails."""
        if not self.is_git_repo():
            logger.info("Not a git repository: %s", self.repo_path)
            return None

        raw = self._run_git_log()
        if raw is None:
            return None

        commits = self.parse_log(raw)
        if not commits:
            return None

        history = GitHistory(commits=commits)
        logger.debug(
            "Read %d commits touching %d files over %d days",
            history.total_commits,
            len(history.file_set),
            history.span_days,
        )
        return history

    # git log output beyond this many characters is dropped
    _MAX_OUTPUT_CHARS = 50 * 1024 * 1024
    _READ_CHUNK = 1024 * 1024

    def _log_command(self) -> list[str]:
        cmd = ["git", "-C", self.repo_path, "log", "--no-merges", "--format=%H|%at|%ae|%s", "--numstat"]
        if self.max_commits > 0:
            cmd.append(f"-n{self.max_commits}")
        return cmd

    def _read_capped(self, proc: subprocess.Popen) -> Optional[tuple[str, bool]]:
        """Read stdout up to _MAX_OUTPUT_CHARS. Returns (text, truncated)."""
        stdout = proc.stdout
        if stdout is None:
            return None
        chunks: list[str] = []
        size = 0
        for chunk in iter(lambda: stdout.read(self._READ_CHUNK), ""):
            size += len(chunk)
            if size > self._MAX_OUTPUT_CHARS:
                return "".join(chunks), True
            chunks.append(chunk)
        return "".join(chunks), False

    @staticmethod
    def _kill(proc: subprocess.Popen) -> None:
        """Kill git and anything it spawned, so nothing keeps stdout open."""
        try:
            if hasattr(os, "killpg"):
                os.killpg(proc.pid, signal.SIGKILL)
            else:
                proc.kill()
        except (ProcessLookupError, PermissionError):
            pass  # already exited

    def _run_git_log(self) -> Optional[str]:
        expired = threading.Event()

        def on_deadline(proc: subprocess.Popen) -> None:
            expired.set()
            self._kill(proc)

        try:
            with subprocess.Popen(
                self._log_command(),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                start_new_session=True,
            ) as proc:
                # Killing the process group closes stdout, which ends a blocked read
                deadline = threading.Timer(self.timeout, on_deadline, args=(proc,))
                deadline.daemon = True
                deadline.start()
                try:
                    result = self._read_capped(proc)
                    if result is not None and result[1]:
                        self._kill(proc)
                    proc.wait()
                finally:
                    deadline.cancel()

                if expired.is_set():
                    logger.warning("git log timed out after %ds", self.timeout)
                    return None
                if result is None:
                    return None

                raw, truncated = result
                if truncated:
                    logger.warning(
                        "git log output exceeded %dMB, keeping the newest commits only",
                        self._MAX_OUTPUT_CHARS // (1024 * 1024),
                    )
                    return raw.rsplit("\n", 1)[0]

                if proc.returncode != 0:
                    stderr = proc.stderr.read() if proc.stderr else ""
                    logger.warning("git log failed (exit %d): %s", proc.returncode, stderr.strip())
                    return None
                return raw
        except OSError as e:
            logger.warning("git log error: %s", e)
            return None

    # 40-char hex hash | unix timestamp | author email | subject
    _HEADER_RE = re.compile(r"^[0-9a-f]{40}\|\d+\|[^|]*\|.*$")
    # insertions <TAB> deletions <TAB> path; binary files show "-"
    _NUMSTAT_RE = re.compile(r"^(\d+|-)\t(\d+|-)\t(.+)$")

    def parse_log(self, raw: str) -> list[Commit]:
        """Parse `git log --numstat` output into Commit objects.

        Header lines are detected by regex rather than blank-line separation,
        so commits without file changes and consecutive headers are handled.
        A truncated trailing commit (no numstat lines) is dropped.
        """
        commits: list[Commit] = []
        current: Optional[Commit] = None

        for line in raw.split("\n"):
            line = line.rstrip("\r")
            if not line.strip():
                continue

            if self._HEADER_RE.match(line):
                if current is not None and current.files:
                    commits.append(current)

                # Subject can contain | characters, so split at most 3 times
                parts = line.split("|", 3)
                try:
                    timestamp = int(parts[1])
                except ValueError:
                    current = None
                    continue
                current = Commit(
                    hash=parts[0],
                    timestamp=timestamp,
                    author=parts[2],
                    subject=parts[3] if len(parts) > 3 else "",
                )
                continue

            if current is None:
                continue

            match = self._NUMSTAT_RE.match(line)
            if match is None:
                logger.debug("Ignoring unexpected git log line: %r", line)
                continue
            added, deleted, path = match.groups()
            current.files.append(
                FileChange(
                    path=_resolve_rename(path),
                    insertions=int(added) if added != "-" else 0,
                    deletions=int(deleted) if deleted != "-" else 0,
                )
            )

        if current is not None and current.files:
            commits.append(current)

        return commits


_BRACE_RENAME_RE = re.compile(r"^(.*)\{(.*) => (.*)\}(.*)$")


def _resolve_rename(path: str) -> str:
    """Map numstat rename notation to the new path.

    "src/{old => new}/a.py" -> "src/new/a.py", "old.py => new.py" -> "new.py".
    """
    match = _BRACE_RENAME_RE.match(path)
    if match:
        prefix, _old, new, suffix = match.groups()
        return (prefix + new + suffix).replace("//", "/")
    if " => " in path:
        return path.split(" => ", 1)[1]
    return path
