"""Tests for git log --numstat parsing."""

import os
import shutil
import subprocess
import sys
import time

import pytest

from repo_risk.temporal import GitExtractor
from repo_risk.temporal.git_extractor import _resolve_rename

SHA_A = "a" * 40
SHA_B = "b" * 40
SHA_C = "c" * 40

RAW_LOG = f"""{SHA_C}|1700000300|carol@example.com|Fix crash | null pointer in parser

12\t3\tsrc/parser.py
-\t-\tassets/logo.png

{SHA_B}|1700000200|bob@example.com|Docs only
{SHA_A}|1700000100|alice@example.com|Initial import

100\t0\tsrc/parser.py
40\t0\tsrc/{{old => new}}/util.py
"""


class TestParseLog:
    def test_parses_commits_with_numstat(self, tmp_path):
        commits = GitExtractor(str(tmp_path)).parse_log(RAW_LOG)

        # The commit without file changes is dropped
        assert [c.hash for c in commits] == [SHA_C, SHA_A]

        newest = commits[0]
        assert newest.timestamp == 1700000300
        assert newest.author == "carol@example.com"
        assert newest.subject == "Fix crash | null pointer in parser"
        assert [(f.path, f.insertions, f.deletions) for f in newest.files] == [
            ("src/parser.py", 12, 3),
            ("assets/logo.png", 0, 0),
        ]

    def test_rename_paths_resolved(self, tmp_path):
        commits = GitExtractor(str(tmp_path)).parse_log(RAW_LOG)
        assert commits[1].files[1].path == "src/new/util.py"

    def test_empty_output(self, tmp_path):
        assert GitExtractor(str(tmp_path)).parse_log("") == []

    def test_lines_before_first_header_ignored(self, tmp_path):
        raw = f"1\t1\tstray.py\n{SHA_A}|1|a@x.com|init\n\n2\t0\tmain.py\n"
        commits = GitExtractor(str(tmp_path)).parse_log(raw)
        assert len(commits) == 1
        assert commits[0].files[0].path == "main.py"


class TestResolveRename:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("src/{old => new}/a.py", "src/new/a.py"),
            ("src/{ => pkg}/a.py", "src/pkg/a.py"),
            ("src/{pkg => }/a.py", "src/a.py"),
            ("old.py => new.py", "new.py"),
            ("plain.py", "plain.py"),
        ],
    )
    def test_rename_notation(self, raw, expected):
        assert _resolve_rename(raw) == expected


class TestExtract:
    def test_not_a_git_repo(self, tmp_path):
        assert GitExtractor(str(tmp_path)).extract() is None

    @pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
    def test_real_repository(self, tmp_path):
        def git(*args):
            subprocess.run(
                ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com",
                 "-c", "commit.gpgsign=false", *args],
                cwd=tmp_path,
                check=True,
                capture_output=True,
            )

        git("init", "-q")
        (tmp_path / "app.py").write_text("a = 1\n")
        git("add", "app.py")
        git("commit", "-q", "-m", "Initial commit")
        (tmp_path / "app.py").write_text("a = 2\nb = 3\n")
        git("commit", "-q", "-am", "fix: wrong value")

        history = GitExtractor(str(tmp_path)).extract()
        assert history is not None
        assert history.total_commits == 2
        assert history.file_set == {"app.py"}
        assert history.commits[0].subject == "fix: wrong value"


@pytest.fixture
def slow_git(tmp_path, monkeypatch):
    """A `git` on PATH that answers rev-parse but hangs on log."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "git"
    script.write_text(
        "#!/bin/sh\n"
        'case "$*" in *rev-parse*) echo .git; exit 0;; esac\n'
        "sleep 6\n"
    )
    script.chmod(0o755)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    return script


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell script as git")
class TestTimeout:
    def test_hung_git_log_is_killed(self, tmp_path, slow_git):
        repo = tmp_path / "repo"
        repo.mkdir()

        started = time.monotonic()
        assert GitExtractor(str(repo), timeout=1).extract() is None
        assert time.monotonic() - started < 3


class _NoStdout:
    stdout = None


def test_read_without_stdout_pipe(tmp_path):
    assert GitExtractor(str(tmp_path))._read_capped(_NoStdout()) is None
