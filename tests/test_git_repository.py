import shutil
import subprocess
from pathlib import Path

import pytest

from token_checker.domain.errors import SnapshotLoadError
from token_checker.infrastructure.repositories.csv_repositories import GitSnapshotRepository

HEADER = "Name,Symbol,Mint,Decimals,LogoURI,Community Validated\n"

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def git(cwd: Path, *args: str) -> None:
    subprocess.run(
        ["git", "-c", "user.email=ci@example.com", "-c", "user.name=ci", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
    )


def test_reads_committed_version(tmp_path: Path):
    git(tmp_path, "init", "-q")
    path = tmp_path / "validated-tokens.csv"
    path.write_text(HEADER + "A,AAA,M1,6,,true\n", encoding="utf-8")
    git(tmp_path, "add", path.name)
    git(tmp_path, "commit", "-q", "-m", "initial")
    path.write_text(HEADER + "A,AAA,M1,6,,true\nB,BBB,M2,6,,true\n", encoding="utf-8")

    records = GitSnapshotRepository(path, revision="HEAD").list_token_records()

    assert [r.mint for r in records] == ["M1"]


def test_unknown_revision(tmp_path: Path):
    git(tmp_path, "init", "-q")
    path = tmp_path / "validated-tokens.csv"
    path.write_text(HEADER, encoding="utf-8")

    with pytest.raises(SnapshotLoadError, match="git show"):
        GitSnapshotRepository(path, revision="HEAD").list_token_records()
