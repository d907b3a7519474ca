"""CSV-backed repositories for registry snapshots."""
from __future__ import annotations

import logging
import subprocess
from io import BytesIO
from pathlib import Path
from typing import Sequence

from token_checker.domain.errors import SnapshotLoadError
from token_checker.domain.models import TokenRecord
from token_checker.domain.repositories import SnapshotRepository
from token_checker.infrastructure.parsing.csv_snapshot import snapshot_to_records
from token_checker.infrastructure.parsing.utils import ensure_bytes

logger = logging.getLogger(__name__)


class CsvSnapshotRepository(SnapshotRepository):
    def __init__(self, source: BytesIO | Path | str | bytes) -> None:
        try:
            self._source = ensure_bytes(source)
        except OSError as exc:
            raise SnapshotLoadError(f"Cannot read snapshot {source}: {exc}") from exc

    def list_token_records(self) -> Sequence[TokenRecord]:
        return snapshot_to_records(BytesIO(self._source))


class GitSnapshotRepository(SnapshotRepository):
    """Reads the snapshot committed at ``revision`` for a tracked file."""

    def __init__(self, path: Path | str, revision: str = "HEAD") -> None:
        self._path = Path(path)
        self._revision = revision

    def _show(self) -> bytes:
        directory = self._path.resolve().parent
        spec = f"{self._revision}:./{self._path.name}"
        logger.debug("git show %s in %s", spec, directory)
        try:
            completed = subprocess.run(
                ["git", "show", spec],
                cwd=directory,
                capture_output=True,
                check=True,
            )
        except FileNotFoundError as exc:
            raise SnapshotLoadError("git executable not found") from exc
        except subprocess.CalledProcessError as exc:
            stderr = exc.stderr.decode("utf-8", errors="replace").strip()
            raise SnapshotLoadError(f"git show {spec} failed: {stderr}") from exc
        return completed.stdout

    def list_token_records(self) -> Sequence[TokenRecord]:
        return snapshot_to_records(BytesIO(self._show()))
