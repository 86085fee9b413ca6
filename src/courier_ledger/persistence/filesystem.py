"""File-based persistence for generated delivery exports."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from ..config import settings


class FileStorage:
    """Keeps a copy of every generated export under ``<data_root>/outputs``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "exports") -> Path:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        path = self.output_root / f"{prefix}_{timestamp}"
        path.mkdir(parents=True, exist_ok=False)
        return path

    def save_export(self, filename: str, payload: bytes | str, *, prefix: str = "exports") -> Path:
        run_dir = self.make_run_directory(prefix=prefix)
        path = run_dir / filename
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8", newline="")
        else:
            path.write_bytes(payload)
        return path

    def resolve_export(self, run_id: str, filename: str) -> Path:
        candidate = (self.output_root / run_id / filename).resolve()
        if self.output_root not in candidate.parents or not candidate.is_file():
            raise FileNotFoundError(filename)
        return candidate
