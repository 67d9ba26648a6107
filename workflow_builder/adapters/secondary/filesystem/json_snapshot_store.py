import json
import re
from pathlib import Path

from workflow_builder.domain.workflow.exceptions import InvalidWorkflowError, SnapshotNotFoundError
from workflow_builder.ports.secondary.snapshot_store import ISnapshotStore

FALLBACK_NAME = "workflow"
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._ -]+")


def safe_file_stem(name: str) -> str:
    """Turn a workflow name into a file stem that stays inside the export directory."""
    stem = _UNSAFE_CHARS.sub("_", name).strip(" .")
    return stem or FALLBACK_NAME


class JsonFileSnapshotStore(ISnapshotStore):
    """Writes each exported workflow to ``<directory>/<name>.json``, pretty-printed."""

    def __init__(self, directory: str | Path):
        self._directory = Path(directory)

    def _path(self, name: str) -> Path:
        return self._directory / f"{safe_file_stem(name)}.json"

    def save(self, name: str, record: dict) -> str:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._path(name)
        path.write_text(json.dumps(record, indent=2), encoding="utf-8")
        return str(path)

    def load(self, name: str) -> dict:
        path = self._path(name)
        if not path.is_file():
            raise SnapshotNotFoundError(name)
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InvalidWorkflowError(
                f"Exported workflow '{name}' is not valid JSON",
                {"path": str(path), "error": str(e)},
            ) from e

    def list_names(self) -> list[str]:
        if not self._directory.is_dir():
            return []
        return sorted(path.stem for path in self._directory.glob("*.json"))
