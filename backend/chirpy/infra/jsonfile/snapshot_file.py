# chirpy/infra/jsonfile/snapshot_file.py
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from marshmallow import ValidationError

from chirpy.models import Snapshot
from chirpy.schemas.snapshot import snapshot_schema
from chirpy.services._shared.errors import StorageError

log = logging.getLogger(__name__)


class JSONSnapshotFile:
    """
    JSON document holding the whole snapshot.

    Reads parse the full file; writes replace it atomically by writing a
    sibling temp file, fsyncing it and renaming it over the original. A crash
    mid-write leaves either the old or the new document, never a partial one.

    .. note::
       This adapter does no locking of its own. Callers serialize access
       through :class:`~chirpy.uow.snapshot_uow.SnapshotCoordinator`.

    :param path: Location of the JSON document.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    # -------------------- lifecycle --------------------

    def ensure_exists(self) -> None:
        """
        Create the parent directory and an empty snapshot when missing.

        Failure here is a startup failure and propagates as ``OSError``.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists() or self.path.stat().st_size == 0:
            log.info("Initializing empty snapshot", extra={"path": str(self.path)})
            self.write(Snapshot())

    # -------------------- API ------------------------

    def load(self) -> Snapshot:
        """
        Read and parse the whole document.

        :raises StorageError: On I/O or parse failure.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Snapshot()
        except OSError as exc:
            raise StorageError(f"Could not read snapshot {self.path}: {exc}") from exc

        if not raw.strip():
            return Snapshot()

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Snapshot {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(document, dict):
            raise StorageError(f"Snapshot {self.path} must contain a JSON object")

        try:
            return snapshot_schema.load(document)
        except ValidationError as exc:
            raise StorageError(f"Snapshot {self.path} has an invalid layout: {exc.messages}") from exc

    def write(self, snapshot: Snapshot) -> None:
        """
        Serialize ``snapshot`` and atomically replace the document.

        :raises StorageError: On serialization or I/O failure.
        """
        try:
            payload = json.dumps(snapshot_schema.dump(snapshot), indent=2)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Could not serialize snapshot: {exc}") from exc

        directory = self.path.parent
        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise StorageError(f"Could not write snapshot {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    log.warning("Could not remove temp snapshot %s", tmp_name)

        log.debug(
            "Snapshot written",
            extra={"path": str(self.path)},
        )
