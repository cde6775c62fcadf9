"""
Binary persistence of the full snapshot via pickle.

The blob is opaque and tied to the entity definitions that wrote it: a file
written before a dataclass changed shape may fail to decode, which surfaces
as DecodeError. Only load files this application wrote; unpickling runs
arbitrary code.
"""

from __future__ import annotations

import logging
from pathlib import Path
import pickle

from studymate.core.errors import DecodeError, RepositoryIOError
from studymate.domain.models import Snapshot

from .base import SnapshotRepository

logger = logging.getLogger(__name__)

_DECODE_ERRORS = (
    pickle.UnpicklingError,
    EOFError,
    AttributeError,
    ImportError,
    IndexError,
    TypeError,
    ValueError,
)


class BinaryRepository(SnapshotRepository):
    name = "binary"

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def save(self, snapshot: Snapshot) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("wb") as f:
                pickle.dump(snapshot, f, protocol=pickle.HIGHEST_PROTOCOL)
        except OSError as exc:
            raise RepositoryIOError(f"Failed to write {self.path}: {exc}") from exc
        logger.debug("Saved binary snapshot to %s", self.path)

    def load(self) -> Snapshot:
        if not self.path.exists():
            return Snapshot()
        try:
            with self.path.open("rb") as f:
                obj = pickle.load(f)
        except OSError as exc:
            raise RepositoryIOError(f"Failed to read {self.path}: {exc}") from exc
        except _DECODE_ERRORS as exc:
            raise DecodeError(f"Failed to deserialize snapshot from {self.path}: {exc!r}") from exc
        if not isinstance(obj, Snapshot):
            raise DecodeError(f"{self.path} does not contain a snapshot (found {type(obj).__name__})")
        return obj
