"""
JSON File Storage Implementation

DESIGN DECISION: One file per key (``<data_dir>/<key>.json``) holding the
ledger JSON array. Plain files because:
1. The ledger is small (one person, one week at a time)
2. Users can open and back up the file themselves
3. No database setup required

Writes go to a temporary file that then replaces the real one, so a crash
mid-write never leaves a half-written ledger behind. Transient OS errors
are retried with tenacity.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from expense_review.services.storage.interface import (
    LedgerStorageInterface,
    StorageReadError,
    StorageWriteError,
)


class JsonFileLedgerStorage(LedgerStorageInterface):
    """Ledger storage backed by a JSON file on disk."""
    
    def __init__(
        self,
        data_dir: Path,
        key: str = "expenses",
        write_attempts: int = 3,
    ):
        """
        Args:
            data_dir: Directory for ledger files (created on first write)
            key: Key the ledger is stored under; becomes the file name
            write_attempts: Attempts per write before giving up
        """
        super().__init__(key=key)
        self._data_dir = Path(data_dir)
        self._write_attempts = write_attempts
    
    @property
    def path(self) -> Path:
        return self._data_dir / f"{self.key}.json"
    
    def _read_blob(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read ledger file {self.path}: {e}")
    
    def _write_blob(self, data: str) -> None:
        writer = retry(
            retry=retry_if_exception_type(OSError),
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            reraise=True,
        )(self._replace_file)
        try:
            writer(data)
        except OSError as e:
            raise StorageWriteError(f"Failed to write ledger file {self.path}: {e}")
    
    def _replace_file(self, data: str) -> None:
        """Write to a sibling temp file, then atomically swap it in."""
        self._data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._data_dir,
            prefix=f".{self.key}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(data)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
