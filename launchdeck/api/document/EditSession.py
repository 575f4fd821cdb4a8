"""An open edit of one definition file."""

import os
import stat
import tempfile
from contextlib import suppress
from pathlib import Path

from .DocumentError import ReadOnlyDocument
from .PlistDocument import PlistDocument


class EditSession:
    """Owns a parsed document for the duration of one edit.

    ``is_dirty`` compares the current serialization with the one captured at
    open (or last save), so formatting differences count as changes.
    """

    def __init__(self, path: Path, document: PlistDocument, editable: bool = True):
        self.path = path
        self.document = document
        self.editable = editable
        self._baseline = document.serialize()

    @classmethod
    def open(cls, path: Path, editable: bool = True) -> "EditSession":
        """Read and parse ``path``.

        Raises:
            OSError: If the file cannot be read
            DocumentError: If the file is not a valid definition
        """
        return cls(path, PlistDocument.parse(Path(path).read_bytes()), editable=editable)

    @property
    def is_dirty(self) -> bool:
        return self.document.serialize() != self._baseline

    def save(self) -> bytes:
        """Write the document atomically and make it the new baseline.

        Returns:
            The bytes written

        Raises:
            ReadOnlyDocument: If the session is not editable
            OSError: If writing fails; the original file is left intact
        """
        if not self.editable:
            raise ReadOnlyDocument(str(self.path))
        data = self.document.serialize()
        fd, temp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            if self.path.exists():
                os.chmod(temp_name, stat.S_IMODE(self.path.stat().st_mode))
            os.replace(temp_name, self.path)
        except BaseException:
            with suppress(OSError):
                os.unlink(temp_name)
            raise
        self._baseline = data
        return data

    def revert(self) -> None:
        """Discard unsaved changes by re-reading the file."""
        self.document = PlistDocument.parse(self.path.read_bytes())
        self._baseline = self.document.serialize()
