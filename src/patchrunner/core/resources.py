"""Read/write capabilities for addressable text resources.

The edit protocol never touches files directly. It asks a ResourceStore to
read the text of a resource and, only after every edit succeeded, to write the
new text back. Stores report failures as ResourceOutcome values with a
diagnostic message rather than raising.
"""

import os
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from patchrunner.core.config import DEFAULT_MAX_FILE_BYTES
from patchrunner.core.exceptions import WorkspaceSecurityError
from patchrunner.core.workspace import Workspace


@dataclass(frozen=True)
class ResourceOutcome:
    """Success/failure of a single read or write."""

    success: bool
    data: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: str | None = None) -> "ResourceOutcome":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ResourceOutcome":
        return cls(success=False, error=error)


class ResourceStore(ABC):
    """Source and sink for resource text."""

    @abstractmethod
    def read_text(self, resource_id: str) -> ResourceOutcome:
        """Return the full text of the resource in ``data``."""
        raise NotImplementedError

    @abstractmethod
    def write_text(self, resource_id: str, content: str) -> ResourceOutcome:
        """Replace the full text of the resource with ``content``."""
        raise NotImplementedError


class WorkspaceFileStore(ResourceStore):
    """Files under a sandboxed workspace, addressed by path."""

    def __init__(
        self,
        workspace: Workspace,
        encoding: str = "utf-8",
        max_bytes: int = DEFAULT_MAX_FILE_BYTES,
    ) -> None:
        self.workspace = workspace
        self.encoding = encoding
        self.max_bytes = max_bytes

    def read_text(self, resource_id: str) -> ResourceOutcome:
        try:
            path = self.workspace.resolve_path(resource_id)
        except WorkspaceSecurityError as e:
            return ResourceOutcome.fail(f"Invalid path: {e}")

        if not path.exists():
            return ResourceOutcome.fail(f"File not found: {resource_id}")
        if not path.is_file():
            return ResourceOutcome.fail(f"Not a file: {resource_id}")

        try:
            size = path.stat().st_size
            if size > self.max_bytes:
                return ResourceOutcome.fail(
                    f"File too large: {resource_id} ({size} bytes, limit {self.max_bytes})"
                )
            # newline="" keeps CRLF intact so edits round-trip byte-for-byte
            with path.open(encoding=self.encoding, newline="") as f:
                return ResourceOutcome.ok(f.read())
        except UnicodeDecodeError as e:
            return ResourceOutcome.fail(f"File is not valid {self.encoding} text: {e.reason}")
        except OSError as e:
            return ResourceOutcome.fail(f"Failed to read file: {e}")

    def write_text(self, resource_id: str, content: str) -> ResourceOutcome:
        try:
            path = self.workspace.resolve_path(resource_id)
        except WorkspaceSecurityError as e:
            return ResourceOutcome.fail(f"Invalid path: {e}")

        # Encode before touching the file so an unencodable edit leaves it intact
        try:
            data = content.encode(self.encoding)
        except UnicodeEncodeError as e:
            return ResourceOutcome.fail(f"Content cannot be encoded as {self.encoding}: {e.reason}")

        try:
            self._atomic_write(path, data)
        except OSError as e:
            return ResourceOutcome.fail(f"Failed to write file: {e}")

        return ResourceOutcome.ok()

    def _atomic_write(self, path: Path, data: bytes) -> None:
        """Write to a sibling temp file, then rename it over ``path``."""
        temp_path = path.with_name(path.name + ".tmp")
        try:
            temp_path.write_bytes(data)
            if path.exists():
                shutil.copymode(path, temp_path)
            with temp_path.open("rb") as f:
                os.fsync(f.fileno())
            temp_path.replace(path)
        finally:
            temp_path.unlink(missing_ok=True)


class InMemoryResourceStore(ResourceStore):
    """Dictionary-backed store, e.g. for editor buffers that are not on disk."""

    def __init__(self, initial: dict[str, str] | None = None, fail_writes: bool = False) -> None:
        self.contents: dict[str, str] = dict(initial or {})
        self.fail_writes = fail_writes
        self.write_count = 0

    def read_text(self, resource_id: str) -> ResourceOutcome:
        if resource_id not in self.contents:
            return ResourceOutcome.fail(f"Resource not found: {resource_id}")
        return ResourceOutcome.ok(self.contents[resource_id])

    def write_text(self, resource_id: str, content: str) -> ResourceOutcome:
        if self.fail_writes:
            return ResourceOutcome.fail(f"Resource is read-only: {resource_id}")
        self.contents[resource_id] = content
        self.write_count += 1
        return ResourceOutcome.ok()
