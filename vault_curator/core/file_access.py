"""File access providers and change notifications.

Every vault operation goes through a :class:`FileAccessProvider`. Two
implementations ship with the package:

- :class:`LocalFileProvider` works on a real directory, sandboxed to the vault
  root and honouring the configured ignore patterns.
- :class:`MemoryFileProvider` keeps an explicit in-memory tree. It is owned by
  whoever creates it (tests create one per test) and never shared globally.

Providers translate ``OSError`` failures into the typed errors from
:mod:`vault_curator.errors`, embedding the operation and the offending path.
"""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from vault_curator.constants import DEFAULT_IGNORE_PATTERNS
from vault_curator.data_models import FileStat
from vault_curator.errors import (
    AlreadyExists,
    InvalidArgument,
    NotFound,
    PermissionDenied,
    VaultError,
    VaultIOError,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# PROVIDER CONTRACT
# ==============================================================================


class FileAccessProvider(Protocol):
    """Rooted file tree consumed by the vault core. Paths are vault-relative."""

    def list_files(self) -> list[str]:
        """Return every file under the root, forward-slash separated, sorted."""
        ...

    def read(self, path: str) -> bytes:
        ...

    def write(self, path: str, data: bytes) -> None:
        """Create or overwrite ``path``, creating parent folders as needed."""
        ...

    def stat(self, path: str) -> FileStat:
        ...

    def exists(self, path: str) -> bool:
        ...

    def delete(self, path: str) -> None:
        ...

    def move(self, old_path: str, new_path: str) -> None:
        """Move a file. Fails with ``AlreadyExists`` when ``new_path`` exists."""
        ...


@contextmanager
def provider_errors(operation: str, path: str) -> Iterator[None]:
    """Translate ``OSError`` raised inside the block into typed vault errors."""
    try:
        yield
    except VaultError:
        raise
    except FileNotFoundError as exc:
        raise NotFound(f"Cannot {operation} '{path}': no such file or directory") from exc
    except FileExistsError as exc:
        raise AlreadyExists(f"Cannot {operation} '{path}': target already exists") from exc
    except PermissionError as exc:
        raise PermissionDenied(f"Cannot {operation} '{path}': permission denied") from exc
    except OSError as exc:
        reason = exc.strerror or str(exc) or type(exc).__name__
        raise VaultIOError(f"Cannot {operation} '{path}': {reason}") from exc


def is_ignored(path: str, patterns: Iterable[str]) -> bool:
    """Return True when ``path`` matches any glob in ``patterns``."""
    return any(fnmatch.fnmatchcase(path, pattern) for pattern in patterns)


# ==============================================================================
# CHANGE NOTIFICATIONS
# ==============================================================================


class ChangeEvent(str, Enum):
    ADD = "add"
    CHANGE = "change"
    UNLINK = "unlink"


ChangeSubscriber = Callable[[str, ChangeEvent], None]


class ChangeNotifier:
    """Fire-and-forget sink for file change events.

    Subscribers are called synchronously in registration order. A subscriber
    that raises is logged and skipped; the tool call that produced the event
    still succeeds.
    """

    def __init__(self) -> None:
        self._subscribers: list[ChangeSubscriber] = []

    def subscribe(self, callback: ChangeSubscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: ChangeSubscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def notify(self, path: str, event: ChangeEvent) -> None:
        logger.debug("Change notification: %s '%s'", event.value, path)
        for callback in list(self._subscribers):
            try:
                callback(path, event)
            except Exception:
                logger.exception(
                    "Change subscriber %r failed for %s '%s'", callback, event.value, path
                )


# ==============================================================================
# LOCAL FILESYSTEM PROVIDER
# ==============================================================================


class LocalFileProvider:
    """Provider backed by a directory on disk."""

    def __init__(
        self,
        root: Path,
        ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
    ) -> None:
        self.root = Path(root).expanduser().resolve(strict=False)
        self.ignore_patterns = tuple(ignore_patterns)

    def _resolve(self, path: str) -> Path:
        candidate = (self.root / path).resolve(strict=False)
        # Filesystem-level sandbox check; symlinks may still point outside.
        if not candidate.is_relative_to(self.root):
            raise InvalidArgument(f"Path '{path}' escapes the vault root.")
        return candidate

    def list_files(self) -> list[str]:
        if not self.root.is_dir():
            raise NotFound(f"Vault directory '{self.root}' is not accessible.")

        files: list[str] = []
        with provider_errors("list", str(self.root)):
            for entry in self.root.rglob("*"):
                if not entry.is_file():
                    continue
                relative = entry.relative_to(self.root).as_posix()
                if is_ignored(relative, self.ignore_patterns):
                    continue
                files.append(relative)
        return sorted(files)

    def read(self, path: str) -> bytes:
        with provider_errors("read", path):
            return self._resolve(path).read_bytes()

    def write(self, path: str, data: bytes) -> None:
        with provider_errors("write", path):
            target = self._resolve(path)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

    def stat(self, path: str) -> FileStat:
        with provider_errors("stat", path):
            target = self._resolve(path)
            info = target.stat()
            return FileStat(mtime=info.st_mtime, size=info.st_size, is_directory=target.is_dir())

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def delete(self, path: str) -> None:
        with provider_errors("delete", path):
            self._resolve(path).unlink()

    def move(self, old_path: str, new_path: str) -> None:
        with provider_errors("move", old_path):
            source = self._resolve(old_path)
            target = self._resolve(new_path)
            if not source.is_file():
                raise NotFound(f"Cannot move '{old_path}': no such file or directory")
            # Path.rename silently replaces an existing file on POSIX.
            if target.exists():
                raise AlreadyExists(f"Cannot move '{old_path}' to '{new_path}': target already exists")
            target.parent.mkdir(parents=True, exist_ok=True)
            source.rename(target)


# ==============================================================================
# IN-MEMORY PROVIDER
# ==============================================================================


@dataclass
class _MemoryFile:
    data: bytes
    mtime: float


class MemoryFileProvider:
    """Provider holding the whole vault in a dictionary.

    Modification times come from a logical clock that advances by one second
    on every write, so ordering by ``mtime`` is deterministic. Tests can pin
    times with :meth:`set_mtime` and simulate failures with :meth:`deny` and
    :meth:`simulate_disk_full`.
    """

    def __init__(
        self,
        files: dict[str, str | bytes] | None = None,
        ignore_patterns: Iterable[str] = (),
        start_time: float = 1_700_000_000.0,
    ) -> None:
        self.ignore_patterns = tuple(ignore_patterns)
        self._files: dict[str, _MemoryFile] = {}
        self._clock = start_time
        self._denied: dict[str, set[str]] = {}
        self._disk_full = False
        for path, content in (files or {}).items():
            self.write(path, content.encode("utf-8") if isinstance(content, str) else content)

    def _tick(self) -> float:
        self._clock += 1.0
        return self._clock

    def _check_permission(self, path: str, access: str) -> None:
        if access in self._denied.get(path, set()):
            raise PermissionError(13, "Permission denied", path)

    def set_mtime(self, path: str, mtime: float) -> None:
        with provider_errors("stat", path):
            if path not in self._files:
                raise FileNotFoundError(2, "No such file or directory", path)
            self._files[path].mtime = mtime

    def deny(self, path: str, *accesses: str) -> None:
        """Refuse ``read`` and/or ``write`` access to ``path``."""
        self._denied.setdefault(path, set()).update(accesses or ("read", "write"))

    def simulate_disk_full(self, enabled: bool = True) -> None:
        self._disk_full = enabled

    def text(self, path: str) -> str:
        """Return the stored content of ``path`` decoded as UTF-8."""
        return self.read(path).decode("utf-8")

    def list_files(self) -> list[str]:
        return sorted(
            path for path in self._files if not is_ignored(path, self.ignore_patterns)
        )

    def read(self, path: str) -> bytes:
        with provider_errors("read", path):
            if path not in self._files:
                raise FileNotFoundError(2, "No such file or directory", path)
            self._check_permission(path, "read")
            return self._files[path].data

    def write(self, path: str, data: bytes) -> None:
        with provider_errors("write", path):
            self._check_permission(path, "write")
            if self._disk_full:
                raise OSError(28, "No space left on device", path)
            self._files[path] = _MemoryFile(data=bytes(data), mtime=self._tick())

    def stat(self, path: str) -> FileStat:
        with provider_errors("stat", path):
            if path in self._files:
                entry = self._files[path]
                return FileStat(mtime=entry.mtime, size=len(entry.data))
            prefix = path.rstrip("/") + "/"
            if any(name.startswith(prefix) for name in self._files):
                return FileStat(mtime=self._clock, size=0, is_directory=True)
            raise FileNotFoundError(2, "No such file or directory", path)

    def exists(self, path: str) -> bool:
        return path in self._files

    def delete(self, path: str) -> None:
        with provider_errors("delete", path):
            if path not in self._files:
                raise FileNotFoundError(2, "No such file or directory", path)
            self._check_permission(path, "write")
            del self._files[path]

    def move(self, old_path: str, new_path: str) -> None:
        with provider_errors("move", old_path):
            if old_path not in self._files:
                raise FileNotFoundError(2, "No such file or directory", old_path)
            if new_path in self._files:
                raise FileExistsError(17, "File exists", new_path)
            self._check_permission(old_path, "write")
            self._files[new_path] = self._files.pop(old_path)
