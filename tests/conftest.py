import pytest

from vault_curator.core.file_access import ChangeNotifier, LocalFileProvider, MemoryFileProvider


@pytest.fixture
def memory_vault():
    """Factory for an in-memory vault owned by the calling test."""

    def _build(files=None, **kwargs):
        return MemoryFileProvider(files, **kwargs)

    return _build


@pytest.fixture
def local_vault(tmp_path):
    vault_path = tmp_path / "vault"
    vault_path.mkdir()
    return LocalFileProvider(vault_path)


@pytest.fixture
def events():
    return []


@pytest.fixture
def notifier(events):
    notifier = ChangeNotifier()
    notifier.subscribe(lambda path, event: events.append((path, event.value)))
    return notifier
