import pytest

from item_manager import ItemCollectionManager
from item_store import Item, ItemStorage, MemoryBlobStore
from picker_errors import PersistenceError
from picker_settings import STORAGE_KEY


class CountingStorage(ItemStorage):
    """ItemStorage que conta quantas vezes save() foi chamado."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.saves = 0

    def save(self, items):
        self.saves += 1
        return super().save(items)


class FailingBlobStore:
    """Blob store quebrado: toda leitura/escrita falha."""

    def __init__(self, fail_get=True, fail_set=True):
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.blobs = {}

    def get(self, key):
        if self.fail_get:
            raise PersistenceError("disco indisponível")
        return self.blobs.get(key)

    def set(self, key, value):
        if self.fail_set:
            raise PersistenceError("disco cheio")
        self.blobs[key] = value


def make_items(*names):
    return [Item(id=str(i + 1), name=n, color="#FFFFFF") for i, n in enumerate(names)]


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def storage(blob_store):
    return CountingStorage(blob_store)


@pytest.fixture
def fixed_clock():
    return lambda: 1_000.0  # 1_000_000 ms


@pytest.fixture
def manager(storage, fixed_clock):
    """Manager já semeado com os 10 itens padrão; contador de saves zerado."""
    mgr = ItemCollectionManager(storage, clock=fixed_clock)
    storage.saves = 0
    return mgr


@pytest.fixture
def small_manager(blob_store, fixed_clock):
    seeded = ItemStorage(blob_store)
    seeded.save(make_items("Alpha", "Beta", "Gamma"))
    storage = CountingStorage(blob_store)
    return ItemCollectionManager(storage, clock=fixed_clock)


@pytest.fixture
def storage_key():
    return STORAGE_KEY
