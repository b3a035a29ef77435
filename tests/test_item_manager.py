import random

import pytest

from bulk_parser import ParseOutcome
from conftest import CountingStorage, FailingBlobStore
from item_manager import DEFAULT_NAMES, PALETTE, ItemCollectionManager, generate_color
from item_store import ItemStorage, MemoryBlobStore
from picker_errors import NotFoundError, ValidationError


# ----- paleta / seed -----
def test_palette_cycles_every_15():
    assert len(PALETTE) == 15
    assert generate_color(0) == "#FF6B6B"
    assert generate_color(15) == generate_color(0)
    assert generate_color(29) == PALETTE[14]


def test_empty_store_seeds_ten_defaults_with_one_save(blob_store):
    storage = CountingStorage(blob_store)
    mgr = ItemCollectionManager(storage)
    assert storage.saves == 1
    assert [it.name for it in mgr.items] == DEFAULT_NAMES
    assert [it.id for it in mgr.items] == [str(i) for i in range(1, 11)]
    assert [it.color for it in mgr.items] == PALETTE[:10]
    # já persistido
    assert ItemStorage(blob_store).load() == mgr.items


def test_non_empty_store_is_not_seeded(small_manager):
    assert small_manager.names() == ["Alpha", "Beta", "Gamma"]
    assert small_manager.storage.saves == 0


def test_non_decimal_ids_do_not_break_loading(storage_key):
    blob = MemoryBlobStore({storage_key: '[{"id": "²", "name": "Pizza", "color": "#FFF"}, {"id": "abc", "name": "Sushi", "color": "#000"}]'})
    mgr = ItemCollectionManager(ItemStorage(blob), clock=lambda: 0.0)
    assert mgr.names() == ["Pizza", "Sushi"]
    assert mgr.add("Ramen").id == "1"


# ----- add -----
def test_add_appends_and_persists(manager, storage, blob_store):
    item = manager.add("  Ramen  ")
    assert item.name == "Ramen"
    assert item.color == generate_color(10)
    assert manager.items[-1] == item
    assert storage.saves == 1
    assert ItemStorage(blob_store).load() == manager.items


@pytest.mark.parametrize("name", ["", "   ", "\t\n", None])
def test_add_rejects_blank_names(manager, storage, name):
    before = manager.items
    with pytest.raises(ValidationError):
        manager.add(name)
    assert manager.items == before
    assert storage.saves == 0


def test_add_rejects_names_over_20_chars(manager):
    with pytest.raises(ValidationError):
        manager.add("x" * 21)
    assert manager.add("x" * 20).name == "x" * 20


def test_add_allows_duplicate_names(manager):
    a = manager.add("Pizza")
    assert a.id != "1"
    assert manager.names().count("Pizza") == 2


def test_ids_are_time_based_and_never_reused(manager):
    first = manager.add("A")
    assert first.id == "1000000"
    manager.remove(first.id)
    second = manager.add("B")
    assert second.id != first.id
    assert int(second.id) > int(first.id)


def test_ids_skip_past_existing_numeric_ids(blob_store):
    seeded = ItemStorage(blob_store)
    mgr = ItemCollectionManager(seeded, clock=lambda: 1.0)  # 1000 ms
    big = mgr.bulk_import(["X"])[0]
    assert big.id == "1000"
    again = ItemCollectionManager(ItemStorage(blob_store), clock=lambda: 0.5)
    assert int(again.add("Y").id) > 1000


# ----- edit -----
def test_edit_replaces_name_in_place(manager, storage):
    target = manager.items[2]
    updated = manager.edit(target.id, " Temaki ")
    assert updated.id == target.id
    assert updated.color == target.color
    assert updated.name == "Temaki"
    assert manager.items[2] == updated
    assert storage.saves == 1


def test_edit_missing_id(manager, storage):
    before = manager.items
    with pytest.raises(NotFoundError) as info:
        manager.edit("nope", "x")
    assert info.value.item_id == "nope"
    assert manager.items == before
    assert storage.saves == 0


def test_edit_blank_name(manager, storage):
    before = manager.items
    with pytest.raises(ValidationError):
        manager.edit("1", "   ")
    assert manager.items == before
    assert storage.saves == 0


def test_edit_selected_item_updates_selection(manager):
    manager.select("3")
    manager.edit("3", "Sashimi")
    assert manager.selected.name == "Sashimi"
    assert manager.selected.id == "3"


# ----- remove -----
def test_remove_missing_id_is_noop(manager, storage):
    before = manager.items
    manager.remove("nope")
    assert manager.items == before
    assert storage.saves == 0


def test_remove_deletes_and_persists(manager, storage, blob_store):
    manager.remove("2")
    assert "Burger" not in manager.names()
    assert len(manager) == 9
    assert storage.saves == 1
    assert ItemStorage(blob_store).load() == manager.items


def test_remove_selected_clears_selection(manager):
    manager.select("4")
    manager.remove("4")
    assert manager.selected is None
    assert manager.stats()["selected"] == 0


def test_remove_other_item_keeps_selection(manager):
    manager.select("4")
    manager.remove("5")
    assert manager.selected.name == "Tacos"


# ----- bulk import -----
def test_bulk_import_appends_in_order_with_one_save(manager, storage):
    created = manager.bulk_import(["Ramen", "Kebab", "Ramen"])
    assert [it.name for it in created] == ["Ramen", "Kebab", "Ramen"]
    assert [it.color for it in created] == [generate_color(10), generate_color(11), generate_color(12)]
    assert manager.items[-3:] == created
    assert len({it.id for it in manager.items}) == len(manager)
    assert storage.saves == 1


def test_bulk_import_empty_does_not_write(manager, storage):
    assert manager.bulk_import([]) == []
    assert storage.saves == 0


def test_bulk_import_is_all_or_nothing(manager, storage):
    before = manager.items
    with pytest.raises(ValidationError):
        manager.bulk_import(["Ok", "   "])
    assert manager.items == before
    assert storage.saves == 0


def test_import_text(manager, storage):
    result, created = manager.import_text("Ramen, pizza | Kebab")
    assert result.outcome is ParseOutcome.OK
    assert [it.name for it in created] == ["Ramen", "Kebab"]
    assert storage.saves == 1


@pytest.mark.parametrize("raw, outcome", [
    ("   ", ParseOutcome.NO_VALID_ENTRIES),
    ("PIZZA;sushi", ParseOutcome.ALL_DUPLICATES),
])
def test_import_text_without_new_items(manager, storage, raw, outcome):
    result, created = manager.import_text(raw)
    assert result.outcome is outcome
    assert created == []
    assert len(manager) == 10
    assert storage.saves == 0


# ----- busca -----
def test_search_is_case_insensitive_substring(small_manager):
    assert [it.name for it in small_manager.search("A")] == ["Alpha", "Beta", "Gamma"]
    assert [it.name for it in small_manager.search("mm")] == ["Gamma"]
    assert small_manager.search("zzz") == []


def test_search_matches_the_query_as_typed(small_manager):
    assert small_manager.search(" al") == []
    assert [it.name for it in small_manager.search("Gam")] == ["Gamma"]
    assert [it.name for it in small_manager.search("ta ")] == []


@pytest.mark.parametrize("query", ["", "   ", None])
def test_blank_search_returns_everything_in_order(small_manager, query):
    assert small_manager.search(query) == small_manager.items


# ----- seleção / stats -----
def test_select_missing_id(manager):
    with pytest.raises(NotFoundError):
        manager.select("nope")
    assert manager.selected is None


def test_stats(manager):
    assert manager.stats() == {"total": 10, "probability_pct": 10, "selected": 0}
    manager.select("1")
    assert manager.stats()["selected"] == 1
    manager.remove("1")
    manager.remove("2")
    assert manager.stats()["probability_pct"] == 13  # 12.5 arredonda para cima


def test_stats_probability_rounding(small_manager):
    assert small_manager.stats() == {"total": 3, "probability_pct": 33, "selected": 0}


def test_stats_on_empty_collection(manager):
    for it in manager.items:
        manager.remove(it.id)
    assert manager.stats() == {"total": 0, "probability_pct": 0, "selected": 0}


def test_items_property_is_a_copy(manager):
    manager.items.clear()
    assert len(manager) == 10


# ----- persistência degradada -----
def test_failed_writes_keep_memory_authoritative():
    errors = []
    storage = ItemStorage(FailingBlobStore(), on_error=errors.append)
    mgr = ItemCollectionManager(storage)
    assert len(mgr) == 10  # seed falhou ao gravar, mas vale na sessão
    mgr.add("Ramen")
    assert mgr.names()[-1] == "Ramen"
    assert len(errors) == 2


# ----- propriedade: ids sempre únicos -----
def test_ids_stay_unique_over_random_operations():
    rng = random.Random(1234)
    ticks = iter(range(10_000))
    mgr = ItemCollectionManager(ItemStorage(MemoryBlobStore()), clock=lambda: next(ticks) // 7 / 1000)
    for _ in range(500):
        op = rng.random()
        if op < 0.4 or not len(mgr):
            mgr.add(f"item {rng.randint(0, 50)}")
        elif op < 0.6:
            mgr.bulk_import([f"lote {rng.randint(0, 9)}" for _ in range(rng.randint(0, 3))])
        elif op < 0.8:
            mgr.edit(rng.choice(mgr.items).id, f"novo {rng.randint(0, 99)}")
        else:
            mgr.remove(rng.choice(mgr.items).id)
        ids = [it.id for it in mgr.items]
        assert len(ids) == len(set(ids))
