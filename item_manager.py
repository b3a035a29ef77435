# item_manager.py
# --------------------------------------------------------------------------------------
# Estado autoritativo da lista de itens.
# Fluxo de toda mutação: altera a lista em memória -> ItemStorage.save() (1 escrita)
# A seleção atual é guardada por id, então nunca aponta para item removido.
# --------------------------------------------------------------------------------------
from __future__ import annotations
from typing import Callable, Dict, Iterable, List, Optional, Tuple
import logging
import time

from bulk_parser import ParseResult, parse_bulk_text
from picker_errors import NotFoundError, ValidationError
from item_store import Item, ItemStorage
from picker_settings import MAX_NAME_LENGTH

logger = logging.getLogger(__name__)

# Paleta fixa (15 cores, #85C1E9 aparece duas vezes mesmo)
PALETTE = [
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FFEAA7",
    "#DDA0DD",
    "#98D8C8",
    "#F7DC6F",
    "#BB8FCE",
    "#85C1E9",
    "#F8C471",
    "#82E0AA",
    "#F1948A",
    "#85C1E9",
    "#D7BDE2",
]

DEFAULT_NAMES = [
    "Pizza", "Burger", "Sushi", "Tacos", "Pasta",
    "中式炒饭", "意大利面", "日式拉面", "韩式烤肉", "泰式咖喱",
]


def generate_color(index: int) -> str:
    return PALETTE[index % len(PALETTE)]


def default_items() -> List[Item]:
    return [Item(id=str(i + 1), name=name, color=generate_color(i)) for i, name in enumerate(DEFAULT_NAMES)]


def clean_name(name: str) -> str:
    """Nome aparado; ValidationError se vazio ou maior que MAX_NAME_LENGTH."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("O nome do item não pode ficar vazio.")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValidationError(f"O nome do item pode ter no máximo {MAX_NAME_LENGTH} caracteres.")
    return cleaned


class ItemCollectionManager:
    def __init__(self, storage: ItemStorage, clock: Callable[[], float] = time.time):
        self.storage = storage
        self._clock = clock
        self._items: List[Item] = storage.load()
        self._selected_id: Optional[str] = None
        self._last_id = max((int(it.id) for it in self._items if it.id.isdecimal()), default=0)

        # Primeira execução: popula com os itens padrão
        if not self._items:
            self._items = default_items()
            self._last_id = len(self._items)
            logger.info(f"Coleção vazia; semeando {len(self._items)} itens padrão")
            self._persist()

    # ----- leitura -----
    @property
    def items(self) -> List[Item]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def get(self, item_id: str) -> Optional[Item]:
        return next((it for it in self._items if it.id == item_id), None)

    def names(self) -> List[str]:
        return [it.name for it in self._items]

    def search(self, query: str) -> List[Item]:
        if not (query or "").strip():
            return list(self._items)
        q = query.lower()
        return [it for it in self._items if q in it.name.lower()]

    # ----- ids -----
    def _next_id(self) -> str:
        # ms desde epoch, sempre maior que o último emitido (nunca reaproveita)
        candidate = max(int(self._clock() * 1000), self._last_id + 1)
        taken = {it.id for it in self._items}
        while str(candidate) in taken:
            candidate += 1
        self._last_id = candidate
        return str(candidate)

    def _persist(self) -> None:
        self.storage.save(self._items)

    def _index_of(self, item_id: str) -> int:
        for i, it in enumerate(self._items):
            if it.id == item_id:
                return i
        return -1

    # ----- mutações -----
    def add(self, name: str) -> Item:
        cleaned = clean_name(name)
        item = Item(id=self._next_id(), name=cleaned, color=generate_color(len(self._items)))
        self._items.append(item)
        self._persist()
        logger.info(f"Item adicionado: {item.name} ({item.id})")
        return item

    def edit(self, item_id: str, new_name: str) -> Item:
        idx = self._index_of(item_id)
        if idx < 0:
            raise NotFoundError(item_id)
        cleaned = clean_name(new_name)
        old = self._items[idx]
        updated = Item(id=old.id, name=cleaned, color=old.color)
        self._items[idx] = updated
        self._persist()
        logger.info(f"Item {item_id} renomeado: {old.name} -> {updated.name}")
        return updated

    def remove(self, item_id: str) -> None:
        idx = self._index_of(item_id)
        if idx < 0:
            return
        removed = self._items.pop(idx)
        if self._selected_id == item_id:
            self._selected_id = None
        self._persist()
        logger.info(f"Item removido: {removed.name} ({removed.id})")

    def bulk_import(self, names: Iterable[str]) -> List[Item]:
        cleaned = [clean_name(n) for n in names]  # valida tudo antes de mexer na lista
        if not cleaned:
            return []
        base = len(self._items)
        created = [
            Item(id=self._next_id(), name=name, color=generate_color(base + i))
            for i, name in enumerate(cleaned)
        ]
        self._items.extend(created)
        self._persist()
        logger.info(f"Importação em lote: {len(created)} item(ns) adicionados")
        return created

    def parse_text(self, raw_text: str) -> ParseResult:
        return parse_bulk_text(raw_text, self.names())

    def import_text(self, raw_text: str) -> Tuple[ParseResult, List[Item]]:
        result = self.parse_text(raw_text)
        if not result.ok:
            return result, []
        return result, self.bulk_import(result.names)

    # ----- seleção -----
    @property
    def selected(self) -> Optional[Item]:
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def select(self, item_id: str) -> Item:
        item = self.get(item_id)
        if item is None:
            raise NotFoundError(item_id)
        self._selected_id = item_id
        return item

    def clear_selection(self) -> None:
        self._selected_id = None

    def stats(self) -> Dict[str, int]:
        total = len(self._items)
        return {
            "total": total,
            "probability_pct": int(100 / total + 0.5) if total else 0,  # arredonda .5 para cima
            "selected": 1 if self.selected is not None else 0,
        }
