# item_store.py
# --------------------------------------------------------------------------------------
# Persistência da lista de itens:
# - blob store = "localStorage" local: um arquivo JSON {chave: texto}
# - ItemStorage serializa a coleção inteira como array JSON sob uma chave fixa
# - load() nunca levanta: store ausente/corrompido = lista vazia
# - save() engole falhas do store (loga + hook on_error); a memória segue valendo
# --------------------------------------------------------------------------------------
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence
import json
import logging

from picker_errors import PersistenceError
from picker_settings import STORAGE_KEY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    color: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "color": self.color}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Item":
        """Levanta ValueError se a entrada não tiver id/name/color em texto."""
        if not isinstance(data, dict):
            raise ValueError(f"entrada deveria ser objeto, veio {type(data).__name__}")
        values = []
        for field in ("id", "name", "color"):
            v = data.get(field)
            if not isinstance(v, str):
                raise ValueError(f"campo '{field}' ausente ou inválido")
            values.append(v)
        return cls(*values)


# -----------------------
# Blob stores
# -----------------------
class MemoryBlobStore:
    """Blob store em memória (testes / sessões descartáveis)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.blobs: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self.blobs[key] = value


class JsonFileBlobStore:
    """Um arquivo JSON com {chave: texto}. Arquivo ausente = store vazio."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Falha ao ler {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceError(
                f"{self.path} deveria conter um objeto, mas veio {type(data).__name__}."
            )
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except PersistenceError:
            # arquivo corrompido: sobrescreve do zero
            logger.warning(f"{self.path} ilegível; recriando o arquivo.")
            data = {}
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as exc:
            raise PersistenceError(f"Falha ao gravar {self.path}: {exc}") from exc


# -----------------------
# Adapter
# -----------------------
class ItemStorage:
    def __init__(
        self,
        blob_store,
        key: str = STORAGE_KEY,
        on_error: Optional[Callable[[Exception], None]] = None,
    ):
        self.blob_store = blob_store
        self.key = key
        self.on_error = on_error

    def load(self) -> List[Item]:
        try:
            raw = self.blob_store.get(self.key)
        except PersistenceError as exc:
            logger.warning(f"Store indisponível, começando vazio: {exc}")
            return []
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.warning(f"Conteúdo de '{self.key}' não é JSON válido: {exc}")
            return []
        if not isinstance(data, list):
            logger.warning(f"'{self.key}' deveria ser uma lista, mas veio {type(data).__name__}.")
            return []

        items: List[Item] = []
        seen_ids = set()
        for entry in data:
            try:
                item = Item.from_dict(entry)
            except ValueError as exc:
                logger.warning(f"Ignorando entrada inválida {entry!r}: {exc}")
                continue
            if item.id in seen_ids:
                logger.warning(f"Ignorando id duplicado {item.id!r} ({item.name!r})")
                continue
            seen_ids.add(item.id)
            items.append(item)
        return items

    def save(self, items: Sequence[Item]) -> bool:
        payload = json.dumps([it.to_dict() for it in items], ensure_ascii=False)
        try:
            self.blob_store.set(self.key, payload)
        except PersistenceError as exc:
            logger.error(f"Falha ao salvar itens: {exc}")
            if self.on_error is not None:
                self.on_error(exc)
            return False
        logger.debug(f"{len(items)} item(ns) salvos em '{self.key}'")
        return True
