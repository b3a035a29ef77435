"""Mensagens para o usuário: erro de validação, não encontrado/vazio, sucesso e aviso."""
from __future__ import annotations
from dataclasses import dataclass

from bulk_parser import ParseOutcome, ParseResult
from picker_errors import (
    ClipboardUnavailableError,
    EmptyCollectionError,
    NotFoundError,
    PickerError,
    SelectorBusyError,
    ValidationError,
)
from item_store import Item

VALIDATION_ERROR = "validation_error"
NOT_FOUND = "not_found"
SUCCESS = "success"
INFO = "info"

KINDS = (VALIDATION_ERROR, NOT_FOUND, SUCCESS, INFO)


@dataclass(frozen=True)
class Notice:
    kind: str
    title: str
    description: str

    @property
    def is_error(self) -> bool:
        return self.kind in (VALIDATION_ERROR, NOT_FOUND)


# ----- itens -----
def item_added(item: Item) -> Notice:
    return Notice(SUCCESS, "Item adicionado", f"“{item.name}” entrou na lista.")


def item_updated(item: Item) -> Notice:
    return Notice(SUCCESS, "Item atualizado", f"Agora se chama “{item.name}”.")


def item_removed(item: Item | None = None) -> Notice:
    desc = f"“{item.name}” saiu da lista." if item else "O item foi removido."
    return Notice(SUCCESS, "Item removido", desc)


def invalid_name(message: str = "O nome do item não pode ficar vazio.") -> Notice:
    return Notice(VALIDATION_ERROR, "Erro de entrada", message)


def item_not_found(item_id: str) -> Notice:
    return Notice(NOT_FOUND, "Item não encontrado", f"Nenhum item com id {item_id}.")


# ----- sorteio -----
def nothing_to_pick() -> Notice:
    return Notice(NOT_FOUND, "Nenhum item para sortear", "Adicione alguns itens primeiro.")


def pick_in_progress() -> Notice:
    return Notice(INFO, "Sorteio em andamento", "Espere o giro atual terminar.")


def pick_settled(item: Item) -> Notice:
    return Notice(SUCCESS, "Sorteio concluído!", f"Sorteado: {item.name}")


# ----- importação -----
def import_text_required() -> Notice:
    return Notice(VALIDATION_ERROR, "Erro de entrada", "Cole o texto que deseja importar.")


def import_no_valid_entries() -> Notice:
    return Notice(VALIDATION_ERROR, "Erro de leitura", "Nenhum item válido encontrado no texto.")


def import_all_duplicates() -> Notice:
    return Notice(INFO, "Nada a importar", "Todos os itens já existem; nenhum item novo foi adicionado.")


def import_file_unreadable(path, exc: Exception) -> Notice:
    return Notice(VALIDATION_ERROR, "Erro de leitura", f"Não foi possível ler {path}: {exc}")


def import_done(count: int) -> Notice:
    return Notice(SUCCESS, "Importação concluída", f"{count} item(ns) adicionado(s).")


def notice_for_parse(result: ParseResult) -> Notice | None:
    """Aviso para um resultado de parse sem itens novos (None se deu certo)."""
    if result.outcome is ParseOutcome.NO_VALID_ENTRIES:
        return import_no_valid_entries()
    if result.outcome is ParseOutcome.ALL_DUPLICATES:
        return import_all_duplicates()
    return None


# ----- clipboard -----
def clipboard_empty() -> Notice:
    return Notice(NOT_FOUND, "Área de transferência vazia", "Copie primeiro o texto que deseja importar.")


def clipboard_unavailable() -> Notice:
    return Notice(INFO, "Falha na leitura", "Não foi possível acessar a área de transferência; cole o texto manualmente.")


def notice_for_error(exc: PickerError) -> Notice:
    if isinstance(exc, ValidationError):
        return invalid_name(str(exc))
    if isinstance(exc, NotFoundError):
        return item_not_found(exc.item_id)
    if isinstance(exc, EmptyCollectionError):
        return nothing_to_pick()
    if isinstance(exc, SelectorBusyError):
        return pick_in_progress()
    if isinstance(exc, ClipboardUnavailableError):
        return clipboard_unavailable()
    return Notice(INFO, "Aviso", str(exc))
