"""Erros do Random Picker."""
from __future__ import annotations


class PickerError(Exception):
    """Base de todos os erros do picker."""


class ValidationError(PickerError):
    """Raised when an item name is empty or too long."""


class NotFoundError(PickerError):
    """Raised when an operation targets an id that is not in the collection."""

    def __init__(self, item_id: str):
        super().__init__(f"Item não encontrado: {item_id}")
        self.item_id = item_id


class EmptyCollectionError(PickerError):
    """Raised when a pick is attempted on zero items."""


class SelectorBusyError(PickerError):
    """Raised when a pick is requested while another one is still spinning."""


class PersistenceError(PickerError):
    """Falha do blob store (leitura ou escrita)."""


class ClipboardUnavailableError(PickerError):
    """Raised when the clipboard can not be read."""
