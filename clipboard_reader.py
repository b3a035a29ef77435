"""Leitura da área de transferência (para a importação rápida)."""
from __future__ import annotations
from typing import Callable, Optional
import logging

from picker_errors import ClipboardUnavailableError

logger = logging.getLogger(__name__)


def _tk_clipboard_text() -> str:
    import tkinter

    root = tkinter.Tk()
    root.withdraw()
    try:
        return root.clipboard_get()
    finally:
        root.destroy()


def read_clipboard(reader: Optional[Callable[[], str]] = None) -> str:
    """Texto atual do clipboard; ClipboardUnavailableError se não der para ler."""
    try:
        text = (reader or _tk_clipboard_text)()
    except Exception as exc:
        logger.warning(f"Clipboard indisponível: {exc}")
        raise ClipboardUnavailableError("Não foi possível acessar a área de transferência.") from exc
    if not isinstance(text, str):
        raise ClipboardUnavailableError("A área de transferência não contém texto.")
    return text
