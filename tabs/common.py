# tabs/common.py — estado compartilhado entre as abas (session_state) + avisos
from __future__ import annotations
import streamlit as st

import notices
from item_manager import ItemCollectionManager
from item_store import ItemStorage, JsonFileBlobStore
from picker_settings import get_settings

# Prefixo para chaves de estado do app
PK_PREFIX = "pk_"
MANAGER_KEY = f"{PK_PREFIX}manager"
NOTICES_KEY = f"{PK_PREFIX}notices"
PERSIST_FAILED_KEY = f"{PK_PREFIX}persist_failed"


def get_manager() -> ItemCollectionManager:
    """Um manager por sessão: carrega (ou semeia) só na primeira execução."""
    if MANAGER_KEY not in st.session_state:
        settings = get_settings()

        def _on_save_error(exc):
            st.session_state[PERSIST_FAILED_KEY] = str(exc)

        storage = ItemStorage(JsonFileBlobStore(settings["store_path"]), on_error=_on_save_error)
        st.session_state[MANAGER_KEY] = ItemCollectionManager(storage)
    return st.session_state[MANAGER_KEY]


def push_notice(notice: notices.Notice) -> None:
    """Enfileira o aviso para sobreviver ao st.rerun()."""
    st.session_state.setdefault(NOTICES_KEY, []).append(notice)


def show_notice(notice: notices.Notice) -> None:
    text = f"**{notice.title}** — {notice.description}"
    if notice.is_error:
        st.error(text)
    elif notice.kind == notices.SUCCESS:
        st.success(text)
    else:
        st.info(text)


def flush_notices() -> None:
    for notice in st.session_state.pop(NOTICES_KEY, []):
        show_notice(notice)
    failed = st.session_state.pop(PERSIST_FAILED_KEY, None)
    if failed:
        st.warning(f"Não foi possível salvar no disco ({failed}). As mudanças valem só nesta sessão.")
