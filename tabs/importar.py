# tabs/importar.py — importação em lote (texto colado ou clipboard) com pré-visualização
from __future__ import annotations
import html
import streamlit as st

import notices
from clipboard_reader import read_clipboard
from picker_errors import ClipboardUnavailableError, PickerError
from item_manager import generate_color
from tabs.common import PK_PREFIX, get_manager, push_notice

TEXT_KEY = f"{PK_PREFIX}paste_text"
PREVIEW_KEY = f"{PK_PREFIX}preview"

HELP_TEXT = (
    "Cole sua lista. Separadores aceitos:\n"
    "• quebra de linha (um item por linha)\n"
    "• vírgula: item1,item2,item3\n"
    "• ponto e vírgula: item1;item2;item3\n"
    "• barra vertical: item1|item2|item3"
)


def _reset():
    st.session_state[TEXT_KEY] = ""
    st.session_state[PREVIEW_KEY] = []


def _parse_into_preview(text: str, quiet: bool = False):
    manager = get_manager()
    if not text.strip():
        if not quiet:
            push_notice(notices.import_text_required())
        st.session_state[PREVIEW_KEY] = []
        return
    result = manager.parse_text(text)
    st.session_state[PREVIEW_KEY] = result.names
    problem = notices.notice_for_parse(result)
    if problem is not None and not quiet:
        push_notice(problem)


def _on_parse():
    _parse_into_preview(st.session_state.get(TEXT_KEY, ""))


def _on_quick_paste():
    try:
        text = read_clipboard()
    except ClipboardUnavailableError:
        # sem clipboard: segue no modo manual
        push_notice(notices.clipboard_unavailable())
        return
    if not text.strip():
        push_notice(notices.clipboard_empty())
        return
    st.session_state[TEXT_KEY] = text
    _parse_into_preview(text, quiet=True)


def _on_confirm():
    manager = get_manager()
    names = st.session_state.get(PREVIEW_KEY) or []
    try:
        created = manager.bulk_import(names)
    except PickerError as e:
        push_notice(notices.notice_for_error(e))
        return
    push_notice(notices.import_done(len(created)))
    _reset()


def _preview(manager, names):
    st.markdown(f"**Pré-visualização ({len(names)} itens)**")
    base = len(manager)
    cols = st.columns(4)
    for i, name in enumerate(names):
        cols[i % len(cols)].markdown(
            f"<span style='color:{generate_color(base + i)}'>●</span> {html.escape(name)}",
            unsafe_allow_html=True,
        )
    c1, c2 = st.columns([3, 1])
    c1.button(f"💾 Confirmar importação ({len(names)})", type="primary", on_click=_on_confirm,
              use_container_width=True, key=f"{PK_PREFIX}confirm_import")
    c2.button("Cancelar", on_click=_reset, use_container_width=True, key=f"{PK_PREFIX}cancel_import")


def render():
    st.subheader("📋 Importar em lote")
    manager = get_manager()
    st.session_state.setdefault(TEXT_KEY, "")
    st.session_state.setdefault(PREVIEW_KEY, [])

    st.button("📋 Colar da área de transferência", on_click=_on_quick_paste, key=f"{PK_PREFIX}quick_paste")

    st.text_area("Itens para importar", key=TEXT_KEY, height=160, placeholder=HELP_TEXT)
    st.caption("Vários separadores, remove itens já existentes, máximo de 20 caracteres por item.")

    c1, c2 = st.columns([3, 1])
    c1.button("Ler texto", on_click=_on_parse, use_container_width=True, key=f"{PK_PREFIX}parse")
    c2.button("Limpar", on_click=_reset, use_container_width=True, key=f"{PK_PREFIX}clear_import")

    names = st.session_state[PREVIEW_KEY]
    if names:
        st.divider()
        _preview(manager, names)
