# tabs/itens.py — adicionar / buscar / editar / remover itens
from __future__ import annotations
import html
import streamlit as st

import notices
from picker_errors import PickerError
from item_table import items_to_csv, items_to_frame
from picker_settings import MAX_NAME_LENGTH
from tabs.common import PK_PREFIX, get_manager, push_notice

EDITING_KEY = f"{PK_PREFIX}editing_id"


def _add_form(manager):
    with st.expander("Adicionar item", expanded=False):
        with st.form(f"{PK_PREFIX}add_form", clear_on_submit=True):
            name = st.text_input("Nome do item", max_chars=MAX_NAME_LENGTH, placeholder="Digite o nome")
            if st.form_submit_button("Adicionar", type="primary"):
                try:
                    push_notice(notices.item_added(manager.add(name)))
                except PickerError as e:
                    push_notice(notices.notice_for_error(e))
                st.rerun()


def _item_row(manager, item, editing_id):
    selected = manager.selected
    is_selected = selected is not None and selected.id == item.id
    c_name, c_edit, c_del = st.columns([6, 1, 1], vertical_alignment="center")

    if editing_id == item.id:
        with c_name:
            new_name = st.text_input(
                "Novo nome", value=item.name, max_chars=MAX_NAME_LENGTH,
                key=f"{PK_PREFIX}edit_input_{item.id}", label_visibility="collapsed",
            )
        if c_edit.button("✔", key=f"{PK_PREFIX}save_{item.id}", help="Salvar"):
            try:
                push_notice(notices.item_updated(manager.edit(item.id, new_name)))
                st.session_state[EDITING_KEY] = None
            except PickerError as e:
                push_notice(notices.notice_for_error(e))
            st.rerun()
        if c_del.button("✖", key=f"{PK_PREFIX}cancel_{item.id}", help="Cancelar"):
            st.session_state[EDITING_KEY] = None
            st.rerun()
        return

    badge = " ⭐ selecionado" if is_selected else ""
    c_name.markdown(
        f"<span style='color:{item.color}'>●</span> <b>{html.escape(item.name)}</b>{badge}",
        unsafe_allow_html=True,
    )
    locked = editing_id is not None
    if c_edit.button("✏️", key=f"{PK_PREFIX}edit_{item.id}", help="Editar", disabled=locked):
        st.session_state[EDITING_KEY] = item.id
        st.rerun()
    if c_del.button("🗑️", key=f"{PK_PREFIX}del_{item.id}", help="Remover", disabled=locked):
        manager.remove(item.id)
        push_notice(notices.item_removed(item))
        st.rerun()


def render():
    st.subheader("🗂️ Itens")
    manager = get_manager()
    st.session_state.setdefault(EDITING_KEY, None)

    _add_form(manager)
    st.divider()

    query = st.text_input("Buscar item", key=f"{PK_PREFIX}search", placeholder="Digite parte do nome")
    items = manager.items
    shown = manager.search(query)

    if query.strip():
        st.caption(f"Mostrando {len(shown)} / {len(items)} itens")
    else:
        st.caption(f"{len(items)} itens no total")

    if not items:
        st.info("Ainda não há itens. Adicione o primeiro acima!")
        return
    if not shown:
        st.warning("Nenhum item encontrado. Tente outra busca.")
        return

    editing_id = st.session_state[EDITING_KEY]
    if editing_id is not None and manager.get(editing_id) is None:
        editing_id = st.session_state[EDITING_KEY] = None
    for item in shown:
        _item_row(manager, item, editing_id)

    st.divider()
    with st.expander("Tabela / exportar"):
        st.dataframe(items_to_frame(shown), use_container_width=True, hide_index=True)
        st.download_button(
            "⬇️ Baixar CSV",
            data=items_to_csv(items),
            file_name="itens.csv",
            mime="text/csv",
            key=f"{PK_PREFIX}download_csv",
        )
