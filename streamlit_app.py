from __future__ import annotations
import streamlit as st

from picker_settings import configure_logging, get_settings
from tabs import importar, itens, sorteio
from tabs.common import flush_notices

st.set_page_config(page_title="Random Picker", page_icon="🎲", layout="wide")
configure_logging(get_settings()["log_level"])

st.title("🎲 Seletor aleatório")
st.caption("Monte sua lista e deixe a sorte escolher.")

# Avisos enfileirados antes do último rerun
flush_notices()

tab_pick, tab_items, tab_import = st.tabs(["🎲 Sorteio", "🗂️ Itens", "📋 Importar"])

with tab_pick:
    try:
        sorteio.render()
    except Exception as e:
        st.error("Falha ao renderizar a aba Sorteio.")
        st.exception(e)

with tab_items:
    try:
        itens.render()
    except Exception as e:
        st.error("Falha ao renderizar a aba Itens.")
        st.exception(e)

with tab_import:
    try:
        importar.render()
    except Exception as e:
        st.error("Falha ao renderizar a aba Importar.")
        st.exception(e)
