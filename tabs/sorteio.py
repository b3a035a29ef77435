# tabs/sorteio.py — botão de sorteio, animação do giro e resultado
from __future__ import annotations
import html
import streamlit as st

import notices
from picker_errors import PickerError
from picker_settings import get_settings
from random_selector import RandomSelector, SleepScheduler
from tabs.common import PK_PREFIX, get_manager, show_notice

SELECTOR_KEY = f"{PK_PREFIX}selector"


def _get_selector() -> RandomSelector:
    if SELECTOR_KEY not in st.session_state:
        interval = get_settings()["frame_interval_ms"]
        st.session_state[SELECTOR_KEY] = RandomSelector(SleepScheduler(), interval_ms=interval)
    return st.session_state[SELECTOR_KEY]


def _render_result(box, item, selecting: bool):
    if item is None:
        box.empty()
        return
    title = "🔄 Sorteando..." if selecting else "🎉 Resultado"
    footer = "" if selecting else "<p style='color:#c2410c'>Parabéns! Esta é a sua escolha ✨</p>"
    box.markdown(
        f"""
<div style="text-align:center;padding:1.5rem;border-radius:1rem;background:#fff7ed">
  <h3 style="color:#9a3412">{title}</h3>
  <div style="display:inline-block;padding:1rem 2rem;border-radius:1rem;color:white;
              font-weight:700;font-size:1.6rem;background:{item.color}">{html.escape(item.name)}</div>
  {footer}
</div>
""",
        unsafe_allow_html=True,
    )


def _spin(manager, box):
    selector = _get_selector()

    def on_frame(pick):
        _render_result(box, pick.displayed, selecting=True)

    def on_settle(pick):
        manager.select(pick.result.id)
        _render_result(box, pick.result, selecting=False)

    try:
        pick = selector.select(manager.items, on_frame=on_frame, on_settle=on_settle)
    except PickerError as e:
        show_notice(notices.notice_for_error(e))
        return

    manager.clear_selection()
    try:
        selector.scheduler.run_until_idle()
    finally:
        # rerun no meio do giro: descarta o sorteio
        selector.abandon()
    if pick.settled:
        show_notice(notices.pick_settled(pick.result))


def _render_stats(manager):
    stats = manager.stats()
    if not stats["total"]:
        return
    c1, c2, c3 = st.columns(3)
    c1.metric("Total de itens", stats["total"])
    c2.metric("Chance por item", f"{stats['probability_pct']}%")
    c3.metric("Selecionado", stats["selected"])


def render():
    st.subheader("🎲 Sorteio")
    manager = get_manager()
    items = manager.items

    st.caption(f"Sorteando entre {len(items)} itens" if items else "Adicione itens primeiro")
    clicked = st.button(
        "🔀 Sortear",
        type="primary",
        disabled=not items,
        use_container_width=True,
        key=f"{PK_PREFIX}spin",
    )
    if not items:
        st.caption("Use a aba Itens ou Importar para montar a lista.")

    box = st.empty()
    if clicked:
        _spin(manager, box)
    else:
        _render_result(box, manager.selected, selecting=False)

    st.divider()
    _render_stats(manager)
