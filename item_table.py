"""Visão tabular (pandas) da lista de itens + exportação CSV."""
from __future__ import annotations
from pathlib import Path
from typing import Sequence
import logging

import pandas as pd

from item_store import Item

logger = logging.getLogger(__name__)

COLUMNS = ["id", "name", "color"]


def items_to_frame(items: Sequence[Item]) -> pd.DataFrame:
    df = pd.DataFrame([it.to_dict() for it in items], columns=COLUMNS)
    return df.astype(str)


def items_to_csv(items: Sequence[Item]) -> str:
    return items_to_frame(items).to_csv(index=False)


def export_csv(items: Sequence[Item], path: Path) -> Path:
    path = Path(path)
    if path.parent:
        path.parent.mkdir(parents=True, exist_ok=True)
    items_to_frame(items).to_csv(path, index=False, encoding="utf-8")
    logger.info(f"{len(items)} item(ns) exportados para {path}")
    return path
