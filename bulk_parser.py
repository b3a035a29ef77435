"""Parser da importação em lote: texto colado -> nomes candidatos.

Separadores aceitos: quebra de linha, vírgula, ponto e vírgula e barra vertical.
Fragmentos são aparados, filtrados por tamanho (1..20) e comparados sem
diferenciar maiúsculas com os nomes já existentes. Repetições dentro do próprio
texto colado são mantidas.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List
import re

from picker_settings import MAX_NAME_LENGTH

DELIMITERS_RE = re.compile(r"[\n,;|]")


class ParseOutcome(str, Enum):
    OK = "ok"
    NO_VALID_ENTRIES = "no_valid_entries"
    ALL_DUPLICATES = "all_duplicates"


@dataclass
class ParseResult:
    names: List[str] = field(default_factory=list)
    outcome: ParseOutcome = ParseOutcome.NO_VALID_ENTRIES
    duplicates: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.outcome is ParseOutcome.OK


def split_fragments(raw_text: str, max_length: int = MAX_NAME_LENGTH) -> List[str]:
    """Fragmentos válidos (aparados, 1..max_length chars), na ordem do texto."""
    fragments = (part.strip() for part in DELIMITERS_RE.split(raw_text or ""))
    return [frag for frag in fragments if 0 < len(frag) <= max_length]


def parse_bulk_text(raw_text: str, existing_names: Iterable[str] = ()) -> ParseResult:
    fragments = split_fragments(raw_text)
    if not fragments:
        return ParseResult(outcome=ParseOutcome.NO_VALID_ENTRIES)

    existing = {name.lower() for name in existing_names}
    names: List[str] = []
    duplicates: List[str] = []
    for frag in fragments:
        if frag.lower() in existing:
            duplicates.append(frag)
        else:
            names.append(frag)

    if not names:
        return ParseResult(outcome=ParseOutcome.ALL_DUPLICATES, duplicates=duplicates)
    return ParseResult(names=names, outcome=ParseOutcome.OK, duplicates=duplicates)
