# picker_settings.py
# --------------------------------------------------------------------------------------
# Configuração do Random Picker.
# Ordem de resolução: variáveis de ambiente -> arquivo de settings -> padrão.
#
# Crie picker_settings.json no diretório do projeto (preferido)
# ou ~/.random_picker.json (fallback) com:
# {
#   "store_path": "C:/Users/fulano/Documents/picker_store.json",
#   "log_level": "DEBUG",
#   "frame_interval_ms": 100
# }
# --------------------------------------------------------------------------------------
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import json
import logging
import os

logger = logging.getLogger(__name__)

# -----------------------------------
# Caminhos do projeto
# -----------------------------------
PROJECT_DIR = Path.cwd()
RAW_DIR = PROJECT_DIR / "raw"
DEFAULT_STORE_PATH = RAW_DIR / "picker_store.json"

SETTINGS_CANDIDATES = [
    PROJECT_DIR / "picker_settings.json",
    Path.home() / ".random_picker.json",
]

# -----------------------------------
# Constantes do domínio
# -----------------------------------
STORAGE_KEY = "randomItemSelector"
MAX_NAME_LENGTH = 20

FRAME_INTERVAL_MS = 100
MIN_FRAMES = 20
MAX_FRAMES = 29  # inclusivo

DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"

ENV_STORE_PATH = "RANDOM_PICKER_STORE_PATH"
ENV_LOG_LEVEL = "RANDOM_PICKER_LOG_LEVEL"
ENV_FRAME_INTERVAL = "RANDOM_PICKER_FRAME_INTERVAL_MS"


def _load_settings_file(candidates=None) -> Tuple[Optional[Path], Dict[str, Any]]:
    """Primeiro arquivo de settings válido entre os candidatos (ou (None, {}))."""
    for p in candidates if candidates is not None else SETTINGS_CANDIDATES:
        if not p.exists():
            continue
        try:
            with open(p, "r", encoding="utf-8") as f:
                cfg = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning(f"Ignorando arquivo de settings {p}: {exc}")
            continue
        if isinstance(cfg, dict):
            return p, cfg
        logger.warning(f"Ignorando arquivo de settings {p}: esperado objeto JSON")
    return None, {}


def _as_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_settings(candidates=None, environ=None) -> Dict[str, Any]:
    env = os.environ if environ is None else environ
    cfg_path, cfg = _load_settings_file(candidates)

    store_path = env.get(ENV_STORE_PATH) or cfg.get("store_path") or None
    store_path = Path(store_path).expanduser() if isinstance(store_path, str) else DEFAULT_STORE_PATH

    log_level = env.get(ENV_LOG_LEVEL) or cfg.get("log_level") or DEFAULT_LOG_LEVEL

    interval = env.get(ENV_FRAME_INTERVAL)
    if interval is None:
        interval = cfg.get("frame_interval_ms")
    frame_interval_ms = max(0, _as_int(interval, FRAME_INTERVAL_MS))

    return {
        "config_path": str(cfg_path) if cfg_path else None,
        "store_path": store_path,
        "log_level": str(log_level).upper(),
        "frame_interval_ms": frame_interval_ms,
    }


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
