"""Color & style helpers for the todo report.

Decisions:
- Each priority gets its own heading color; completed entries use TODO_DONE.
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import logging
import os, sys
from pathlib import Path

logger = logging.getLogger(__name__)

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

PALETTE_KEYS = ('TODO_PRIMARY', 'TODO_HIGH', 'TODO_MEDIUM', 'TODO_LOW', 'TODO_DONE')

def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    return f"\033[38;5;{16 + 36 * r6 + 6 * g6 + b6}m"

def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)

def read_env_file(path: Path) -> dict[str, str]:
    """Collect valid palette overrides from a KEY=VALUE file."""
    overrides: dict[str, str] = {}
    try:
        lines = path.read_text(encoding='utf-8').splitlines()
    except OSError as exc:
        logger.debug("Skipping palette file %s: %s", path, exc)
        return overrides
    for line in lines:
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = (part.strip() for part in line.split('=', 1))
        if k in PALETTE_KEYS and _is_hex(v):
            overrides[k] = '#' + v.lstrip('#')
    return overrides

def _resolve(key: str, default: str) -> str:
    # priority: real env var > .env override > default
    value = os.environ.get(key)
    if value and _is_hex(value):
        return '#' + value.lstrip('#')
    return _ENV_OVERRIDES.get(key, default)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

# Default palette
HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_HIGH_DEFAULT = '#E5534B'
HEX_MEDIUM_DEFAULT = '#F6C177'
HEX_LOW_DEFAULT = '#48B3AF'
HEX_DONE_DEFAULT = '#A7E399'

_env_path = Path(__file__).resolve().parent.parent / '.env'
_ENV_OVERRIDES: dict[str, str] = read_env_file(_env_path) if _env_path.exists() else {}

HEX_PRIMARY = _resolve('TODO_PRIMARY', HEX_PRIMARY_DEFAULT)
HEX_HIGH = _resolve('TODO_HIGH', HEX_HIGH_DEFAULT)
HEX_MEDIUM = _resolve('TODO_MEDIUM', HEX_MEDIUM_DEFAULT)
HEX_LOW = _resolve('TODO_LOW', HEX_LOW_DEFAULT)
HEX_DONE = _resolve('TODO_DONE', HEX_DONE_DEFAULT)

PRIMARY = _from_hex(HEX_PRIMARY)

PRIORITY_COLOR = {
    'high': _from_hex(HEX_HIGH),
    'medium': _from_hex(HEX_MEDIUM),
    'low': _from_hex(HEX_LOW),
}

HEADER_COLOR = PRIMARY
ID_COLOR = PRIMARY + BOLD
DONE_COLOR = _from_hex(HEX_DONE)
MUTED_COLOR = DIM

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','RESET','BOLD','DIM','PRIORITY_COLOR','HEADER_COLOR','ID_COLOR','DONE_COLOR','MUTED_COLOR',
    'HEX_PRIMARY','HEX_HIGH','HEX_MEDIUM','HEX_LOW','HEX_DONE','read_env_file'
]
