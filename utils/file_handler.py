import logging
import random
from pathlib import Path
from typing import List, Optional

log = logging.getLogger(__name__)

_FALLBACK = [
    "Съешь же ещё этих мягких французских булок, да выпей чаю",
    "В чащах юга жил бы цитрус? Да, но фальшивый экземпляр!",
    "The quick brown fox jumps over the lazy dog",
    "Pack my box with five dozen liquor jugs",
]


def _load_blocks(path: Path) -> List[str]:
    txt = path.read_text(encoding="utf-8").strip().replace("\r\n", "\n")
    # phrases are typed into a single line, so fold any wrapping
    return [" ".join(b.split()) for b in txt.split("\n\n") if b.strip()]


def load_phrases(path: str) -> List[str]:
    """Phrases are blocks separated by blank lines; built-ins when the file is missing or empty."""
    p = Path(path)
    if not p.exists():
        return list(_FALLBACK)
    try:
        blocks = _load_blocks(p)
    except (OSError, UnicodeDecodeError) as e:
        log.warning("Failed to load phrases from %s: %s", p, e)
        return list(_FALLBACK)
    return blocks or list(_FALLBACK)


def pick_phrase(phrases: List[str], previous: Optional[str] = None, rng=random) -> str:
    pool = [p for p in phrases if p != previous] or list(phrases)
    if not pool:
        return _FALLBACK[0]
    return rng.choice(pool)
