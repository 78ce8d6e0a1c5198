"""
Text helpers for provider request limits and placeholder substitution.
"""

import re

# A sentence ends at terminal punctuation (including the Devanagari danda)
# followed by whitespace, or at a run of newlines.
_PIECE_PATTERN = re.compile(r".*?(?:[.!?।]+\s+|\n+|$)", re.DOTALL)


def split_text_smart(text: str, max_chars: int) -> list[str]:
    """
    Split text into chunks of at most *max_chars* characters.

    Chunks break at sentence or line boundaries where possible and fall back
    to a hard character split. ``"".join(chunks) == text`` always holds.
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")
    if len(text) <= max_chars:
        return [text]

    pieces = [p for p in _PIECE_PATTERN.findall(text) if p]

    chunks: list[str] = []
    current = ""
    for piece in pieces:
        if len(piece) > max_chars:
            if current:
                chunks.append(current)
                current = ""
            for i in range(0, len(piece), max_chars):
                chunks.append(piece[i : i + max_chars])
        elif len(current) + len(piece) > max_chars:
            chunks.append(current)
            current = piece
        else:
            current += piece

    if current:
        chunks.append(current)
    return chunks


def split_surrounding_whitespace(text: str) -> tuple[str, str, str]:
    """Return (leading, core, trailing) so the core can be sent on its own."""
    core = text.strip()
    if not core:
        return text, "", ""
    start = text.index(core)
    return text[:start], core, text[start + len(core):]


def interpolate(text: str, **params) -> str:
    """Replace ``{name}`` placeholders by literal substitution.

    Unknown placeholders are left in place.
    """
    for name, value in params.items():
        text = text.replace("{" + name + "}", str(value))
    return text
