from __future__ import annotations

from reportlab.pdfbase.pdfmetrics import stringWidth

ELLIPSIS = "…"
HYPHEN = "-"


def text_width(text: str, font: str, size: float) -> float:
    return stringWidth(text, font, size)


def split_long_word(word: str, font: str, size: float, max_width: float) -> list[str]:
    """
    Force-split a word that is wider than `max_width`, character by character.

    Every piece but the last carries a trailing hyphen and fits together with
    it; each piece keeps at least one character so the loop always advances.
    """

    pieces: list[str] = []
    rest = word
    while rest and text_width(rest, font, size) > max_width:
        n = 1
        while n < len(rest) and text_width(rest[: n + 1] + HYPHEN, font, size) <= max_width:
            n += 1
        pieces.append(rest[:n] + HYPHEN)
        rest = rest[n:]
    if rest:
        pieces.append(rest)
    return pieces


def _wrap_paragraph(words: list[str], font: str, size: float, max_width: float) -> list[str]:
    lines: list[str] = []
    current = ""
    for word in words:
        if text_width(word, font, size) > max_width:
            if current:
                lines.append(current)
            pieces = split_long_word(word, font, size, max_width)
            lines.extend(pieces[:-1])
            current = pieces[-1] if pieces else ""
            continue

        candidate = f"{current} {word}" if current else word
        if text_width(candidate, font, size) <= max_width:
            current = candidate
        else:
            lines.append(current)
            current = word

    if current:
        lines.append(current)
    return lines


def wrap_text(text: str, font: str, size: float, max_width: float) -> list[str]:
    """
    Greedy line fill on whitespace-delimited words, measured with the font's
    metrics. Explicit newlines start a new paragraph. Always returns at least
    one (possibly empty) line.
    """

    if max_width <= 0:
        raise ValueError("max_width must be > 0")

    lines: list[str] = []
    for paragraph in (text or "").split("\n"):
        lines.extend(_wrap_paragraph(paragraph.split(), font, size, max_width) or [""])
    return lines or [""]


def with_ellipsis(line: str, font: str, size: float, max_width: float) -> str:
    """Append the truncation marker, dropping trailing characters until it fits."""
    base = line.rstrip()
    while base and text_width(base + ELLIPSIS, font, size) > max_width:
        base = base[:-1].rstrip()
    return base + ELLIPSIS


def shade(color: tuple[float, float, float], factor: float) -> tuple[float, float, float]:
    """Darker (factor < 1) version of an RGB colour in 0..1."""
    r, g, b = (max(0.0, min(1.0, c * factor)) for c in color)
    return r, g, b
