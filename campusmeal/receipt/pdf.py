"""Minimal single-page PDF writer for receipts.

The document always has the same five objects: catalog, page tree, one
612x792 page, the built-in Helvetica font, and a content stream with one
line of 14pt text per input line, starting at y=780 and stepping down 18
units. There is no wrapping and no pagination: lines that run past the
bottom edge are placed at negative coordinates and are not visible.
"""

from __future__ import annotations

from collections.abc import Sequence

PAGE_WIDTH = 612
PAGE_HEIGHT = 792
FONT_NAME = "Helvetica"
FONT_SIZE = 14
LEFT_MARGIN = 72
FIRST_BASELINE = 780
LINE_HEIGHT = 18

# Helvetica's built-in encoding is WinAnsi; cp1252 is its Python counterpart.
TEXT_ENCODING = "cp1252"


def escape_text(text: str) -> str:
    """Escape a string for use inside a PDF literal string."""
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def lines_per_page() -> int:
    """Number of lines whose baseline stays on the page."""
    return FIRST_BASELINE // LINE_HEIGHT + 1


def build_text_stream(lines: Sequence[str]) -> str:
    """Build the content stream text positioning each line top-down."""
    commands = ["BT", f"/F1 {FONT_SIZE} Tf"]
    y = FIRST_BASELINE
    for line in lines:
        commands.append(f"1 0 0 1 {LEFT_MARGIN} {y} Tm")
        commands.append(f"({escape_text(line)}) Tj")
        y -= LINE_HEIGHT
    commands.append("ET")
    return "\n".join(commands)


def encode(lines: Sequence[str]) -> bytes:
    """Render ``lines`` as a one-page PDF document.

    Output is deterministic: the same lines always yield the same bytes.
    Characters outside the font encoding are replaced with ``?``.
    """
    stream = build_text_stream(lines).encode(TEXT_ENCODING, errors="replace")

    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Count 1 /Kids [3 0 R] >>",
        (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] "
            "/Resources << /Font << /F1 4 0 R >> >> /Contents 5 0 R >>"
        ).encode("ascii"),
        f"<< /Type /Font /Subtype /Type1 /BaseFont /{FONT_NAME} >>".encode("ascii"),
        b"<< /Length " + str(len(stream)).encode("ascii") + b" >>\nstream\n" + stream + b"\nendstream",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out.extend(f"{number} 0 obj\n".encode("ascii"))
        out.extend(body)
        out.extend(b"\nendobj\n")

    xref_position = len(out)
    size = len(objects) + 1
    out.extend(f"xref\n0 {size}\n".encode("ascii"))
    out.extend(b"0000000000 65535 f \n")
    for offset in offsets:
        out.extend(f"{offset:010d} 00000 n \n".encode("ascii"))

    out.extend(
        (f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref_position}\n%%EOF").encode("ascii")
    )
    return bytes(out)


__all__ = ["encode", "escape_text", "build_text_stream", "lines_per_page"]
