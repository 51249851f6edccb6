"""Split raw text into sections separated by blank lines."""

from __future__ import annotations

from typing import List


def _iter_lines(raw_text: str) -> List[str]:
    # A final "\n" terminates the last line rather than starting an empty one
    lines = raw_text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def split_text_into_chunks(raw_text: str, flush_trailing: bool = False) -> List[str]:
    """Split text into chunks of consecutive non-blank lines.

    Each non-blank line is kept verbatim and terminated with ``"\\n"``. A
    blank (whitespace-only) line closes the current chunk. A section that is
    not followed by a blank line is dropped unless ``flush_trailing`` is set.

    Args:
        raw_text: Text to split
        flush_trailing: Emit the final section even without a closing blank line

    Returns:
        Chunks in document order; never contains an empty chunk

    Example:
        >>> split_text_into_chunks("A\\nB\\n\\nC\\n")
        ['A\\nB\\n']
        >>> split_text_into_chunks("A\\nB\\n\\nC\\n", flush_trailing=True)
        ['A\\nB\\n', 'C\\n']
    """
    chunks: List[str] = []
    current: List[str] = []

    for line in _iter_lines(raw_text):
        if line.strip():
            current.append(line + "\n")
        elif current:
            chunks.append("".join(current))
            current = []

    if flush_trailing and current:
        chunks.append("".join(current))

    return chunks
