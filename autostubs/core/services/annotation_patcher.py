"""
Annotation patcher — put the annotation block into a stub's text.

The block is delimited by the same tag the AutoPageClassAnnotations
module for ProcessWire uses, so files annotated by it are picked up::

    /** @AutoPageClassAnnotations
     * ...
     * @AutoPageClassAnnotations */

1. An existing block (anywhere in the file) is replaced in place.
2. Otherwise a new block goes right above the class declaration line,
   at that line's indentation.
3. With neither, the text comes back untouched.

Everything outside the block is preserved byte for byte, and patching
twice with the same text gives the same result as patching once.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

BLOCK_TAG = "@AutoPageClassAnnotations"

# The body never spans another opening tag, so an unterminated block
# left in a file is not merged with the one after it
_OPEN = r"/\*\* " + re.escape(BLOCK_TAG)
_BLOCK_RE = re.compile(
    _OPEN + r"(?:(?!" + _OPEN + r")[\s\S])*? \* " + re.escape(BLOCK_TAG) + r" \*/"
)

# First class-like declaration at the start of a line
_DECLARATION_RE = re.compile(
    r"^(?P<indent>[ \t]*)(?:(?:abstract|final|readonly)\s+)*"
    r"(?:class|interface|trait|enum)\s+\w+",
    re.MULTILINE,
)


def doc_text(text: str) -> str:
    """Make free text safe for a single docblock line.

    Whitespace runs (newlines included) collapse to one space, and ``*/``
    is broken up so it cannot close the comment.
    """
    return " ".join(text.split()).replace("*/", "*\\/")


def wrap_annotations(annotations: str, indent: str = "") -> str:
    """Put the begin/end tags around annotation text."""
    block = f"/** {BLOCK_TAG}\n{annotations}\n * {BLOCK_TAG} */"
    if not indent:
        return block
    return "\n".join(indent + line for line in block.split("\n"))


def has_annotations(content: str) -> bool:
    return _BLOCK_RE.search(content) is not None


def patch_annotations(content: str, annotations: str) -> str:
    """Insert or replace the annotation block.

    Args:
        content: Current stub file text.
        annotations: Block body, as built by ``build_annotations``.

    Returns:
        The patched text; *content* itself if no class declaration
        could be found.
    """
    existing = _BLOCK_RE.search(content)
    if existing is not None:
        # Keep the indentation the block was written at
        line_start = content.rfind("\n", 0, existing.start()) + 1
        prefix = content[line_start:existing.start()]
        indent = prefix if prefix.strip(" \t") == "" else ""
        block = wrap_annotations(annotations, indent)[len(indent):]
        return content[: existing.start()] + block + content[existing.end():]

    declaration = _DECLARATION_RE.search(content)
    if declaration is None:
        logger.debug("No class declaration found — annotations not written")
        return content

    indent = declaration.group("indent")
    block = wrap_annotations(annotations, indent)
    pos = declaration.start()
    return content[:pos] + block + "\n" + content[pos:]
