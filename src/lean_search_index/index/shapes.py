"""Type-shape normalization and the type-shape index.

A shape reduces a Lean signature to the heads of its explicit arguments and
of its result type, e.g. ``{α β : Type} (f : α → β) (l : List α) : List β``
becomes ``fun -> List -> List``. Implicit and instance binders are dropped and
bound variables are replaced by ``_``, so declarations that differ only in
variable names or implicit arguments share a shape.
"""

import hashlib
import html
import logging
import re

from lean_search_index.models import SearchResult

logger = logging.getLogger(__name__)

SHAPE_SEPARATOR = " -> "
MAX_FILE_KEY_LENGTH = 200

_OPENERS = {"(": ")", "{": "}", "[": "]", "⦃": "⦄"}
_CLOSERS = frozenset(_OPENERS.values())
_ARROWS = ("→", "->")
_IDENTIFIER = re.compile(r"[^\s()\[\]{}⦃⦄,:→]+")
_TAG = re.compile(r"<[^>]*>")
_FILE_KEY_SAFE = re.compile(r"[a-z0-9.\-]")


def signature_from_header(header_html: str, name: str) -> str | None:
    """Extract the plain-text signature from a doc-gen4 declaration header.

    The header renders as ``<kind> <name> <binders> : <type>``; everything
    after the name is the signature.

    Args:
        header_html: Rendered HTML header of the declaration.
        name: Fully qualified declaration name.

    Returns:
        The signature text, or None if the header holds none.
    """
    if not header_html:
        return None

    text = html.unescape(_TAG.sub("", header_html))
    text = " ".join(text.split())

    match = re.search(rf"(?:^|\s){re.escape(name)}(?=\s|$)", text)
    if not match:
        return None

    signature = text[match.end() :].strip()
    return signature or None


def _matching_close(text: str, start: int) -> int:
    """Return the index closing the bracket opened at ``start``, or -1."""
    depth = 0
    for position in range(start, len(text)):
        character = text[position]
        if character in _OPENERS:
            depth += 1
        elif character in _CLOSERS:
            depth -= 1
            if depth == 0:
                return position
    return -1


def _find_top_level(text: str, token: str) -> int:
    """Return the first index of ``token`` outside any brackets, or -1.

    A lone ``:`` never matches the start of ``:=``.
    """
    depth = 0
    for position, character in enumerate(text):
        if character in _OPENERS:
            depth += 1
        elif character in _CLOSERS:
            depth = max(depth - 1, 0)
        elif depth == 0 and text.startswith(token, position):
            if token == ":" and text.startswith(":=", position):
                continue
            return position
    return -1


def _split_arrows(text: str) -> list[str]:
    """Split a type at its top-level arrows."""
    parts = []
    depth = 0
    current_start = 0
    position = 0
    while position < len(text):
        character = text[position]
        if character in _OPENERS:
            depth += 1
        elif character in _CLOSERS:
            depth = max(depth - 1, 0)
        elif depth == 0:
            arrow = next((a for a in _ARROWS if text.startswith(a, position)), None)
            if arrow is not None:
                parts.append(text[current_start:position].strip())
                position += len(arrow)
                current_start = position
                continue
        position += 1
    parts.append(text[current_start:].strip())
    return parts


def _parse_binders(signature: str) -> tuple[list[tuple[str, list[str], str]], str]:
    """Split a signature into its leading binders and its result type.

    Returns:
        Tuple of (binders, result_type) where each binder is
        ``(opening_bracket, bound_names, binder_type)``.
    """
    binders = []
    rest = signature.strip()

    while rest and rest[0] in _OPENERS:
        close = _matching_close(rest, 0)
        if close == -1:
            break
        bracket = rest[0]
        content = rest[1:close].strip()
        # strict implicit binders are written {{x : α}}
        if bracket == "{" and content.startswith("{") and content.endswith("}"):
            content = content[1:-1].strip()

        colon = _find_top_level(content, ":")
        if colon == -1:
            names, binder_type = [], content
        else:
            names = content[:colon].split()
            binder_type = content[colon + 1 :].strip()

        default = _find_top_level(binder_type, ":=")
        if default != -1:
            binder_type = binder_type[:default].strip()

        binders.append((bracket, names, binder_type))
        rest = rest[close + 1 :].strip()

    # a bare type such as "(α → β) → γ" opens with a parenthesized argument
    if rest.startswith(_ARROWS):
        return [], signature.strip()

    if rest.startswith(":") and not rest.startswith(":="):
        rest = rest[1:].strip()

    return binders, rest


def _argument_head(text: str, bound: set[str]) -> str:
    """Reduce one argument (or result) type to its head symbol."""
    text = text.strip()
    if len(_split_arrows(text)) > 1:
        return "fun"

    if text.startswith("(") and _matching_close(text, 0) == len(text) - 1:
        return _argument_head(text[1:-1], bound)

    match = _IDENTIFIER.search(text)
    if match is None:
        return "_"
    token = match.group(0)
    return "_" if token in bound else token


def type_shape(signature: str | None) -> str | None:
    """Normalize a signature into its type shape.

    Args:
        signature: Plain-text signature, with or without leading binders.

    Returns:
        The shape string, or None if the signature is missing or has no
        result type.
    """
    if not signature or not signature.strip():
        return None

    binders, result_type = _parse_binders(signature)
    if not result_type:
        return None

    bound = {name for _, names, _ in binders for name in names}

    heads = []
    for bracket, names, binder_type in binders:
        if bracket != "(":
            continue
        head = _argument_head(binder_type, bound)
        heads.extend([head] * max(len(names), 1))

    heads.extend(_argument_head(part, bound) for part in _split_arrows(result_type))
    return SHAPE_SEPARATOR.join(heads)


def shape_file_key(shape: str) -> str:
    """Map a shape to a file-name-safe key.

    Characters outside ``[a-z0-9.-]`` are written as ``_<hex code point>_``.
    Uppercase letters are escaped too, so keys that differ only in case stay
    distinct on case-insensitive file systems.
    Keys longer than MAX_FILE_KEY_LENGTH fall back to ``_sha1_<hex digest>``.
    """
    key = "".join(
        character
        if _FILE_KEY_SAFE.fullmatch(character)
        else f"_{ord(character):x}_"
        for character in shape
    )
    if len(key) > MAX_FILE_KEY_LENGTH:
        digest = hashlib.sha1(shape.encode("utf-8")).hexdigest()
        return f"_sha1_{digest}"
    return key


def build_type_index(store) -> dict[str, list[SearchResult]]:
    """Group every result that carries a signature by its type shape.

    Args:
        store: A DeclarationStore.

    Returns:
        Dictionary mapping shape strings to the results of that shape.
        Results without a usable signature are left out.
    """
    index: dict[str, list[SearchResult]] = {}
    without_shape = 0

    for key in store.keys():
        for result in store.get(key):
            shape = type_shape(result.signature)
            if shape is None:
                without_shape += 1
                continue
            index.setdefault(shape, []).append(result)

    logger.info(
        f"Type index holds {len(index)} shapes "
        f"({without_shape} declarations without a signature)"
    )
    return index
