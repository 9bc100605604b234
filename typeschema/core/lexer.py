OPENERS = "<({["
CLOSERS = ">)}]"
QUOTES = "\"'`"


def _scan(text: str):
    """Yield (index, char, depth) for every character outside string literals.

    Depth is the nesting level *before* the character is applied. A single
    counter is shared by all bracket kinds, so brackets only need to balance
    overall. The ``>`` of an arrow (``=>``) never closes a level.
    """
    depth = 0
    quote = None
    escaped = False
    for i, ch in enumerate(text):
        if quote:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in QUOTES:
            quote = ch
            continue
        yield i, ch, depth
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS:
            if ch == ">" and i > 0 and text[i - 1] == "=":
                continue
            depth = max(depth - 1, 0)


def split_at_depth_zero(text: str, delimiters: str, maxsplit: int = -1) -> list[str]:
    parts = []
    start = 0
    for i, ch, depth in _scan(text):
        if maxsplit >= 0 and len(parts) >= maxsplit:
            break
        if depth == 0 and ch in delimiters:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return parts


def split_top_level(text: str, delimiters: str, maxsplit: int = -1) -> list[str]:
    """Split ``text`` on delimiters that sit outside any nested group.

    Text that is a single ``{...}`` group is split on its members, so
    ``{a: string; b: number}`` gives ``["a: string", " b: number"]``.
    """
    stripped = text.strip()
    if stripped.startswith("{") and matching_close(stripped, 0) == len(stripped) - 1:
        text = stripped[1:-1]
    return split_at_depth_zero(text, delimiters, maxsplit)


def find_top_level(text: str, token: str) -> int:
    for i, ch, depth in _scan(text):
        if depth == 0 and text.startswith(token, i):
            return i
    return -1


def matching_close(text: str, start: int) -> int:
    """Index of the bracket closing the one at ``start``, or -1."""
    if start >= len(text) or text[start] not in OPENERS:
        return -1
    base = None
    for i, ch, depth in _scan(text):
        if i < start:
            continue
        if i == start:
            base = depth
            continue
        if base is None:
            return -1
        if ch in CLOSERS and depth == base + 1:
            if ch == ">" and text[i - 1] == "=":
                continue
            return i
    return -1


def has_top_level(text: str, delimiters: str) -> bool:
    return len(split_at_depth_zero(text, delimiters, maxsplit=1)) > 1
