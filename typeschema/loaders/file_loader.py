from typing import NamedTuple, Optional

import chardet


class LoadResult(NamedTuple):
    content: Optional[str]
    error: Optional[str]


def decode_bytes(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass
    guess = chardet.detect(raw)
    encoding = guess["encoding"] or "utf-8"
    try:
        return raw.decode(encoding, errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def load_local_file(file_path: str) -> LoadResult:
    try:
        with open(file_path, "rb") as f:
            raw = f.read()
    except OSError as e:
        return LoadResult(None, str(e))
    return LoadResult(decode_bytes(raw), None)
