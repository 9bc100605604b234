import os

from typeschema.errors import ModuleNotFound
from typeschema.oracles.typescript_oracle import TypeScriptOracle

ORACLE_MAP = {
    ".ts": TypeScriptOracle,
    ".mts": TypeScriptOracle,
    ".cts": TypeScriptOracle,
    ".tsx": TypeScriptOracle,
    ".js": TypeScriptOracle,
    ".jsx": TypeScriptOracle,
    ".mjs": TypeScriptOracle,
    ".cjs": TypeScriptOracle,
}


def get_oracle(file_name: str, content: str):
    ext = os.path.splitext(file_name)[1].lower()
    oracle_cls = ORACLE_MAP.get(ext)
    if oracle_cls is None:
        raise ModuleNotFound(f"Could not find a type oracle for module: {file_name}")
    return oracle_cls(file_name, content)
