import os
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from typeschema.core.assembler import build
from typeschema.core.exports import enumerate_exports
from typeschema.errors import LoadError, SchemaError
from typeschema.loaders.loaders import Loader, is_github_url
from typeschema.registry.oracle_registry import get_oracle
from typeschema.resolver import resolve_entry_point


def module_file_name(module_path: str) -> str:
    if is_github_url(module_path):
        return os.path.basename(urlsplit(module_path).path)
    return module_path


def compute_schema(
    target_path: str,
    loader: Loader,
    cwd: Optional[str] = None,
    default_branch: str = "main",
) -> Dict[str, Any]:
    """JSON Schema of the exports of ``target_path``, or {"error", "kind"} on failure."""
    try:
        module_path = resolve_entry_point(target_path, loader, cwd=cwd, default_branch=default_branch)
        result = loader(module_path)
        if result.error is not None:
            raise LoadError(result.error)
        oracle = get_oracle(module_file_name(module_path), result.content)
        declarations = oracle.declarations()
        return build(enumerate_exports(declarations), oracle, declarations)
    except SchemaError as e:
        return e.to_dict()
