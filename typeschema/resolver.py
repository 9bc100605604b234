import json
import os
import posixpath
from typing import Optional

from typeschema.errors import ManifestError
from typeschema.loaders.loaders import Loader, is_github_url

MANIFEST = "package.json"


def normalize_target(target: str, cwd: Optional[str] = None) -> str:
    if is_github_url(target):
        return target.rstrip("/")
    return os.path.normpath(os.path.join(cwd or os.getcwd(), target))


def read_main_field(manifest_path: str, loader: Loader) -> str:
    result = loader(manifest_path)
    if result.error is not None:
        raise ManifestError(f"Error reading {MANIFEST} from directory: {result.error}")
    try:
        manifest = json.loads(result.content)
    except ValueError as e:
        raise ManifestError(f"Invalid {MANIFEST} at {manifest_path}: {e}")
    main = manifest.get("main") if isinstance(manifest, dict) else None
    if not isinstance(main, str) or not main.strip():
        raise ManifestError(f'No "main" field found in {MANIFEST}')
    return main.strip()


def resolve_entry_point(target: str, loader: Loader, cwd: Optional[str] = None, default_branch: str = "main") -> str:
    """Path or URL of the module to analyze.

    File references are used as they are; a directory or repository root is
    resolved through the "main" field of its package.json.
    """
    path = normalize_target(target, cwd)
    if is_github_url(path):
        if "/blob/" in path:
            return path
        base = f"{path}/blob/{default_branch}/"
        main = read_main_field(base + MANIFEST, loader)
        return base + posixpath.normpath(main).lstrip("/")

    if not os.path.isdir(path):
        return path
    main = read_main_field(os.path.join(path, MANIFEST), loader)
    return os.path.normpath(os.path.join(path, main))
