from urllib.parse import urlsplit, urlunsplit

import requests

from typeschema.loaders.file_loader import LoadResult

RAW_HOST = "raw.githubusercontent.com"


def to_raw_url(github_url: str) -> str:
    parts = urlsplit(github_url)
    path = parts.path.replace("/blob/", "/", 1)
    return urlunsplit((parts.scheme, RAW_HOST, path, parts.query, ""))


def load_github_file(github_url: str, timeout: float = 30) -> LoadResult:
    try:
        response = requests.get(to_raw_url(github_url), timeout=timeout)
    except requests.RequestException as e:
        return LoadResult(None, str(e))
    if not response.ok:
        return LoadResult(None, f"Failed to fetch: {response.reason}")
    return LoadResult(response.text, None)
