from functools import partial
from typing import Callable, Optional

from typeschema.loaders.file_loader import LoadResult, load_local_file
from typeschema.loaders.github_loader import load_github_file
from typeschema.loaders.octokit_loader import make_github_api_loader

Loader = Callable[[str], LoadResult]


def is_github_url(path: str) -> bool:
    return path.startswith("https://github.com/")


def get_file_loader(file_path: str, github_token: Optional[str] = None, timeout: float = 30) -> Loader:
    if is_github_url(file_path):
        if github_token:
            return make_github_api_loader(github_token, timeout=timeout)
        return partial(load_github_file, timeout=timeout)
    return load_local_file
