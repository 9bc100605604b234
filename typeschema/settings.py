import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

TOKEN_VARS = ("OCTOKIT_API", "GITHUB_TOKEN")


@dataclass(frozen=True)
class Settings:
    github_token: Optional[str] = None
    default_branch: str = "main"
    http_timeout: float = 30.0


def load_settings(env: Optional[Mapping[str, str]] = None, dotenv_path: Optional[str] = None) -> Settings:
    """Build Settings from ``env`` or, when not given, from .env plus os.environ."""
    if env is None:
        load_dotenv(dotenv_path)
        env = os.environ

    token = next((env[var] for var in TOKEN_VARS if env.get(var)), None)
    try:
        timeout = float(env.get("TYPESCHEMA_HTTP_TIMEOUT", 30))
    except ValueError:
        raise ValueError(f"TYPESCHEMA_HTTP_TIMEOUT must be a number, got {env['TYPESCHEMA_HTTP_TIMEOUT']!r}")
    return Settings(
        github_token=token,
        default_branch=env.get("TYPESCHEMA_DEFAULT_BRANCH") or "main",
        http_timeout=timeout,
    )
