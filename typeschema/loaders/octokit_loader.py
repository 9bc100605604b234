from urllib.parse import urlsplit

from github import Auth, Github, GithubException

from typeschema.loaders.file_loader import LoadResult, decode_bytes


def parse_github_url(github_url: str):
    """Split https://github.com/<owner>/<repo>/blob/<ref>/<path> into its parts."""
    segments = [s for s in urlsplit(github_url).path.split("/") if s]
    if len(segments) < 5 or segments[2] != "blob":
        raise ValueError(f"Not a GitHub file URL: {github_url}")
    owner, repo, _, ref = segments[:4]
    return owner, repo, ref, "/".join(segments[4:])


def make_github_api_loader(token: str, timeout: float = 30):
    client = Github(auth=Auth.Token(token), timeout=int(timeout))

    def load_github_api_file(github_url: str) -> LoadResult:
        try:
            owner, repo, ref, path = parse_github_url(github_url)
        except ValueError as e:
            return LoadResult(None, str(e))
        try:
            contents = client.get_repo(f"{owner}/{repo}").get_contents(path, ref=ref)
        except GithubException as e:
            message = e.data.get("message") if isinstance(e.data, dict) else e.data
            return LoadResult(None, f"GitHub API error {e.status}: {message}")
        if isinstance(contents, list):
            return LoadResult(None, f"{path} is a directory")
        return LoadResult(decode_bytes(contents.decoded_content), None)

    return load_github_api_file
