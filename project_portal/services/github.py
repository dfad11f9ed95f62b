"""Recognize GitHub repository shorthand typed into the picker.

Accepted forms:
- https://github.com/user/repo (any http(s) URL on github.com)
- github.com/user/repo
- user/repo
"""

import re
from urllib.parse import urlparse

_SHORTHAND = re.compile(r"^(github\.com/)?[\w\-.]+/[\w\-.]+(/.*)?$")


def is_github_url(text: str) -> bool:
    """Check whether text names a GitHub repository."""
    if not text or " " in text:
        return False
    parsed = urlparse(text)
    if parsed.scheme in ("http", "https"):
        return parsed.hostname == "github.com"
    if parsed.scheme:
        return False
    return bool(_SHORTHAND.match(text))


def normalize_github_url(text: str) -> str:
    """Expand shorthand into a full https URL."""
    if text.startswith("http"):
        return text
    if text.startswith("github.com/"):
        return f"https://{text}"
    return f"https://github.com/{text}"


def extract_repo_name(url: str) -> str:
    """Repository name from a GitHub URL, without a trailing .git."""
    parts = urlparse(url).path.strip("/").split("/")
    if len(parts) >= 2 and parts[1]:
        name = parts[1]
    else:
        name = url.rstrip("/").split("/")[-1] or "unknown-repo"
    return name.removesuffix(".git")
