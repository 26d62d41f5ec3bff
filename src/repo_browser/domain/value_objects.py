"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from repo_browser.domain.exceptions import InvalidFormatError

_GITHUB_URL_RE = re.compile(
    r"github\.com/(?P<owner>[^/\s?#]*)/(?P<name>[^/\s?#]*)", re.IGNORECASE
)
_SHORTHAND_RE = re.compile(r"^(?P<owner>[A-Za-z0-9-]+)/(?P<name>[^/\s?#]+)/?$")
_GIT_SUFFIX = ".git"


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """Owner / name pair identifying a GitHub repository.

    Built from a URL like ``https://github.com/psf/requests.git`` (any text
    containing ``github.com/<owner>/<name>`` works, extra segments after the
    name are ignored) or from the ``psf/requests`` shorthand.
    """

    owner: str
    name: str

    @classmethod
    def parse(cls, text: str) -> RepositoryRef:
        """Extract the repository reference from *text*."""
        stripped = text.strip()
        match = _GITHUB_URL_RE.search(stripped) or _SHORTHAND_RE.match(stripped)
        if not match:
            raise InvalidFormatError(
                f"Invalid GitHub repository URL: '{stripped}'. "
                "Expected format: https://github.com/<owner>/<repo>"
            )

        owner = match["owner"]
        name = match["name"]
        while name.endswith(_GIT_SUFFIX):
            name = name[: -len(_GIT_SUFFIX)]
        if not owner or not name:
            raise InvalidFormatError(
                f"Invalid GitHub repository URL: '{stripped}'. "
                "Both the owner and the repository name are required."
            )
        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
