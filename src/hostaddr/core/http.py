"""HTTP(S) hosts: the authority part of an http:// or https:// URL."""

from __future__ import annotations

import re
from dataclasses import dataclass

from hostaddr.core.host import Host
from hostaddr.core.port import Port
from hostaddr.errors import FormatError

HTTP_PORT = 80
HTTPS_PORT = 443

_SCHEMES = (("http://", False), ("https://", True))
_AUTHORITY_RE = re.compile(r"[^/?#]*")


def split_url(text: str) -> tuple[bool, str]:
    """Strip the scheme and anything after the authority.

    Args:
        text: e.g. 'https://[::1]:8443/path?q=1' or '10.0.0.1/index'

    Returns:
        Tuple of (secure, authority), e.g. (True, '[::1]:8443')
    """
    secure = False
    lowered = text.lower()
    for prefix, is_secure in _SCHEMES:
        if lowered.startswith(prefix):
            text = text[len(prefix) :]
            secure = is_secure
            break

    match = _AUTHORITY_RE.match(text)
    return secure, match.group() if match else ""


@dataclass(frozen=True, slots=True)
class HttpHost(Host):
    """A host reached over HTTP, or HTTPS when `secure` is set."""

    secure: bool = False

    @classmethod
    def parse(cls, text: str) -> HttpHost:
        secure, authority = split_url(text)
        try:
            host = Host.parse(authority)
        except FormatError as e:
            raise FormatError(e.kind, text, e.detail) from e
        return cls(host.address, host.port, secure)

    @classmethod
    def validate(cls, text: str) -> bool:
        try:
            cls.parse(text)
        except FormatError:
            return False
        return True

    @property
    def scheme(self) -> str:
        return "https" if self.secure else "http"

    @property
    def default_port(self) -> Port:
        return Port(HTTPS_PORT if self.secure else HTTP_PORT)

    @property
    def effective_port(self) -> Port:
        """The explicit port, or the scheme's default one."""
        return self.port if self.port is not None else self.default_port

    def url(self, path: str = "/") -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.scheme}://{self.format()}{path}"

    def __str__(self) -> str:
        return self.url()
