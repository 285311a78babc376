"""
Validated references to encyclopedia articles.

A Locator is only ever built through Locator.parse or Locator.from_path,
both of which check the host against the configured allow-list, so every
link followed during a crawl is re-validated.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from ..config import HostConfig
from ..errors import InvalidHostError, InvalidUrlError

_HOSTED_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class Locator:
    """Immutable, host-validated article address.

    Attributes:
        address: The validated absolute address, exactly as constructed
        url: The parsed form of the address
    """

    address: str
    url: httpx.URL = field(compare=False, repr=False)

    @classmethod
    def parse(cls, address: str, hosts: HostConfig | None = None) -> Locator:
        """Build a Locator from an absolute address.

        Raises:
            InvalidUrlError: the address cannot be parsed or is relative
            InvalidHostError: the address has a host outside the allow-list
        """
        hosts = hosts or HostConfig()
        address = str(address)
        try:
            url = httpx.URL(address)
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise InvalidUrlError(address, str(exc)) from exc

        if not url.scheme:
            raise InvalidUrlError(address, "relative URL without a base")

        if url.scheme in _HOSTED_SCHEMES and not url.host:
            raise InvalidUrlError(address, "empty host")

        if url.host and url.host not in hosts.allowed_hosts:
            raise InvalidHostError(address, url.host)

        return cls(address=address, url=url)

    @classmethod
    def from_path(cls, path: str, hosts: HostConfig | None = None) -> Locator:
        """Build a Locator from an article path such as ``/wiki/Waffle``.

        Exactly one separator ends up between the canonical origin and the
        path: a leading separator is used as is, otherwise one is inserted.
        Backslashes are read as forward slashes.
        """
        hosts = hosts or HostConfig()
        path = str(path).replace("\\", "/")
        if path.startswith("/"):
            address = hosts.origin + path
        else:
            address = f"{hosts.origin}/{path}"
        return cls.parse(address, hosts)

    @property
    def host(self) -> str:
        return self.url.host

    @property
    def path(self) -> str:
        return self.url.path

    def __str__(self) -> str:
        return self.address
