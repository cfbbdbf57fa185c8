import typing as _ty
import uritools as _uritools
import ipaddress as _ip

_IPAddress = _ip.IPv4Address | _ip.IPv6Address


class Source(_ty.NamedTuple):
    scheme: str | None
    userinfo: str | None
    host: str | _IPAddress | None
    port: int | None

    def __bool__(self):
        if not self.scheme:
            return False
        return True

    def __str__(self) -> str:
        return _uritools.uricompose(
            scheme=self.scheme, userinfo=self.userinfo, host=self.host, port=self.port
        )

    def parsed_userinfo(self):
        parts = []
        if self.userinfo:
            parts = self.userinfo.split(":", maxsplit=1)
        parts = parts + ["", ""]
        return parts[0], parts[1]

    def has_authority(self):
        return any(part is not None for part in (self.userinfo, self.host, self.port))

    def authority(self) -> str | None:
        """The raw ``userinfo@host:port`` component, ``None`` when absent."""
        if not self.has_authority():
            return None
        composed = _uritools.uricompose(
            userinfo=self.userinfo, host=self.host or "", port=self.port
        )
        return _uritools.urisplit(composed).authority


_NOSOURCE = Source(None, None, None, None)
