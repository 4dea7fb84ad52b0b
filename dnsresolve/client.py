from dns import resolver, reversename
from dns.exception import DNSException
from ipaddress import ip_address

DEFAULT_TIMEOUT = 2.0


class DNSClient:
    """Thin wrapper over the dnspython stub resolver.

    Every lookup raises ``DNSException`` on failure. A name that exists but
    carries no record of the requested type yields an empty list.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, nameservers: list[str] | None = None):
        self._resolver = resolver.Resolver()
        self._resolver.timeout = timeout
        self._resolver.lifetime = timeout * 2
        if nameservers:
            self._resolver.nameservers = list(nameservers)

    @property
    def nameservers(self) -> list[str]:
        return [str(ns) for ns in self._resolver.nameservers]

    def _answer(self, domain: str, rtype: str) -> list:
        try:
            return list(self._resolver.resolve(domain, rtype))
        except resolver.NoAnswer:
            return []

    def lookup_ip(self, domain: str) -> list[str]:
        """IPv4 then IPv6 addresses. Fails only if both families fail."""
        addresses = []
        error = None
        for rtype in ("A", "AAAA"):
            try:
                addresses.extend(str(r) for r in self._answer(domain, rtype))
            except DNSException as e:
                error = e
        if error is not None and not addresses:
            raise error
        return addresses

    def lookup_cname(self, domain: str) -> str:
        answer = self._resolver.resolve(domain, "A", raise_on_no_answer=False)
        return str(answer.canonical_name).rstrip(".")

    def lookup_mx(self, domain: str) -> list[tuple[str, int]]:
        return [(str(r.exchange).rstrip("."), r.preference) for r in self._answer(domain, "MX")]

    def lookup_txt(self, domain: str) -> list[str]:
        return [b"".join(r.strings).decode("utf-8", errors="replace") for r in self._answer(domain, "TXT")]

    def lookup_ns(self, domain: str) -> list[str]:
        return [str(r.target).rstrip(".") for r in self._answer(domain, "NS")]

    def reverse_lookup(self, ip: str) -> list[str]:
        rev = reversename.from_address(ip)
        try:
            return [str(r).rstrip(".") for r in self._resolver.resolve(rev, "PTR")]
        except (resolver.NoAnswer, resolver.NXDOMAIN):
            return []


def is_ip(value: str) -> bool:
    try:
        ip_address(value)
        return True
    except ValueError:
        return False
