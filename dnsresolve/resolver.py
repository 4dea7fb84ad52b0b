import logging
from ipaddress import ip_address, IPv4Address

from dns.exception import DNSException

from dnsresolve.cache import CacheStore
from dnsresolve.normalize import normalize
from dnsresolve.records import Category, RecordSet, RecordType

logger = logging.getLogger(__name__)

LOOKUP_ERRORS = (DNSException, OSError, ValueError)


class DomainResolver:
    """Resolves a domain into a RecordSet, going through a CacheStore.

    Each record category is looked up independently: a failed category is
    logged and left out of the result, the rest of the resolution goes on.
    """

    def __init__(self, client, cache: CacheStore | None = None, normalizer=normalize):
        self.client = client
        self.cache = cache if cache is not None else CacheStore()
        self.normalizer = normalizer

    def resolve(self, domain: str) -> RecordSet:
        domain = self.normalizer(domain)
        cached, found = self.cache.get(domain)
        if found:
            logger.debug("Cache hit: %s", domain)
            return cached

        result = RecordSet(domain)
        for category, lookup in (
            (Category.ADDRESS, self._addresses),
            (Category.CNAME, self._cname),
            (Category.MX, self._mx),
            (Category.TXT, self._txt),
            (Category.NS, self._ns),
        ):
            try:
                lookup(domain, result)
            except LOOKUP_ERRORS as e:
                logger.warning("Error looking up %s for %s: %s", category.value, domain, e)
                result.fail(category, e)

        self.cache.put(domain, result)
        return result

    def reverse(self, ip: str) -> list[str]:
        """Hostnames for ``ip``; empty on any failure. Not cached."""
        try:
            return self.client.reverse_lookup(ip)
        except LOOKUP_ERRORS as e:
            logger.warning("Error during reverse lookup of %s: %s", ip, e)
            return []

    def _addresses(self, domain: str, result: RecordSet):
        # classify everything before adding so a bad address adds nothing
        found = []
        for addr in self.client.lookup_ip(domain):
            rtype = RecordType.A if isinstance(ip_address(addr), IPv4Address) else RecordType.AAAA
            found.append((rtype, addr))
        for rtype, addr in found:
            result.add(rtype, addr)

    def _cname(self, domain: str, result: RecordSet):
        cname = self.client.lookup_cname(domain)
        if cname:
            result.add(RecordType.CNAME, cname)

    def _mx(self, domain: str, result: RecordSet):
        for host, pref in self.client.lookup_mx(domain):
            result.add(RecordType.MX, f"{host} (Priority: {pref})")

    def _txt(self, domain: str, result: RecordSet):
        for txt in self.client.lookup_txt(domain):
            result.add(RecordType.TXT, txt)

    def _ns(self, domain: str, result: RecordSet):
        for host in self.client.lookup_ns(domain):
            result.add(RecordType.NS, host)
