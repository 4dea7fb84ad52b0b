import threading
from collections import Counter

import pytest
from dns.exception import DNSException


class StubClient:
    """In-memory lookup service. Ops listed in ``fail`` raise DNSException."""

    def __init__(self, addresses=(), cname="", mx=(), txt=(), ns=(), ptr=(), fail=(), gate=None):
        self.data = {
            "ip": list(addresses), "cname": cname, "mx": list(mx),
            "txt": list(txt), "ns": list(ns), "ptr": list(ptr),
        }
        self.fail = set(fail)
        self.gate = gate
        self.calls = Counter()
        self.domains = Counter()
        self._lock = threading.Lock()

    def _call(self, op, name):
        with self._lock:
            self.calls[op] += 1
            self.domains[name] += 1
        if self.gate is not None:
            self.gate.wait()
        if op in self.fail:
            raise DNSException(f"{op} lookup failed for {name}")
        return self.data[op]

    def lookup_ip(self, domain):
        return self._call("ip", domain)

    def lookup_cname(self, domain):
        return self._call("cname", domain)

    def lookup_mx(self, domain):
        return self._call("mx", domain)

    def lookup_txt(self, domain):
        return self._call("txt", domain)

    def lookup_ns(self, domain):
        return self._call("ns", domain)

    def reverse_lookup(self, ip):
        return self._call("ptr", ip)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def example_client():
    return StubClient(
        addresses=["93.184.215.14", "2606:2800:21f:cb07:6820:80da:af6b:8b2c"],
        cname="example.com",
        mx=[("mail.example.com", 10), ("backup.example.com", 20)],
        txt=["v=spf1 -all"],
        ns=["a.iana-servers.net", "b.iana-servers.net"],
    )


@pytest.fixture
def make_client():
    return StubClient
