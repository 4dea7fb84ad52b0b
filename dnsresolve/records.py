from dataclasses import dataclass, field
from enum import Enum


class RecordType(Enum):
    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"
    MX = "MX"
    TXT = "TXT"
    NS = "NS"


class Category(Enum):
    """Independent lookups performed for one domain, in resolution order."""
    ADDRESS = "A/AAAA"
    CNAME = "CNAME"
    MX = "MX"
    TXT = "TXT"
    NS = "NS"


@dataclass
class RecordSet:
    """Records resolved for one domain, keyed by record type tag.

    A tag is present only when its lookup succeeded with at least one value.
    Failed lookups are listed in ``failures`` by category, so a tag missing
    from ``records`` whose category is not in ``failures`` resolved to nothing.
    """
    domain: str
    records: dict = field(default_factory=dict)
    failures: dict = field(default_factory=dict)

    def add(self, rtype: RecordType, value: str):
        self.records.setdefault(rtype.value, []).append(value)

    def fail(self, category: Category, error: Exception):
        self.failures[category.value] = str(error) or type(error).__name__

    def failed(self, category: Category) -> bool:
        return category.value in self.failures

    def get(self, rtype: str, default=None):
        return self.records.get(rtype, default)

    def items(self):
        return self.records.items()

    def keys(self):
        return self.records.keys()

    def __getitem__(self, rtype: str) -> list[str]:
        return self.records[rtype]

    def __contains__(self, rtype: str) -> bool:
        return rtype in self.records

    def __iter__(self):
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def to_dict(self) -> dict:
        return {
            "domain": self.domain,
            "records": {k: list(v) for k, v in self.records.items()},
            "failures": dict(self.failures),
        }
