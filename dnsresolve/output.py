import json

from dnsresolve.records import RecordSet, RecordType


class TextFormatter:
    C = {
        "reset": "\033[0m", "bold": "\033[1m",
        "cyan": "\033[36m", "green": "\033[32m", "yellow": "\033[33m",
        "magenta": "\033[35m", "blue": "\033[34m", "red": "\033[31m", "dim": "\033[2m"
    }

    TYPE_COLORS = {
        "A": "green", "AAAA": "green", "CNAME": "yellow",
        "MX": "blue", "TXT": "magenta", "NS": "cyan",
    }

    def __init__(self, color: bool = True):
        if not color:
            self.C = {k: "" for k in self.C}

    def format(self, record_set: RecordSet, name: str | None = None) -> str:
        lines = []
        title = name or record_set.domain
        lines.append(f"\n{self.C['bold']}{self.C['cyan']}DNS Records for {title}:{self.C['reset']}")
        if record_set.domain != title:
            lines.append(f"  {self.C['dim']}({record_set.domain}){self.C['reset']}")

        for rtype in RecordType:
            values = record_set.get(rtype.value)
            if not values:
                continue
            color = self.C[self.TYPE_COLORS[rtype.value]]
            lines.append(f"{self.C['bold']}{color}{rtype.value} Records:{self.C['reset']}")
            for v in values:
                lines.append(f" - {v}")

        if record_set.failures:
            lines.append(f"{self.C['dim']}Failed lookups:{self.C['reset']}")
            for category, error in record_set.failures.items():
                lines.append(f" {self.C['red']}!{self.C['reset']} {category}: {error}")
        if not record_set and not record_set.failures:
            lines.append(f"  {self.C['dim']}No records found{self.C['reset']}")
        return "\n".join(lines)

    def format_reverse(self, ip: str, hosts: list[str]) -> str:
        lines = [f"\n{self.C['bold']}{self.C['cyan']}Reverse DNS for {ip}:{self.C['reset']}"]
        if hosts:
            lines.extend(f" - {h}" for h in hosts)
        else:
            lines.append(f"  {self.C['dim']}No hostnames found{self.C['reset']}")
        return "\n".join(lines)


class JsonFormatter:
    def __init__(self, indent: int = 2):
        self.indent = indent

    def format(self, results: list[tuple[str, RecordSet]]) -> str:
        return json.dumps([dict(r.to_dict(), query=name) for name, r in results], indent=self.indent, ensure_ascii=False)

    def format_reverse(self, ip: str, hosts: list[str]) -> str:
        return json.dumps({"ip": ip, "hostnames": hosts}, indent=self.indent)


class MarkdownFormatter:
    """Generates a Markdown report for one or more resolved domains."""

    def format(self, results: list[tuple[str, RecordSet]]) -> str:
        lines = []
        resolved = sum(1 for _, r in results if r)
        failed = sum(1 for _, r in results if r.failures)

        lines.append("# DNS Resolution Report")
        lines.append("")
        lines.append("## Summary")
        lines.append(f"- **Domains**: {len(results)}")
        lines.append(f"- **With records**: {resolved}")
        lines.append(f"- **With failed lookups**: {failed}")
        lines.append("")

        for name, record_set in results:
            lines.append(f"## {_escape(name)}")
            if record_set.domain != name:
                lines.append(f"*Queried as* `{record_set.domain}`")
                lines.append("")
            if record_set:
                lines.append("| Type | Value |")
                lines.append("|---|---|")
                for rtype in RecordType:
                    for v in record_set.get(rtype.value, []):
                        lines.append(f"| **{rtype.value}** | `{_escape(v)}` |")
            else:
                lines.append("*No records found.*")
            if record_set.failures:
                lines.append("")
                lines.append("| Failed lookup | Error |")
                lines.append("|---|---|")
                for category, error in record_set.failures.items():
                    lines.append(f"| {category} | {_escape(error)} |")
            lines.append("")

        return "\n".join(lines)


def _escape(text: str) -> str:
    return text.replace("|", "\\|")
