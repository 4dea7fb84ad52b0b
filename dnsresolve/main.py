import argparse
import logging
import sys

from dnsresolve.batch import BatchResolver, BatchInputError, BatchTimeout, DEFAULT_WORKERS, load_domains
from dnsresolve.cache import CacheStore, DEFAULT_MAX_ENTRIES, DEFAULT_TTL
from dnsresolve.client import DNSClient, DEFAULT_TIMEOUT, is_ip
from dnsresolve.logs import DEFAULT_LOG_FILE, setup_logging
from dnsresolve.output import JsonFormatter, MarkdownFormatter, TextFormatter
from dnsresolve.resolver import DomainResolver

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dnsresolve",
        description="Resolve A, AAAA, CNAME, MX, TXT and NS records of domains"
    )
    parser.add_argument("target", nargs="?", help="Domain to resolve, or IP address for a reverse lookup")
    parser.add_argument("-f", "--file", help="Resolve every domain listed in FILE (one per line)")
    parser.add_argument("-r", "--reverse", action="store_true", help="Reverse lookup of TARGET")
    parser.add_argument("-s", "--server", action="append", default=None, help="Nameserver IP to query (repeatable)")
    parser.add_argument("-p", "--parallel", type=int, default=DEFAULT_WORKERS, help=f"Workers for --file (default: {DEFAULT_WORKERS})")
    parser.add_argument("-t", "--timeout", type=float, default=DEFAULT_TIMEOUT, help=f"Per-lookup timeout in seconds (default: {DEFAULT_TIMEOUT})")
    parser.add_argument("--batch-timeout", type=float, default=None, help="Give up on a --file batch after this many seconds")
    parser.add_argument("--ttl", type=float, default=DEFAULT_TTL, help=f"Cache TTL in seconds (default: {DEFAULT_TTL:g})")
    parser.add_argument("--cache-size", type=int, default=DEFAULT_MAX_ENTRIES, help=f"Max cached domains (default: {DEFAULT_MAX_ENTRIES})")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("-md", "--markdown", metavar="FILE", help="Write a Markdown report to FILE")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE, help=f"Log file, appended to (default: {DEFAULT_LOG_FILE})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose mode")
    parser.add_argument("--version", action="version", version="%(prog)s 1.0.0")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.target and not args.file:
        parser.error("a domain, an IP address or --file is required")
    if args.parallel < 1:
        parser.error("--parallel must be at least 1")
    if args.cache_size < 1:
        parser.error("--cache-size must be at least 1")
    for server in args.server or []:
        if not is_ip(server):
            parser.error(f"--server expects an IP address, got '{server}'")

    setup_logging(args.log_file, args.verbose)

    client = DNSClient(timeout=args.timeout, nameservers=args.server)
    cache = CacheStore(ttl=args.ttl, max_entries=args.cache_size)
    resolver = DomainResolver(client, cache)
    text_fmt = TextFormatter(color=not args.no_color and sys.stdout.isatty())

    if args.server:
        logger.info("Using nameservers: %s", ", ".join(client.nameservers))

    try:
        if args.file:
            results = _run_batch(args, resolver, text_fmt)
        elif args.reverse or is_ip(args.target):
            hosts = resolver.reverse(args.target)
            if args.json:
                print(JsonFormatter().format_reverse(args.target, hosts))
            else:
                print(text_fmt.format_reverse(args.target, hosts))
            return 0
        else:
            record_set = resolver.resolve(args.target)
            results = [(args.target, record_set)]
            if args.json:
                print(JsonFormatter().format(results))
            else:
                print(text_fmt.format(record_set, args.target))
    except BatchInputError as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except BatchTimeout as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130

    if args.markdown:
        content = MarkdownFormatter().format(results)
        with open(args.markdown, "w", encoding="utf-8") as f:
            f.write(content)
        print(f"Report saved: {args.markdown}", file=sys.stderr)

    return 0


def _run_batch(args, resolver: DomainResolver, text_fmt: TextFormatter):
    domains = load_domains(args.file)
    if args.target:
        domains.insert(0, args.target)

    def on_result(domain, record_set):
        if not args.json:
            print(text_fmt.format(record_set, domain))

    batch = BatchResolver(resolver, max_workers=args.parallel, timeout=args.batch_timeout)
    results = batch.resolve_all(domains, on_result=on_result)
    if args.json:
        print(JsonFormatter().format(results))
    logger.info("Resolved %d domains (%s)", len(results), resolver.cache.stats())
    return results


if __name__ == "__main__":
    sys.exit(main())
