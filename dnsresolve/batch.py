from concurrent.futures import ThreadPoolExecutor, as_completed, TimeoutError as FutureTimeout
from pathlib import Path
import logging

from dnsresolve.records import RecordSet

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 10


class DNSResolveError(Exception):
    pass


class BatchInputError(DNSResolveError):
    """The batch source could not be read."""


class BatchTimeout(DNSResolveError):
    """The batch did not finish in time; pending resolutions were cancelled."""


def load_domains(path) -> list[str]:
    """Read one domain per line, skipping blank and ``#`` lines."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BatchInputError(f"Error reading file {path}: {e}") from e
    return [line.strip() for line in text.splitlines()
            if line.strip() and not line.strip().startswith("#")]


class BatchResolver:
    def __init__(self, resolver, max_workers: int = DEFAULT_WORKERS, timeout: float | None = None):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.resolver = resolver
        self.max_workers = max_workers
        self.timeout = timeout

    def resolve_all(self, domains, on_result=None) -> list[tuple[str, RecordSet]]:
        """Resolve every entry of ``domains`` concurrently and wait for all.

        ``on_result(domain, record_set)`` is called from the calling thread as
        each resolution completes. Results are returned in input order.
        Raises BatchTimeout if ``timeout`` elapses first.
        """
        domains = list(domains)
        if not domains:
            return []
        results = [None] * len(domains)

        workers = min(self.max_workers, len(domains))
        logger.info("Resolving %d domains with %d workers", len(domains), workers)
        ex = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="resolve")
        futures = {ex.submit(self.resolver.resolve, d): i for i, d in enumerate(domains)}
        try:
            for f in as_completed(futures, timeout=self.timeout):
                i = futures[f]
                try:
                    record_set = f.result()
                except Exception as e:
                    logger.error("Error resolving %s: %s", domains[i], e)
                    record_set = RecordSet(domains[i])
                results[i] = (domains[i], record_set)
                if on_result is not None:
                    on_result(domains[i], record_set)
        except FutureTimeout:
            ex.shutdown(wait=False, cancel_futures=True)
            pending = sum(1 for r in results if r is None)
            logger.error("Batch timed out with %d of %d domains pending", pending, len(domains))
            raise BatchTimeout(f"{pending} of {len(domains)} domains unresolved after {self.timeout}s") from None
        except BaseException:
            ex.shutdown(wait=False, cancel_futures=True)
            raise

        ex.shutdown(wait=True)
        return results
