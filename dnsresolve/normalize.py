import logging

import dns.name
from dns.exception import DNSException

logger = logging.getLogger(__name__)

# IDNA 2003 still encodes names IDNA 2008 disallows, such as symbol labels.
CODECS = (dns.name.IDNA_2008_Practical, dns.name.IDNA_2003_Practical)


def normalize(domain: str) -> str:
    """Return the ASCII-compatible (punycode) form of ``domain``.

    Pure ASCII names come back untouched. Names that cannot be encoded are
    logged and returned as given.
    """
    if domain.isascii():
        return domain
    error = None
    for codec in CODECS:
        try:
            name = dns.name.from_unicode(domain, idna_codec=codec)
        except DNSException as e:
            error = e
            continue
        return name.to_text(omit_final_dot=not domain.endswith("."))
    logger.warning("Error normalizing domain %r: %s", domain, error)
    return domain
