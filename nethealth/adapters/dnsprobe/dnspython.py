"""dnspython DNS probe adapter.

Implements DnsProbePort with a single UDP A-record query sent from the
interface address, the equivalent of ``dig +short <domain> @<server>
-p <port> -b <source>``.
"""

import logging

import dns.exception
import dns.message
import dns.query
import dns.rcode
import dns.rdatatype

from nethealth.core.ports import DnsProbePort

logger = logging.getLogger(__name__)


class DnspythonDnsProbe(DnsProbePort):
    """Queries one resolver directly, bypassing the system resolver."""

    def __init__(self, timeout_seconds: float = 5.0, rdtype: str = "A"):
        """Initialize the DNS probe.

        Args:
            timeout_seconds: How long to wait for a response.
            rdtype: Record type to query.

        Raises:
            ValueError: If timeout is not positive.
        """
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        self.timeout_seconds = timeout_seconds
        self.rdtype = dns.rdatatype.from_text(rdtype)

    def probe(
        self,
        interface_address: str,
        server: str,
        port: int,
        domain: str,
    ) -> bool:
        """Resolve ``domain`` at ``server:port``; NOERROR is success."""
        query = dns.message.make_query(domain, self.rdtype)
        try:
            response = dns.query.udp(
                query,
                server,
                timeout=self.timeout_seconds,
                port=port,
                source=interface_address,
            )
        except dns.exception.Timeout:
            logger.debug(f"DNS query for {domain} at {server}:{port} timed out")
            return False
        except dns.exception.DNSException as e:
            logger.debug(f"DNS query for {domain} at {server}:{port} failed: {e}")
            return False
        except OSError as e:
            # Unroutable server or source address not bound to this host
            logger.debug(f"DNS query for {domain} at {server}:{port} from {interface_address}: {e}")
            return False

        rcode = response.rcode()
        if rcode != dns.rcode.NOERROR:
            logger.debug(
                f"DNS query for {domain} at {server}:{port} returned {dns.rcode.to_text(rcode)}"
            )
            return False
        return True
