"""
DNS Propagation Checker
Resolves a custom domain's A / www A / TXT records over DNS-over-HTTPS

Uses the JSON API exposed by https://dns.google/resolve (or any resolver
with the same response shape, configured with DNS_RESOLVER_URL).
"""
import asyncio
import logging
import time
from typing import List, Optional, Tuple

import httpx

from storefront_admin.core.config import settings
from storefront_admin.domain.custom_domain import DNSRecordChecks, DNSVerificationResult

logger = logging.getLogger(__name__)

# RR type numbers in the resolver answers
RR_TYPE_A = 1
RR_TYPE_TXT = 16


def verification_record_name(domain: str, prefix: Optional[str] = None) -> str:
    return f"_{prefix or settings.VERIFICATION_PREFIX}-verification.{domain}"


class DNSChecker:
    """
    Checks that a domain points at the storefront and carries the
    verification token.

    Each of the three lookups reports its own error message; a failing
    lookup never aborts the others.
    """

    def __init__(
        self,
        resolver_url: Optional[str] = None,
        target_ip: Optional[str] = None,
        verification_prefix: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.resolver_url = resolver_url or settings.DNS_RESOLVER_URL
        self.target_ip = target_ip or settings.DOMAIN_TARGET_IP
        self.verification_prefix = verification_prefix or settings.VERIFICATION_PREFIX
        self.timeout = timeout
        self._transport = transport

    async def _resolve(self, client: httpx.AsyncClient, name: str, record_type: str) -> List[dict]:
        """Return the Answer section for a name/type (empty list if none)"""
        response = await client.get(
            self.resolver_url,
            params={"name": name, "type": record_type},
            headers={"Accept": "application/dns-json"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        data = response.json()
        return data.get("Answer") or []

    async def _check_a_record(self, client: httpx.AsyncClient, name: str, label: str) -> Tuple[bool, Optional[str]]:
        try:
            answers = [a for a in await self._resolve(client, name, "A") if a.get("type", RR_TYPE_A) == RR_TYPE_A]
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"{label} lookup failed for {name}: {e}")
            return False, f"Error while checking the {label} record"

        if not answers:
            return False, f"{label} record missing"

        if any(answer.get("data") == self.target_ip for answer in answers):
            return True, None

        return False, f"{label} record incorrect: points to {answers[0].get('data')} instead of {self.target_ip}"

    async def _check_txt_record(self, client: httpx.AsyncClient, domain: str, token: str) -> Tuple[bool, Optional[str]]:
        name = verification_record_name(domain, self.verification_prefix)
        try:
            answers = await self._resolve(client, name, "TXT")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"TXT lookup failed for {name}: {e}")
            return False, "Error while checking the TXT verification record"

        if not answers:
            return False, "TXT verification record missing"

        if any((answer.get("data") or "").replace('"', "") == token for answer in answers):
            return True, None

        return False, "TXT verification token incorrect or missing"

    async def check_propagation(self, domain: str, verification_token: str) -> DNSVerificationResult:
        """
        Check all three records concurrently

        Args:
            domain: Apex domain (e.g. myshop.com)
            verification_token: Expected TXT value

        Returns:
            DNSVerificationResult; is_propagated only when every record matches
        """
        started = time.monotonic()

        async with httpx.AsyncClient(transport=self._transport) as client:
            (a_ok, a_err), (www_ok, www_err), (txt_ok, txt_err) = await asyncio.gather(
                self._check_a_record(client, domain, "A"),
                self._check_a_record(client, f"www.{domain}", "WWW"),
                self._check_txt_record(client, domain, verification_token),
            )

        errors = [error for error in (a_err, www_err, txt_err) if error]
        details = DNSRecordChecks(a_record=a_ok, www_record=www_ok, txt_record=txt_ok)

        return DNSVerificationResult(
            is_propagated=a_ok and www_ok and txt_ok,
            details=details,
            errors=errors,
            propagation_time_ms=int((time.monotonic() - started) * 1000),
        )
