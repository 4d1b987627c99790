"""
Domain Verifier - custom domain connection and DNS verification

State machine for stores.domain_status:

    not_configured --connect--> pending --verify--> verified | error
    error --verify / connect--> pending path again
    any --disconnect--> not_configured

Every transition is exactly one store update. Verification is triggered by
the merchant, or by an external cron caller through verify_all_domains;
nothing here schedules or retries on its own.
"""
import asyncio
import logging
import re
import secrets
import string
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from storefront_admin.core.config import settings
from storefront_admin.domain.custom_domain import DNSInstructions, DNSRecord
from storefront_admin.domain.store import DomainStatus, Store
from storefront_admin.repositories.store_repository import StoreRepository
from storefront_admin.services.dns_checker import DNSChecker, verification_record_name

logger = logging.getLogger(__name__)

DOMAIN_REGEX = re.compile(
    r"^[a-zA-Z0-9][a-zA-Z0-9-]{0,61}[a-zA-Z0-9]?\.([a-zA-Z]{2,}|[a-zA-Z]{2,}\.[a-zA-Z]{2,})$"
)
TOKEN_ALPHABET = string.ascii_lowercase + string.digits
TOKEN_LENGTH = 13
DNS_TTL = 3600
DEFAULT_PROPAGATION_ERROR = "DNS propagation is not complete. Please check your DNS records."


def validate_domain(domain: Optional[str]) -> bool:
    """Syntax check only; ownership is proven by the TXT record"""
    if not domain:
        return False
    return bool(DOMAIN_REGEX.match(domain.strip()))


def generate_verification_token(prefix: Optional[str] = None) -> str:
    """Random base36 token, e.g. storefront-verify-k2j9x0a8c1m4z"""
    suffix = "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))
    return f"{prefix or settings.VERIFICATION_PREFIX}-verify-{suffix}"


def get_dns_instructions(domain: str, token: str, target_ip: Optional[str] = None) -> DNSInstructions:
    """Records the merchant must create at their DNS provider"""
    ip = target_ip or settings.DOMAIN_TARGET_IP
    return DNSInstructions(
        a_record=DNSRecord(type="A", name=domain, value=ip, ttl=DNS_TTL),
        www_record=DNSRecord(type="A", name=f"www.{domain}", value=ip, ttl=DNS_TTL),
        verification_record=DNSRecord(
            type="TXT",
            name=verification_record_name(domain),
            value=token,
            ttl=DNS_TTL,
        ),
    )


def disconnected_fields() -> Dict[str, Any]:
    return {
        "custom_domain": None,
        "domain_status": DomainStatus.NOT_CONFIGURED.value,
        "domain_verification_token": None,
        "domain_verified_at": None,
        "domain_error_message": None,
        "ssl_enabled": False,
    }


@dataclass
class DomainCheckOutcome:
    store_id: str
    store_name: Optional[str]
    domain: Optional[str]
    success: bool
    message: str


@dataclass
class DomainBatchResult:
    checked: int = 0
    verified: int = 0
    failed: int = 0
    results: List[DomainCheckOutcome] = field(default_factory=list)


class DomainVerifier:
    """
    Drives a store's custom domain through connect / verify / disconnect
    """

    def __init__(
        self,
        store_repository: Optional[StoreRepository] = None,
        dns_checker: Optional[DNSChecker] = None,
    ):
        self.store_repository = store_repository or StoreRepository()
        self.dns_checker = dns_checker or DNSChecker()

    def _apply(self, store: Store, updates: Dict[str, Any]) -> Store:
        updated = self.store_repository.update(store.id, updates)
        if updated is None:
            raise RuntimeError(f"Store {store.id} not found while updating domain settings")
        return updated

    def connect(self, store: Store, domain: str) -> Store:
        """
        Attach a custom domain and start verification

        Raises:
            ValueError: domain syntax is invalid
        """
        domain = (domain or "").strip().lower()
        if not validate_domain(domain):
            raise ValueError("Invalid domain name. Please enter a valid domain (e.g. myshop.com)")

        token = generate_verification_token()
        logger.info("Connecting custom domain", extra={"store_id": store.id, "domain": domain})

        return self._apply(store, {
            "custom_domain": domain,
            "domain_status": DomainStatus.PENDING.value,
            "domain_verification_token": token,
            "domain_verified_at": None,
            "domain_error_message": None,
        })

    async def verify(self, store: Store) -> Store:
        """
        Check DNS propagation and record the outcome

        Success marks the domain verified and turns SSL on. A failed check
        moves the domain to error with the checker's messages. An unexpected
        exception is recorded the same way, then re-raised.

        Raises:
            ValueError: store has no domain or token (not_configured)
        """
        if (
            store.effective_domain_status == DomainStatus.NOT_CONFIGURED
            or not store.custom_domain
            or not store.domain_verification_token
        ):
            raise ValueError("Domain or verification token missing. Connect a domain first.")

        logger.info("Starting DNS verification", extra={"store_id": store.id, "domain": store.custom_domain})

        try:
            result = await self.dns_checker.check_propagation(
                store.custom_domain,
                store.domain_verification_token,
            )
        except Exception as e:
            logger.error("Error verifying domain", extra={"store_id": store.id, "domain": store.custom_domain, "error": str(e)})
            await asyncio.to_thread(self._apply, store, {
                "domain_status": DomainStatus.ERROR.value,
                "domain_error_message": str(e) or "Unable to verify the domain.",
            })
            raise

        if not result.is_propagated:
            message = ", ".join(result.errors) if result.errors else DEFAULT_PROPAGATION_ERROR
            logger.info("DNS verification failed", extra={"store_id": store.id, "errors": result.errors})
            return await asyncio.to_thread(self._apply, store, {
                "domain_status": DomainStatus.ERROR.value,
                "domain_error_message": message,
            })

        logger.info(
            "Domain verified",
            extra={"store_id": store.id, "domain": store.custom_domain, "propagation_ms": result.propagation_time_ms}
        )
        return await asyncio.to_thread(self._apply, store, {
            "domain_status": DomainStatus.VERIFIED.value,
            "domain_verified_at": datetime.now(timezone.utc).isoformat(),
            "domain_error_message": None,
            "ssl_enabled": True,
        })

    def disconnect(self, store: Store) -> Store:
        """Remove the custom domain and reset every domain field"""
        logger.info("Disconnecting custom domain", extra={"store_id": store.id, "domain": store.custom_domain})
        return self._apply(store, disconnected_fields())

    def update_options(self, store: Store, redirect_www: bool, redirect_https: bool) -> Store:
        return self._apply(store, {"redirect_www": redirect_www, "redirect_https": redirect_https})

    # =========================================================================
    # Scheduled re-verification (called by an external cron)
    # =========================================================================

    async def _recheck(self, row: dict) -> DomainCheckOutcome:
        store_id = row["id"]
        domain = row.get("custom_domain")
        token = row.get("domain_verification_token")
        outcome = DomainCheckOutcome(store_id=store_id, store_name=row.get("name"), domain=domain, success=False, message="")

        if not domain or not token:
            outcome.message = "Domain or token missing"
            return outcome

        result = await self.dns_checker.check_propagation(domain, token)
        errors = ", ".join(result.errors)

        if row.get("domain_status") == DomainStatus.VERIFIED.value:
            if result.is_propagated:
                outcome.success = True
                outcome.message = "Domain still verified"
                return outcome

            await asyncio.to_thread(self.store_repository.update, store_id, {
                "domain_status": DomainStatus.ERROR.value,
                "domain_error_message": errors,
                "ssl_enabled": False,
            })
            outcome.message = f"Domain is no longer verified: {errors}"
            return outcome

        if result.is_propagated:
            await asyncio.to_thread(self.store_repository.update, store_id, {
                "domain_status": DomainStatus.VERIFIED.value,
                "domain_verified_at": datetime.now(timezone.utc).isoformat(),
                "domain_error_message": None,
                "ssl_enabled": True,
            })
            outcome.success = True
            outcome.message = f"Domain verified (propagation: {result.propagation_time_ms // 1000}s). SSL enabled."
            return outcome

        # Still propagating: stays pending, keep the latest errors for the merchant
        await asyncio.to_thread(self.store_repository.update, store_id, {
            "domain_status": DomainStatus.PENDING.value,
            "domain_error_message": errors,
        })
        outcome.message = f"DNS propagation incomplete: {errors}"
        return outcome

    async def verify_all_domains(self) -> DomainBatchResult:
        """
        Re-check every pending or verified domain concurrently

        A store whose check raises counts as failed; the batch always completes.
        """
        rows = await asyncio.to_thread(self.store_repository.find_domains_to_verify)
        batch = DomainBatchResult(checked=len(rows))

        if not rows:
            return batch

        settled = await asyncio.gather(*(self._recheck(row) for row in rows), return_exceptions=True)

        for row, outcome in zip(rows, settled):
            if isinstance(outcome, Exception):
                logger.error(
                    "Domain re-check failed",
                    extra={"store_id": row.get("id"), "domain": row.get("custom_domain"), "error": str(outcome)}
                )
                outcome = DomainCheckOutcome(
                    store_id=row.get("id"),
                    store_name=row.get("name"),
                    domain=row.get("custom_domain"),
                    success=False,
                    message=str(outcome),
                )
            batch.results.append(outcome)
            if outcome.success:
                batch.verified += 1
            else:
                batch.failed += 1

        logger.info(f"Domain verification finished: {batch.verified} verified, {batch.failed} failed of {batch.checked}")
        return batch
