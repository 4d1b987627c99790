"""
Custom Domain API Endpoints
Connect, verify and disconnect a store's custom domain

The /verify-all endpoint is called by an external scheduler (every 15 min)
and is protected by the X-Cron-Key header.
"""
import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from storefront_admin.api.deps import get_domain_verifier, get_owned_store
from storefront_admin.core.auth import verify_cron_key
from storefront_admin.domain.custom_domain import ConnectDomainRequest, DomainOptionsUpdate
from storefront_admin.domain.store import Store
from storefront_admin.services.domain_verifier import DomainVerifier, get_dns_instructions

logger = logging.getLogger(__name__)

router = APIRouter()


def _domain_payload(store: Store) -> dict:
    data = {
        "custom_domain": store.custom_domain,
        "domain_status": store.effective_domain_status.value,
        "domain_verified_at": store.domain_verified_at.isoformat() if store.domain_verified_at else None,
        "domain_error_message": store.domain_error_message,
        "ssl_enabled": store.ssl_enabled,
        "redirect_www": store.redirect_www,
        "redirect_https": store.redirect_https,
        "dns_instructions": None,
    }
    if store.custom_domain and store.domain_verification_token:
        data["dns_instructions"] = get_dns_instructions(
            store.custom_domain, store.domain_verification_token
        ).model_dump()
    return data


@router.get("/stores/{store_id}")
async def get_domain(store: Store = Depends(get_owned_store)):
    """Current domain state and the DNS records to create"""
    return {"status": "success", "data": _domain_payload(store)}


@router.post("/stores/{store_id}/connect")
async def connect_domain(
    payload: ConnectDomainRequest,
    store: Store = Depends(get_owned_store),
    verifier: DomainVerifier = Depends(get_domain_verifier),
):
    try:
        updated = verifier.connect(store, payload.domain)
        return {"status": "success", "data": _domain_payload(updated)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Error connecting domain", extra={"store_id": store.id, "error": str(e)})
        raise HTTPException(status_code=500, detail=f"Error connecting domain: {str(e)}")


@router.post("/stores/{store_id}/verify")
async def verify_domain(
    store: Store = Depends(get_owned_store),
    verifier: DomainVerifier = Depends(get_domain_verifier),
):
    """
    Check DNS propagation now

    A failed check is not an HTTP error: the response carries the
    `error` status and the message to show the merchant.
    """
    try:
        updated = await verifier.verify(store)
        return {"status": "success", "data": _domain_payload(updated)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error verifying domain: {str(e)}")


@router.delete("/stores/{store_id}")
async def disconnect_domain(
    store: Store = Depends(get_owned_store),
    verifier: DomainVerifier = Depends(get_domain_verifier),
):
    try:
        updated = verifier.disconnect(store)
        return {"status": "success", "data": _domain_payload(updated)}
    except Exception as e:
        logger.error("Error disconnecting domain", extra={"store_id": store.id, "error": str(e)})
        raise HTTPException(status_code=500, detail=f"Error disconnecting domain: {str(e)}")


@router.patch("/stores/{store_id}/options")
async def update_domain_options(
    payload: DomainOptionsUpdate,
    store: Store = Depends(get_owned_store),
    verifier: DomainVerifier = Depends(get_domain_verifier),
):
    try:
        updated = verifier.update_options(store, payload.redirect_www, payload.redirect_https)
        return {"status": "success", "data": _domain_payload(updated)}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating domain options: {str(e)}")


@router.post("/verify-all", dependencies=[Depends(verify_cron_key)])
async def verify_all_domains(verifier: DomainVerifier = Depends(get_domain_verifier)):
    """
    Re-check every pending or verified domain

    Requires X-Cron-Key header for authentication.
    """
    try:
        batch = await verifier.verify_all_domains()
        return {
            "status": "success",
            "message": f"Verified {batch.checked} domains",
            "data": asdict(batch),
        }
    except Exception as e:
        logger.error(f"Domain batch verification failed: {e}")
        raise HTTPException(status_code=500, detail=f"Error verifying domains: {str(e)}")
