"""
Export API Endpoints
Store configuration (JSON) and sitemap.xml
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from storefront_admin.api.deps import get_owned_store, get_product_repository
from storefront_admin.domain.store import Store
from storefront_admin.repositories.product_repository import ProductRepository
from storefront_admin.services.export_service import export_store_config, generate_sitemap

router = APIRouter()


@router.get("/stores/{store_id}/config")
async def export_config(store: Store = Depends(get_owned_store)):
    """Theme and SEO settings, images excluded, for reuse in another store"""
    return {"status": "success", "data": export_store_config(store)}


@router.get("/stores/{store_id}/sitemap.xml")
async def export_sitemap(
    store: Store = Depends(get_owned_store),
    products: ProductRepository = Depends(get_product_repository),
):
    try:
        xml = generate_sitemap(store, products.find_active_for_sitemap(store.id))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error generating sitemap: {str(e)}")

    return Response(
        content=xml,
        media_type="application/xml",
        headers={"Content-Disposition": f'attachment; filename="sitemap-{store.slug}.xml"'},
    )
