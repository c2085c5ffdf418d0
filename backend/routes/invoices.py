"""
Routes pour les Factures
"""

from fastapi import APIRouter

from models import InvoiceCreate, InvoiceUpdate, InvoiceStatusUpdate, InvoiceStatus, compute_totals
from routes.crud import register_crud_routes, register_status_routes
from services.crud import EntityService

router = APIRouter(prefix="/invoice", tags=["Invoices"])

invoice_service = EntityService("invoices", "Invoice", statuses=[s.value for s in InvoiceStatus])


def prepare_invoice(data: InvoiceCreate) -> dict:
    """Complète les totaux absents; ceux envoyés par le client sont gardés tels quels"""
    doc = data.to_document()
    totals = compute_totals(data.amount, data.discount, data.gst_rate, data.paid_amount)
    for key, value in totals.items():
        if doc.get(key) is None:
            doc[key] = value
    return doc


@router.get("/paid")
async def list_paid_invoices():
    invoices = await invoice_service.list({"status": InvoiceStatus.PAID.value})
    return {"success": True, "data": invoices, "count": len(invoices)}


@router.get("/unpaid")
async def list_unpaid_invoices():
    invoices = await invoice_service.list({"status": InvoiceStatus.UNPAID.value})
    return {"success": True, "data": invoices, "count": len(invoices)}


register_status_routes(router, invoice_service, InvoiceStatusUpdate, "invoice_id")
register_crud_routes(router, invoice_service, InvoiceCreate, InvoiceUpdate, prepare=prepare_invoice)
