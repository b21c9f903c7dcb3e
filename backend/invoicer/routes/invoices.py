from fastapi import APIRouter, Depends, Response, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from invoicer.core.error_messages import ErrorResponses
from invoicer.crud.resource_store import ConcurrentUpdateError, ResourceNotFound, invoices_store
from invoicer.db.database import get_db
from invoicer.middleware.rbac import get_current_user
from invoicer.schemas.resources import InvoiceSchema

invoice_router = APIRouter(tags=["Invoices"])

INVOICE_NOT_FOUND = "Invoice not found."


@invoice_router.post("", status_code=status.HTTP_201_CREATED)
async def create_invoice(
    data: InvoiceSchema,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    """
    Store an invoice snapshot. `total` is saved exactly as the client computed
    it; it is not checked against the line items.
    """
    if not data.client or data.items is None or data.total is None:
        raise ErrorResponses.bad_request("Missing invoice data.")

    invoice = data.model_dump(mode="json")
    try:
        return await invoices_store.create(db, user["_id"], invoice)
    except ConcurrentUpdateError:
        raise ErrorResponses.SERVICE_UNAVAILABLE


@invoice_router.get("")
async def list_invoices(user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    return await invoices_store.list(db, user["_id"])


@invoice_router.get("/{invoice_id}")
async def get_invoice(invoice_id: str, user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        return await invoices_store.get(db, user["_id"], invoice_id)
    except ResourceNotFound:
        raise ErrorResponses.not_found(INVOICE_NOT_FOUND)


@invoice_router.put("/{invoice_id}")
async def update_invoice(
    invoice_id: str,
    data: InvoiceSchema,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    changes = data.model_dump(mode="json", exclude_unset=True)
    if "client" in changes and not changes["client"]:
        raise ErrorResponses.bad_request("Missing invoice data.")
    # required on create, so they can be replaced but never cleared
    if any(field in changes and changes[field] is None for field in ("items", "total")):
        raise ErrorResponses.bad_request("Missing invoice data.")

    try:
        return await invoices_store.update(db, user["_id"], invoice_id, changes)
    except ResourceNotFound:
        raise ErrorResponses.not_found(INVOICE_NOT_FOUND)
    except ConcurrentUpdateError:
        raise ErrorResponses.SERVICE_UNAVAILABLE


@invoice_router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(invoice_id: str, user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        await invoices_store.delete(db, user["_id"], invoice_id)
    except ResourceNotFound:
        raise ErrorResponses.not_found(INVOICE_NOT_FOUND)
    except ConcurrentUpdateError:
        raise ErrorResponses.SERVICE_UNAVAILABLE
    return Response(status_code=status.HTTP_204_NO_CONTENT)
