from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Path, Query
from fastapi.responses import RedirectResponse

from .. import actions
from ..cache import ViewCache
from ..dependencies import get_store, get_view_cache
from ..models import CreateInvoicePage, EditInvoicePage, InvoicesPage
from ..stores import InvoiceStore

router = APIRouter(
    prefix=actions.INVOICES_PATH,
    tags=["invoices"]
)


def _redirect(result: actions.Redirect) -> RedirectResponse:
    # 303 so the browser follows up with a GET on the list view
    return RedirectResponse(result.location, status_code=303)


@router.get("", response_model=InvoicesPage)
def list_invoices(
    query: str = Query("", description="Search customer name, email, amount, date or status"),
    page: int = Query(1, ge=1, description="Page number, 6 invoices per page"),
    store: InvoiceStore = Depends(get_store),
    cache: ViewCache = Depends(get_view_cache),
):
    def _load() -> InvoicesPage:
        return InvoicesPage(
            invoices=store.fetch_filtered_invoices(query, page),
            total_pages=store.fetch_invoices_pages(query),
            query=query,
            page=page,
        )

    return cache.get_or_load(actions.INVOICES_PATH, _load, params={"query": query, "page": page})


@router.get("/create", response_model=CreateInvoicePage)
def create_invoice_page(store: InvoiceStore = Depends(get_store)):
    return CreateInvoicePage(customers=store.fetch_customers())


@router.post("/create")
def create_invoice(
    customerId: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    store: InvoiceStore = Depends(get_store),
    cache: ViewCache = Depends(get_view_cache),
):
    form = {"customerId": customerId, "amount": amount, "status": status}
    return _redirect(actions.create_invoice(store, cache, form))


@router.get("/{invoice_id}/edit", response_model=EditInvoicePage)
def edit_invoice_page(
    invoice_id: str = Path(..., description="Invoice ID"),
    store: InvoiceStore = Depends(get_store),
):
    with ThreadPoolExecutor(max_workers=2) as pool:
        invoice_future = pool.submit(store.fetch_invoice_by_id, invoice_id)
        customers_future = pool.submit(store.fetch_customers)
        invoice, customers = invoice_future.result(), customers_future.result()

    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return EditInvoicePage(invoice=invoice, customers=customers)


@router.post("/{invoice_id}/edit")
def update_invoice(
    invoice_id: str = Path(..., description="Invoice ID to update"),
    customerId: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    store: InvoiceStore = Depends(get_store),
    cache: ViewCache = Depends(get_view_cache),
):
    form = {"customerId": customerId, "amount": amount, "status": status}
    return _redirect(actions.update_invoice(store, cache, invoice_id, form))


@router.post("/{invoice_id}/delete")
def delete_invoice(
    invoice_id: str = Path(..., description="Invoice ID to delete"),
    store: InvoiceStore = Depends(get_store),
    cache: ViewCache = Depends(get_view_cache),
):
    return _redirect(actions.delete_invoice(store, cache, invoice_id))
