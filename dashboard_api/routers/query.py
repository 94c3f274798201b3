from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..dependencies import get_store
from ..errors import DataAccessError, StoreNotConfiguredError
from ..models import QueryResponse
from ..stores import InvoiceStore

router = APIRouter(tags=["query"])

RECENT_INVOICES_LIMIT = 10


@router.get("/query", response_model=QueryResponse)
def query_invoices(store: InvoiceStore = Depends(get_store)):
    """Amount and customer name of the 10 newest invoices. Requires a database."""
    try:
        rows = store.fetch_recent_invoice_amounts(limit=RECENT_INVOICES_LIMIT)
    except StoreNotConfiguredError:
        return JSONResponse({"error": "POSTGRES_URL/DATABASE_URL is not configured"}, status_code=500)
    except DataAccessError:
        return JSONResponse({"error": "Failed to fetch invoices"}, status_code=500)
    return QueryResponse(data=rows)
