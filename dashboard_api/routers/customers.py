from typing import List

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_store
from ..models import CustomersTableRow
from ..stores import InvoiceStore

router = APIRouter(
    prefix="/dashboard/customers",
    tags=["customers"]
)


@router.get("", response_model=List[CustomersTableRow])
def list_customers(
    query: str = Query("", description="Search customer name or email"),
    store: InvoiceStore = Depends(get_store),
):
    # Needs a live database, the placeholder data has no customer table view.
    return store.fetch_filtered_customers(query)
