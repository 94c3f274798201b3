from fastapi import APIRouter, Depends

from ..dependencies import get_store
from ..models import DashboardOverview
from ..stores import InvoiceStore

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"]
)


@router.get("", response_model=DashboardOverview)
def dashboard_overview(store: InvoiceStore = Depends(get_store)):
    """Revenue chart, latest invoices and summary cards"""
    return DashboardOverview(
        revenue=store.fetch_revenue(),
        latest_invoices=store.fetch_latest_invoices(),
        cards=store.fetch_card_data(),
    )
