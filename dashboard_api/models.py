from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict
from decimal import Decimal
from enum import Enum

class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"

class Revenue(BaseModel):
    month: str
    revenue: int

class LatestInvoice(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    amount: str

class InvoicesTableRow(BaseModel):
    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: str
    amount: int  # cents
    status: str

class InvoiceForm(BaseModel):
    id: str
    customer_id: str
    amount: float  # dollars
    status: str

class CustomerField(BaseModel):
    id: str
    name: str

class CustomersTableRow(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str

class CardData(BaseModel):
    number_of_customers: int
    number_of_invoices: int
    total_paid_invoices: str
    total_pending_invoices: str

class InvoiceAmount(BaseModel):
    amount: int
    name: str

class InvoiceFormInput(BaseModel):
    """Create/update form payload; amount arrives in dollars."""
    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: Decimal
    status: InvoiceStatus

class InvoicesPage(BaseModel):
    invoices: List[InvoicesTableRow]
    total_pages: int
    query: str
    page: int

class DashboardOverview(BaseModel):
    revenue: List[Revenue]
    latest_invoices: List[LatestInvoice]
    cards: CardData

class CreateInvoicePage(BaseModel):
    customers: List[CustomerField]

class EditInvoicePage(BaseModel):
    invoice: InvoiceForm
    customers: List[CustomerField]

class QueryResponse(BaseModel):
    data: List[InvoiceAmount]

class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[str] = None
    field_errors: Optional[Dict[str, List[str]]] = None
