from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


# ------------------------
# Address book
# ------------------------
class ContactSchema(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None


# ------------------------
# Invoices
# ------------------------
class CompanyInfoSchema(BaseModel):
    # snapshot of the sender; unknown keys are kept as sent
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

class InvoiceItemSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    description: Optional[str] = None
    quantity: Optional[float] = None
    price: Optional[float] = None

class InvoiceSchema(BaseModel):
    client: Optional[str] = None
    companyInfo: Optional[CompanyInfoSchema] = None
    items: Optional[List[InvoiceItemSchema]] = None
    total: Optional[float] = None   # stored as sent, never recomputed


# ------------------------
# Templates
# ------------------------
class TemplateItemSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    description: Optional[str] = None
    quantity: Optional[float] = None
    rate: Optional[float] = None

class TemplateSchema(BaseModel):
    name: Optional[str] = None
    companyInfo: Optional[CompanyInfoSchema] = None
    items: Optional[List[TemplateItemSchema]] = None


# ------------------------
# Catalog
# ------------------------
class CatalogItemType(str, Enum):
    product = "product"
    service = "service"

class CatalogItemSchema(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    rate: Optional[float] = None
    type: Optional[CatalogItemType] = None
