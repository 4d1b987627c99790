"""
Commerce Domain Models

Tax configurations (table `tax_configurations`) and the payment/order
settings stored on the store row.
"""
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaxType(str, Enum):
    VAT = "VAT"
    GST = "GST"
    SALES_TAX = "SALES_TAX"
    CUSTOM = "CUSTOM"


class TaxConfigurationBase(BaseModel):
    country_code: str = Field(..., min_length=2, max_length=2, description="ISO 3166-1 alpha-2")
    state_province: Optional[str] = None
    tax_type: TaxType = TaxType.VAT
    tax_name: str = Field("TVA", min_length=1)
    rate: Decimal = Field(..., ge=0, le=100, description="Percentage")
    applies_to_product_types: List[str] = Field(default_factory=list)
    applies_to_shipping: bool = False
    tax_inclusive: bool = False
    priority: int = 0
    effective_from: date
    effective_to: Optional[date] = None
    is_active: bool = True

    @model_validator(mode="after")
    def check_effective_range(self):
        if self.effective_to is not None and self.effective_to < self.effective_from:
            raise ValueError("effective_to must be on or after effective_from")
        return self


class TaxConfigurationCreate(TaxConfigurationBase):
    """Schema for creating a tax configuration"""


class TaxConfigurationUpdate(BaseModel):
    """Schema for updating a tax configuration (partial)"""
    country_code: Optional[str] = Field(None, min_length=2, max_length=2)
    state_province: Optional[str] = None
    tax_type: Optional[TaxType] = None
    tax_name: Optional[str] = None
    rate: Optional[Decimal] = Field(None, ge=0, le=100)
    applies_to_product_types: Optional[List[str]] = None
    applies_to_shipping: Optional[bool] = None
    tax_inclusive: Optional[bool] = None
    priority: Optional[int] = None
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    is_active: Optional[bool] = None


class TaxConfiguration(TaxConfigurationBase):
    id: str
    store_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data["rate"] = float(self.rate)
        return data


class CommerceSettingsUpdate(BaseModel):
    """Payment and order settings kept on the store row"""
    minimum_order_amount: Optional[Decimal] = Field(None, ge=0)
    maximum_order_amount: Optional[Decimal] = Field(None, ge=0)
    accepted_currencies: Optional[List[str]] = None
    allow_partial_payment: Optional[bool] = None
    payment_terms: Optional[str] = None
    invoice_prefix: Optional[str] = Field(None, max_length=10)
    invoice_numbering: Optional[Literal["sequential", "random"]] = None
    free_shipping_threshold: Optional[Decimal] = Field(None, ge=0)
    enabled_payment_providers: Optional[List[str]] = None

    @model_validator(mode="after")
    def check_order_amounts(self):
        if (
            self.minimum_order_amount is not None
            and self.maximum_order_amount is not None
            and self.maximum_order_amount < self.minimum_order_amount
        ):
            raise ValueError("maximum_order_amount must be greater than or equal to minimum_order_amount")
        return self
