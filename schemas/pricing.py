# schemas/pricing.py
"""
Pydantic schemas for the payment-plan calculator.
"""
from pydantic import BaseModel, Field, ConfigDict


class PricingInputs(BaseModel):
     """User-adjustable financial parameters. Rates are annual percentages."""
     discount_pct: float = Field(0, description="Special discount %")
     down_payment_pct: float = Field(20, description="Down payment % of the contract price")
     months_to_pay: int = Field(36, ge=1, description="Months to pay the net down payment")
     reservation_fee: float = Field(20000, ge=0, description="Reservation fee in PHP")
     closing_fee_pct: float = Field(10.5, description="Closing fee % of the contract price")
     rate_15yr: float = Field(6, description="Annual bank rate for a 15-year term")
     rate_20yr: float = Field(6, description="Annual bank rate for a 20-year term")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "discount_pct": 5,
                    "down_payment_pct": 20,
                    "months_to_pay": 36,
                    "reservation_fee": 20000,
                    "closing_fee_pct": 10.5,
                    "rate_15yr": 6,
                    "rate_20yr": 6,
               }
          }
     )


class PricingResult(BaseModel):
     """Payment plan derived from a list price and PricingInputs (unrounded PHP)."""
     total_contract_price: float
     down_payment_amount: float
     net_down_payment: float
     down_payment_monthly: float
     closing_fee: float
     bank_financed_balance: float
     monthly_payment_15yr: float
     monthly_payment_20yr: float


class PricingRequest(BaseModel):
     """Request body for POST /api/pricing."""
     list_price: float = Field(..., ge=0, description="Unit list price in PHP")
     inputs: PricingInputs = Field(default_factory=PricingInputs)


class PricingResponse(BaseModel):
     """Response for POST /api/pricing."""
     success: bool = True
     list_price: float
     inputs: PricingInputs
     result: PricingResult
     valid_until: str
