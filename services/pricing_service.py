# services/pricing_service.py
"""
Payment-plan computation.

Pure functions of (list price, PricingInputs): no caching, no state, no
rounding. Rounding belongs to whoever displays the figures.
"""
import calendar
from datetime import date
from typing import Optional

from schemas.pricing import PricingInputs, PricingResult

SHORT_TERM_YEARS = 15
LONG_TERM_YEARS = 20


def amortize(principal: float, annual_rate: float, years: int) -> float:
     """
     Level monthly payment that repays `principal` over `years` at a fixed
     annual rate (percent).
     """
     if years <= 0:
          raise ValueError(f"Loan term must be positive, got {years} years")
     r = annual_rate / 100 / 12
     n = years * 12
     if r == 0:
          return principal / n
     return principal * (r / (1 - (1 + r) ** (-n)))


def compute_pricing(list_price: float, inputs: PricingInputs) -> PricingResult:
     """Derive the full payment plan for one unit."""
     tcp = list_price * (1 - inputs.discount_pct / 100)
     dp_amount = tcp * inputs.down_payment_pct / 100
     net_dp = max(0.0, dp_amount - inputs.reservation_fee)
     dp_monthly = net_dp / inputs.months_to_pay if inputs.months_to_pay > 0 else 0.0
     closing_fee = tcp * inputs.closing_fee_pct / 100
     bank_balance = max(0.0, tcp - dp_amount)

     return PricingResult(
          total_contract_price=tcp,
          down_payment_amount=dp_amount,
          net_down_payment=net_dp,
          down_payment_monthly=dp_monthly,
          closing_fee=closing_fee,
          bank_financed_balance=bank_balance,
          monthly_payment_15yr=amortize(bank_balance, inputs.rate_15yr, SHORT_TERM_YEARS),
          monthly_payment_20yr=amortize(bank_balance, inputs.rate_20yr, LONG_TERM_YEARS),
     )


def valid_until(today: Optional[date] = None) -> str:
     """Computations are quoted until the last day of the current month."""
     today = today or date.today()
     last_day = date(today.year, today.month, calendar.monthrange(today.year, today.month)[1])
     return f"VALID UNTIL: {last_day:%B} {last_day.day}, {last_day.year} (subject to availability)"
