# utils/money.py
import math
import re
from decimal import Decimal

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
_LEADING_NUMBER = re.compile(r"^-?(\d+\.?\d*|\.\d+)")


def normalize_money(value) -> float:
     """
     Parse a loosely formatted number such as "₱1,234,567.89" or " 57.5 sqm ".

     Every character other than digits, "." and "-" is dropped and the
     leading numeric prefix is read. Anything unusable returns 0; this
     never raises.
     """
     if value is None or isinstance(value, bool):
          return 0.0
     if isinstance(value, (int, float, Decimal)):
          number = float(value)
          return number if math.isfinite(number) else 0.0

     cleaned = _NON_NUMERIC.sub("", str(value))
     match = _LEADING_NUMBER.match(cleaned)
     if not match:
          return 0.0
     return float(match.group(0))
