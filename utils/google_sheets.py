# utils/google_sheets.py
"""
Read-only Google Sheets client.

Authenticates as a service account: a signed RS256 JWT assertion is
exchanged for an OAuth access token, which is reused until shortly
before it expires. Values are read through the Sheets v4 REST API.
"""
import threading
import time
from typing import List, Optional
from urllib.parse import quote

import requests
from jose import JWTError, jwt

from exceptions import UpstreamReadError
from log_config import get_logger

logger = get_logger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"
SHEETS_BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"
READONLY_SCOPE = "https://www.googleapis.com/auth/spreadsheets.readonly"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
TOKEN_LIFETIME_SECONDS = 3600
TOKEN_REFRESH_MARGIN_SECONDS = 60


class GoogleSheetsClient:
     """Range-addressable reads of one spreadsheet."""

     def __init__(
          self,
          spreadsheet_id: str,
          service_account_email: str,
          private_key: str,
          timeout: float = 10,
          session: Optional[requests.Session] = None,
     ):
          self.spreadsheet_id = spreadsheet_id
          self.service_account_email = service_account_email
          self.private_key = private_key
          self.timeout = timeout
          self.session = session or requests.Session()
          self._token: Optional[str] = None
          self._token_expires_at = 0.0
          self._token_lock = threading.Lock()

     def _build_assertion(self, now: int) -> str:
          claims = {
               "iss": self.service_account_email,
               "scope": READONLY_SCOPE,
               "aud": TOKEN_URI,
               "iat": now,
               "exp": now + TOKEN_LIFETIME_SECONDS,
          }
          return jwt.encode(claims, self.private_key, algorithm="RS256")

     def _cached_token(self, now: int) -> Optional[str]:
          if self._token and now < self._token_expires_at - TOKEN_REFRESH_MARGIN_SECONDS:
               return self._token
          return None

     def access_token(self) -> str:
          token = self._cached_token(int(time.time()))
          if token:
               return token

          # Concurrent reads share one refresh
          with self._token_lock:
               now = int(time.time())
               token = self._cached_token(now)
               if token:
                    return token
               return self._refresh_token(now)

     def _refresh_token(self, now: int) -> str:
          try:
               assertion = self._build_assertion(now)
               response = self.session.post(
                    TOKEN_URI,
                    data={"grant_type": JWT_BEARER_GRANT, "assertion": assertion},
                    timeout=self.timeout,
               )
          except (JWTError, requests.RequestException) as exc:
               raise UpstreamReadError("Could not obtain a Sheets access token") from exc

          if response.status_code != 200:
               raise UpstreamReadError(f"Token endpoint returned {response.status_code}")

          payload = response.json()
          self._token = payload["access_token"]
          self._token_expires_at = now + int(payload.get("expires_in", TOKEN_LIFETIME_SECONDS))
          return self._token

     def get_values(self, range_name: str) -> List[List[str]]:
          """
          Return the rows of `range_name` (header row first); an empty range
          yields an empty list.

          Raises:
               UpstreamReadError: on transport errors or a non-200 response
          """
          token = self.access_token()
          url = f"{SHEETS_BASE_URL}/{self.spreadsheet_id}/values/{quote(range_name, safe='')}"
          try:
               response = self.session.get(
                    url,
                    headers={"Authorization": f"Bearer {token}"},
                    timeout=self.timeout,
               )
          except requests.RequestException as exc:
               raise UpstreamReadError(f"Sheets request failed for range {range_name!r}") from exc

          if response.status_code != 200:
               raise UpstreamReadError(
                    f"Sheets API returned {response.status_code} for range {range_name!r}"
               )

          values = response.json().get("values", [])
          logger.debug("Read %d rows from %r", len(values), range_name)
          return values
