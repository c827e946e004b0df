# config.py
"""
Application settings loaded from the environment.

All values come from environment variables (a local .env file is loaded
first). Routes receive settings through the cached ``get_settings``
dependency so tests can override it.

Usage:
     from config import get_settings

     settings = get_settings()
     settings.availability_range  # "Database!A1:L"
"""
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, Tuple
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load .env
load_dotenv()


@dataclass(frozen=True)
class SheetsConfig:
     """Spreadsheet source configuration."""

     spreadsheet_id: str = ""
     availability_range: str = "Database!A1:L"
     log_range: str = "Process Log!A1:D"
     service_account_email: str = ""
     private_key: str = ""


@dataclass(frozen=True)
class DatabaseConfig:
     """Relational store configuration."""

     url: Optional[str] = None
     server: Optional[str] = None
     port: str = "1433"
     user: Optional[str] = None
     password: Optional[str] = None
     name: Optional[str] = None
     echo: bool = False

     @property
     def connection_string(self) -> str:
          """DATABASE_URL when given, otherwise an Azure SQL (pymssql) URL."""
          if self.url:
               return self.url
          safe_user = quote_plus(self.user or "")
          safe_pass = quote_plus(self.password or "")
          return f"mssql+pymssql://{safe_user}:{safe_pass}@{self.server}:{self.port}/{self.name}"


@dataclass(frozen=True)
class Settings:
     """Main configuration for the availability service."""

     sheets: SheetsConfig = field(default_factory=SheetsConfig)
     database: DatabaseConfig = field(default_factory=DatabaseConfig)
     upstream_timeout_seconds: float = 10.0
     jwt_secret: str = ""
     jwt_algorithm: str = "HS256"
     cors_origins: Tuple[str, ...] = ()
     log_level: str = "INFO"
     log_format: str = "standard"
     port: int = 10000

     @property
     def availability_range(self) -> str:
          return self.sheets.availability_range

     @property
     def log_range(self) -> str:
          return self.sheets.log_range

     @classmethod
     def from_env(cls) -> "Settings":
          """Create settings from environment variables."""
          sheets = SheetsConfig(
               spreadsheet_id=os.getenv("GOOGLE_SHEET_AVAILABILITY_ID", ""),
               availability_range=os.getenv("GOOGLE_SHEET_AVAILABILITY_RANGE", "Database!A1:L"),
               log_range=os.getenv("GOOGLE_SHEET_LOG_RANGE", "Process Log!A1:D"),
               service_account_email=os.getenv("GOOGLE_SERVICE_ACCOUNT_EMAIL", ""),
               # Keys pasted into .env usually carry literal "\n" sequences
               private_key=os.getenv("GOOGLE_PRIVATE_KEY", "").replace("\\n", "\n"),
          )

          database = DatabaseConfig(
               url=os.getenv("DATABASE_URL") or None,
               server=os.getenv("DB_SERVER"),
               port=os.getenv("DB_PORT", "1433"),
               user=os.getenv("DB_USER"),
               password=os.getenv("DB_PASS"),
               name=os.getenv("DB_NAME"),
               echo=os.getenv("SQL_ECHO", "false").lower() == "true",
          )

          origins = tuple(
               origin.strip()
               for origin in os.getenv("CORS_ORIGINS", "").split(",")
               if origin.strip()
          )

          return cls(
               sheets=sheets,
               database=database,
               upstream_timeout_seconds=float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10")),
               jwt_secret=os.getenv("JWT_SECRET", ""),
               cors_origins=origins,
               log_level=os.getenv("LOG_LEVEL", "INFO"),
               log_format=os.getenv("LOG_FORMAT", "standard"),
               port=int(os.getenv("PORT", "10000")),
          )


@lru_cache
def get_settings() -> Settings:
     """FastAPI dependency returning the process-wide settings."""
     return Settings.from_env()
