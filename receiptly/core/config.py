# receiptly/core/config.py
import os
from typing import List
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str) -> List[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


class Settings(BaseModel):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "ReceiptlyPlus")
    API_V1_STR: str = os.getenv("API_V1_STR", "/api")

    # CORS (env takes priority)
    BACKEND_CORS_ORIGINS: List[str] = _split_csv(
        os.getenv(
            "CORS_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173",
        ))

    # ---------- Storage (receipt history + sequence) ----------
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./receiptly.db")

    # ---------- Locale ----------
    TIMEZONE: str = os.getenv("TIMEZONE", "Asia/Kolkata")
    CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "₹")

    # ---------- Receipt numbers ----------
    RECEIPT_PREFIX: str = os.getenv("RECEIPT_PREFIX", "RCT")
    # "timestamp" (RCT-YYMM-HHMM) | "sequence" (RCT-YYYY-0001)
    RECEIPT_NUMBER_POLICY: str = os.getenv("RECEIPT_NUMBER_POLICY",
                                           "timestamp")

    # ---------- PDF ----------
    PAGE_FORMAT: str = os.getenv("PAGE_FORMAT", "A4")
    PAGE_ORIENTATION: str = os.getenv("PAGE_ORIENTATION", "portrait")
    # "three_column" | "two_column" (legacy)
    ID_ROW_STYLE: str = os.getenv("ID_ROW_STYLE", "three_column")
    COMPACT_FRAME: bool = _flag("COMPACT_FRAME")
    RASTER_SCALE: int = int(os.getenv("RASTER_SCALE", "2"))
    FONT_PATH: str = os.getenv("FONT_PATH", "DejaVuSans.ttf")
    FONT_BOLD_PATH: str = os.getenv("FONT_BOLD_PATH", "DejaVuSans-Bold.ttf")

    # ---------- Logging ----------
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
