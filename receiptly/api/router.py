# receiptly/api/router.py
from fastapi import APIRouter

from receiptly.api import routes_receipts

api_router = APIRouter()
api_router.include_router(routes_receipts.router)
