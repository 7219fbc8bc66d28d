"""
Strukly HTTP backend.

Routes:
- POST /api/chat/ocr          receipt photo (data URL) -> extraction JSON
- POST /api/chat              chat message + history -> assistant reply
- /api/receipts               receipt CRUD and search, scoped by userId
- GET  /api/revenue           revenue statistics for a window
- GET  /api/accounts/{uid}    running totals of one owner
"""

from datetime import date
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response

from strukly import __version__
from strukly.analytics.periods import PERIODS
from strukly.analytics.revenue_service import RevenueService
from strukly.exceptions import (
    AccountNotFoundError,
    AssistantError,
    ExtractionError,
    ReceiptNotFoundError,
    StoreError,
    ValidationError,
)
from strukly.llm import ChatAssistant, ReceiptExtractor
from strukly.models import (
    ChatReply,
    ChatRequest,
    OcrRequest,
    Receipt,
    ReceiptCreate,
    ReceiptUpdate,
    RevenueStats,
    UserRevenueAccount,
)
from strukly.store import ReceiptStore, build_receipt_store
from strukly.utils.config import get_settings
from strukly.utils.logging_config import logger
from strukly.utils.translations import translate

CHAT_FALLBACK = translate("id", "chat_fallback")
CHAT_SYSTEM_ERROR = translate("id", "chat_system_error")


# --- Dependency providers (overridden in tests) ---

@lru_cache(maxsize=1)
def get_store() -> ReceiptStore:
    return build_receipt_store(get_settings().database_url)


@lru_cache(maxsize=1)
def get_extractor() -> ReceiptExtractor:
    return ReceiptExtractor(model=get_settings().extraction_model)


@lru_cache(maxsize=1)
def get_assistant() -> ChatAssistant:
    settings = get_settings()
    return ChatAssistant(model=settings.chat_model, history_limit=settings.chat_history_limit)


def get_revenue_service(store: ReceiptStore = Depends(get_store)) -> RevenueService:
    return RevenueService(store)


def _dump(model) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def create_app() -> FastAPI:
    app = FastAPI(title="Strukly API", version=__version__)

    # --- Error mapping ---

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(ExtractionError)
    async def handle_extraction_error(request: Request, exc: ExtractionError):
        logger.error(f"OCR Error: {exc.details}")
        return JSONResponse({"error": "Server Error", "details": exc.details}, status_code=500)

    @app.exception_handler(AssistantError)
    async def handle_assistant_error(request: Request, exc: AssistantError):
        return JSONResponse({"response": CHAT_FALLBACK}, status_code=500)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        if isinstance(exc, (ReceiptNotFoundError, AccountNotFoundError)):
            return JSONResponse({"error": str(exc), "retryable": False}, status_code=404)
        return JSONResponse({"error": str(exc), "retryable": exc.retryable}, status_code=503)

    # --- Extraction & chat ---

    @app.post("/api/chat/ocr")
    def detect_receipt(payload: OcrRequest, extractor: ReceiptExtractor = Depends(get_extractor)):
        if not payload.image:
            raise ValidationError("Image missing")
        return extractor.extract_json(payload.image)

    @app.post("/api/chat", response_model=ChatReply)
    def chat(payload: ChatRequest, assistant: ChatAssistant = Depends(get_assistant)):
        if not payload.message:
            raise ValidationError("Message required")
        try:
            reply = assistant.reply(payload.message, payload.history)
        except AssistantError:
            raise
        except Exception as e:
            logger.error(f"Chat route failure: {e}")
            return JSONResponse({"response": CHAT_SYSTEM_ERROR}, status_code=500)
        return ChatReply(response=reply)

    # --- Receipts ---

    @app.post("/api/receipts", status_code=201)
    def create_receipt(receipt: ReceiptCreate, store: ReceiptStore = Depends(get_store)):
        return _dump(store.create(receipt))

    @app.get("/api/receipts/search")
    def search_receipts(
        user_id: str = Query(..., alias="userId"),
        q: str = Query(""),
        store: ReceiptStore = Depends(get_store),
    ):
        return [_dump(r) for r in store.search(user_id, q)]

    @app.get("/api/receipts")
    def list_receipts(
        user_id: str = Query(..., alias="userId"),
        limit: int = Query(50, ge=1, le=200),
        cursor: Optional[str] = None,
        store: ReceiptStore = Depends(get_store),
    ):
        receipts, next_cursor = store.list_by_user(user_id, limit=limit, cursor=cursor)
        return {"receipts": [_dump(r) for r in receipts], "nextCursor": next_cursor}

    @app.get("/api/receipts/{receipt_id}")
    def get_receipt(
        receipt_id: str,
        user_id: str = Query(..., alias="userId"),
        store: ReceiptStore = Depends(get_store),
    ):
        receipt: Optional[Receipt] = store.get(user_id, receipt_id)
        if receipt is None:
            raise ReceiptNotFoundError(receipt_id)
        return _dump(receipt)

    @app.patch("/api/receipts/{receipt_id}")
    def update_receipt(
        receipt_id: str,
        patch: ReceiptUpdate,
        user_id: str = Query(..., alias="userId"),
        store: ReceiptStore = Depends(get_store),
    ):
        return _dump(store.update(user_id, receipt_id, patch))

    @app.delete("/api/receipts/{receipt_id}", status_code=204)
    def delete_receipt(
        receipt_id: str,
        user_id: str = Query(..., alias="userId"),
        store: ReceiptStore = Depends(get_store),
    ):
        store.delete(user_id, receipt_id)
        return Response(status_code=204)

    # --- Analytics ---

    @app.get("/api/revenue")
    def revenue(
        user_id: str = Query(..., alias="userId"),
        period: Optional[str] = Query(None),
        start: Optional[date] = Query(None),
        end: Optional[date] = Query(None),
        service: RevenueService = Depends(get_revenue_service),
    ):
        if period is not None:
            if period not in PERIODS:
                raise ValidationError(f"Unknown period: {period}")
            stats: RevenueStats = service.stats_for_period(user_id, period)
        else:
            stats = service.stats_for_range(user_id, start_date=start, end_date=end)
        return _dump(stats)

    @app.get("/api/accounts/{uid}")
    def get_account(uid: str, store: ReceiptStore = Depends(get_store)):
        account: UserRevenueAccount = store.get_account(uid)
        return _dump(account)

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
