"""
FastAPI server — wallet transaction export API.

Exposes GET /transactions/{wallet_address}: fetches the wallet's recent
transactions from Solana RPC and saves them to a JSON file on disk.
Config via env (SOLANA_RPC_URL, OUTPUT_DIR, ...), read once at startup.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from backend_txexport.config import get_settings
from backend_txexport.config.env import mask_rpc_url
from backend_txexport.exporter import BackoffPolicy, JsonFileSink, TransactionExporter
from backend_txexport.solana_rpc import SolanaRpcClient
from backend_txexport.txexport_logging import get_logger

logger = get_logger(__name__)

SAVED_MESSAGE = "Transaction data has been saved to JSON file"
ERROR_MESSAGE = "Error fetching transactions"


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------

class ExportResponse(BaseModel):
    """GET /transactions/{wallet_address} success body."""

    message: str = Field(..., description="Human-readable status")
    filePath: str = Field(..., description="Path of the written JSON file")


# -----------------------------------------------------------------------------
# Lifespan: one RPC client and exporter per process
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the exporter from settings; a bad SOLANA_RPC_URL fails startup here."""
    settings = get_settings()
    client = SolanaRpcClient(settings.solana_rpc_url, timeout_sec=settings.rpc_timeout_sec)
    app.state.exporter = TransactionExporter(
        client,
        JsonFileSink(settings.output_dir),
        policy=BackoffPolicy(
            base_ms=settings.backoff_base_ms,
            max_ms=settings.backoff_max_ms,
            max_attempts=settings.max_fetch_attempts,
        ),
        max_transactions=settings.max_transactions,
    )
    logger.info(
        "api_started",
        rpc_url=mask_rpc_url(settings.solana_rpc_url),
        output_dir=str(settings.output_dir),
    )
    try:
        yield
    finally:
        await client.aclose()
        logger.info("api_stopped")


def get_exporter(request: Request) -> TransactionExporter:
    """Dependency: the process-wide exporter built in lifespan."""
    return request.app.state.exporter


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Backend TxExport API",
    description="Exports a Solana wallet's recent transactions to a JSON file.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get(
    "/transactions/{wallet_address}",
    response_model=ExportResponse,
    responses={500: {"description": ERROR_MESSAGE, "content": {"text/plain": {}}}},
)
async def export_transactions(
    wallet_address: str,
    exporter: TransactionExporter = Depends(get_exporter),
):
    """
    Fetch up to 100 recent transactions for wallet_address and write them to
    transactions_<wallet_address>.json. Any failure returns 500 with a fixed
    plain-text body; skipped signatures are not reported.
    """
    try:
        result = await exporter.export(wallet_address)
    except Exception as e:
        logger.exception("transactions_export_failed", wallet_id=wallet_address, error=str(e))
        return PlainTextResponse(ERROR_MESSAGE, status_code=500)
    resp = ExportResponse(message=SAVED_MESSAGE, filePath=result.file_path)
    return JSONResponse(status_code=200, content=resp.model_dump())


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness check: API is up."""
    return {"status": "ok"}
