"""Budget Notifier - Pub/Sub push endpoint."""

import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Response
from loguru import logger

from budget_notifier.config import settings
from budget_notifier.engine import BudgetNotifierEngine
from budget_notifier.errors import ClaimError, DecodeError, DeliveryError
from budget_notifier.schemas import PushEnvelope


_engine: Optional[BudgetNotifierEngine] = None


def get_engine() -> BudgetNotifierEngine:
    """Engine shared by all requests, built on first use."""
    global _engine
    if _engine is None:
        _engine = BudgetNotifierEngine.from_settings(settings)
    return _engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    yield
    if _engine is not None:
        await _engine.close()


app = FastAPI(
    title="Budget Notifier",
    description="Relays Cloud Billing budget alerts to Slack, once per alert",
    version="0.1.0",
    lifespan=lifespan,
)


@app.post("/", status_code=204)
async def receive_push(envelope: PushEnvelope, engine: BudgetNotifierEngine = Depends(get_engine)):
    """Handle a Pub/Sub push delivery.

    Any non-2xx response makes Pub/Sub redeliver the message later.
    """
    try:
        await engine.handle_message(envelope.message)
    except DecodeError as e:
        logger.error(f"Rejected malformed message {envelope.message.message_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e
    except (ClaimError, DeliveryError) as e:
        logger.error(f"Failed to process message {envelope.message.message_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e
    return Response(status_code=204)


@app.get("/api/status")
async def get_status():
    """Get system status."""
    return {
        "status": "running",
        "collection": settings.firestore.collection,
        "slack_configured": bool(settings.slack.webhook_url),
    }


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def main():
    """Run the server."""
    import uvicorn

    configure_logging(settings.log_level)
    logger.info("Starting Budget Notifier...")
    logger.info(f"Server available at http://{settings.server.host}:{settings.server.port}")
    logger.info(f"Claims collection: {settings.firestore.collection}")

    uvicorn.run(
        "budget_notifier.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
