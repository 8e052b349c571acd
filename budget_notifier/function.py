"""Background Cloud Function entry point for budget alerts."""

import asyncio

from loguru import logger

from budget_notifier.config import Settings
from budget_notifier.engine import BudgetNotifierEngine
from budget_notifier.schemas import Outcome, PubSubMessage


def build_engine() -> BudgetNotifierEngine:
    return BudgetNotifierEngine.from_settings(Settings())


async def _run(message: PubSubMessage) -> Outcome:
    engine = build_engine()
    try:
        return await engine.handle_message(message)
    finally:
        await engine.close()


def notify_budget(event, context=None) -> Outcome:
    """Pub/Sub-triggered function.

    Errors are re-raised so that a function with retries enabled gets the
    event redelivered.
    """
    message = PubSubMessage.model_validate(event)
    if context is not None:
        logger.info(f"Event {getattr(context, 'event_id', None)} from {getattr(context, 'resource', None)}")
    return asyncio.run(_run(message))
