"""AWS Lambda entry point for the Pyth Price Relayer.

Event fields:
    - command: "price" or "asset-price" to read a price; anything else updates
    - address: contract address for the price commands
    - noReschedule: skip the self-invocation after an update
    - delaySeconds: set by the previous invocation; wait before updating
"""

import asyncio
import json
import logging
import os
import time
from collections.abc import Awaitable
from typing import Any, Callable

from .src.LambdaRescheduler import LambdaRescheduler
from .src.PriceReader import PriceReader
from .src.PriceUpdater import PriceUpdater
from .src.RelayerConfig import RelayerConfig
from .src.Rescheduler import Rescheduler
from .src.UpdateScheduler import compute_next_delay

logger = logging.getLogger(__name__)
logging.getLogger().setLevel(logging.INFO)


def _response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    return {"statusCode": status_code, "body": json.dumps(body)}


async def handle_event(
    event: dict[str, Any],
    config: RelayerConfig,
    updater: PriceUpdater | None = None,
    reader: PriceReader | None = None,
    rescheduler: Rescheduler | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> dict[str, Any]:
    """Dispatch one invocation event.

    :param event: Invocation event.
    :param config: Relayer configuration.
    :param updater: Optional PriceUpdater (default: built from config).
    :param reader: Optional PriceReader (default: built from config).
    :param rescheduler: Host capability to request the next invocation, if any.
    :param sleep: Coroutine function used for the requested delay.
    :param clock: Monotonic clock used to time the cycle.
    :returns: Response with ``statusCode`` and JSON ``body``.
    """
    command = event.get("command")
    address = event.get("address")

    if command == "price" and address:
        result = (reader or PriceReader(config)).get_underlying_price(address)
        return _response(200, result.to_dict())
    if command == "asset-price" and address:
        result = (reader or PriceReader(config)).get_asset_price(address)
        return _response(200, result.to_dict())

    try:
        delay = float(event.get("delaySeconds") or 0)
    except (TypeError, ValueError):
        logger.warning(
            f"Ignoring invalid delaySeconds: {event.get('delaySeconds')!r}"
        )
        delay = 0.0
    if delay > 0:
        delay = min(delay, config.update_interval)
        logger.info(f"Waiting {delay:.1f} seconds before updating")
        await sleep(delay)

    updater = updater or PriceUpdater(config)
    start = clock()
    success = False
    try:
        result = await updater.update_prices()
        success = result.success
        return _response(200, result.to_dict())
    finally:
        # Reschedule even when the cycle raised
        if rescheduler is not None and not event.get("noReschedule"):
            next_delay = compute_next_delay(
                clock() - start,
                success,
                interval=config.update_interval,
                min_delay=config.min_delay,
                error_backoff=config.error_backoff,
            )
            try:
                rescheduler.reschedule(next_delay)
            except Exception as e:
                logger.error(f"Failed to schedule next execution: {e}")


def handler(event: dict[str, Any] | None, context: Any) -> dict[str, Any]:
    """Lambda handler.

    :param event: Invocation event.
    :param context: Lambda context object.
    :returns: Response with ``statusCode`` 200 or 500 and a JSON ``body``.
    """
    event = event or {}
    logger.info(f"Lambda event received: {json.dumps(event)}")

    try:
        config = RelayerConfig.from_env()
        rescheduler = None
        if os.environ.get("AWS_EXECUTION_ENV"):
            rescheduler = LambdaRescheduler(getattr(context, "function_name", None))
        return asyncio.run(handle_event(event, config, rescheduler=rescheduler))
    except Exception as e:
        logger.exception("Error in Lambda handler")
        return _response(500, {"success": False, "error": str(e)})
