"""CLI client for manually exercising a running event ingestion server."""

import argparse
import asyncio
import logging
import os
import sys
import time

from event_ingestion.errors import RemoteHttpError
from event_ingestion.http_client import EventIngestionHttpClient
from event_ingestion.server_main import setup_logging


async def run_client(
    client: EventIngestionHttpClient,
    logger: logging.Logger,
    event_id: str,
    payload: str,
    poll_interval: float = 1.0,
    timeout: float = 30.0,
) -> bool:
    """
    Ingest one event and poll its status until it is done.

    Returns:
        True if the job reached "done", False if it was rejected or timed out
    """
    result = await client.ingest_event(
        event_id=event_id, payload=payload, timestamp=int(time.time())
    )
    logger.info(f"Response: accepted={result.accepted} message={result.message}")

    if not result.accepted:
        return False

    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        await asyncio.sleep(poll_interval)
        status = await client.get_status(result.job_id)
        logger.info(f"job={result.job_id} status={status}")
        if status == "done":
            return True

    logger.error("timeout waiting for job to finish")
    return False


def main():
    """Main entrypoint for the client."""
    setup_logging()
    logger = logging.getLogger(__name__)

    parser = argparse.ArgumentParser(description="Event Ingestion Client")
    parser.add_argument(
        "--server",
        default=os.getenv("SERVER_ADDRESS", "http://localhost:50051"),
        help="Server base URL (default: $SERVER_ADDRESS or http://localhost:50051)",
    )
    parser.add_argument("--event-id", default="evt-123", help="Event ID to send")
    parser.add_argument(
        "--payload", default='{"type":"user_signup"}', help="Event payload to send"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Seconds to wait for the job to finish (default: 30)",
    )

    args = parser.parse_args()

    server = args.server
    if "://" not in server:
        server = f"http://{server}"

    logger.info(f"Connecting to server at: {server}")
    client = EventIngestionHttpClient(server)

    try:
        done = asyncio.run(
            run_client(
                client,
                logger,
                event_id=args.event_id,
                payload=args.payload,
                timeout=args.timeout,
            )
        )
    except RemoteHttpError as e:
        logger.error(f"Request failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)

    if not done:
        sys.exit(1)


if __name__ == "__main__":
    main()
