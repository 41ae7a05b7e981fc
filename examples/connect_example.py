#!/usr/bin/env python3
"""
Example: Using vlcm_session from blocking and async code

This example logs in twice: once with the blocking connect() and once with
connect_async() inside an event loop, then shows how the returned
SessionContext is passed on to follow-up requests.

Usage:
    python connect_example.py --server vlcm.example.com --username admin@local
"""

import argparse
import asyncio
import logging

import aiohttp

from vlcm_session import (
    SecretString,
    SessionContext,
    TransportOptions,
    UsernameSecret,
    VlcmSessionError,
    connect,
    connect_async,
)


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
log = logging.getLogger(__name__)


def blocking_example(server: str, credential: UsernameSecret, options: TransportOptions) -> SessionContext:
    log.info("=== Blocking connect() ===")
    session = connect(server, credential, options)
    log.info(f"✓ Logged in as {session.username}: {session}")
    return session


async def async_example(server: str, credential: UsernameSecret, options: TransportOptions) -> None:
    """
    Logs in from async code and reuses the session for a follow-up request.

    The session is an explicit value: whatever code makes the next call gets
    it as an argument, there is no hidden current session.
    """
    log.info("=== Async connect_async() ===")
    session = await connect_async(server, credential, options)
    log.info(f"✓ Logged in as {session.username}")

    # Follow-up requests carry the bearer token; the endpoint is illustrative
    async with aiohttp.ClientSession(headers=session.authorization_header()) as http:
        ssl_arg = None if session.certificates_validated else False
        async with http.get(f"{session.server_base_url}/lcm/api/v1/about", ssl=ssl_arg) as resp:
            log.info(f"   GET /lcm/api/v1/about -> HTTP {resp.status}")


def main() -> int:
    p = argparse.ArgumentParser(description="vlcm_session usage example")
    p.add_argument("--server", required=True)
    p.add_argument("--username", required=True)
    p.add_argument("--insecure", action="store_true", help="Ignore certificate requirements")
    p.add_argument("--ssl-protocol", default=None)
    args = p.parse_args()

    credential = UsernameSecret(args.username, SecretString.from_prompt())
    options = TransportOptions(ignore_cert_requirements=args.insecure, ssl_protocol=args.ssl_protocol)

    try:
        blocking_example(args.server, credential, options)
        asyncio.run(async_example(args.server, credential, options))
    except VlcmSessionError as e:
        log.error(f"Failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
