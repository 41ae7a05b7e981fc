"""
Command line login for a vLCM appliance.

Security note:
- Avoid passing passwords on the command line (they can end up in history). The
  password is read from VLCM_PASSWORD or prompted for without echo when
  --password is omitted.

Usage:
    export VLCM_SERVER=vlcm.example.com
    export VLCM_USERNAME=admin@local
    vlcm-connect --ignore-cert-requirements --ssl-protocol TLS1.2

Prints the session as JSON; the token is masked unless --show-token is given.
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from .client import connect
from .credentials import SecretString, UsernamePassword, UsernameSecret
from .exceptions import ConfigurationError, VlcmSessionError
from .helpers import mask_token
from .transport import DEFAULT_TIMEOUT, SslProtocol, TransportOptions

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="vlcm-connect", description="Log in to a vLCM appliance")
    p.add_argument("--server", help="Appliance host name or address (or set VLCM_SERVER env var)")
    p.add_argument("--username", help="Login user (or set VLCM_USERNAME env var)")
    p.add_argument("--password", help="Password (or set VLCM_PASSWORD env var, or omit to be prompted)")
    p.add_argument("--ignore-cert-requirements", action="store_true",
                   help="Disable certificate validation (the password is then sent over an unverified channel)")
    p.add_argument("--ssl-protocol", choices=[proto.value for proto in SslProtocol],
                   help="Pin the SSL/TLS protocol version")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Request timeout in seconds")
    p.add_argument("--show-token", action="store_true", help="Print the full session token")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv: Optional[List[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    server = args.server or os.environ.get("VLCM_SERVER")
    if not server:
        p.error("--server is required (or set VLCM_SERVER)")

    username = args.username or os.environ.get("VLCM_USERNAME")
    if not username:
        username = input("Username: ")

    # Resolve the password from args, env, or prompt
    password = args.password or os.environ.get("VLCM_PASSWORD")
    try:
        if password:
            credential = UsernamePassword(username, password)
        else:
            credential = UsernameSecret(username, SecretString.from_prompt())
        options = TransportOptions(
            ignore_cert_requirements=args.ignore_cert_requirements,
            ssl_protocol=args.ssl_protocol,
            timeout=args.timeout,
        )
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if options.ignore_cert_requirements:
        print("WARNING: certificate validation is disabled; the password is sent "
              "over an unverified channel.", file=sys.stderr)

    try:
        session = connect(server, credential, options)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except VlcmSessionError as e:
        print(f"Login failed: {e}", file=sys.stderr)
        return 1

    out = session.to_dict()
    if not args.show_token:
        out["token"] = mask_token(session.token)
    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
