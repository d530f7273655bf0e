#!/usr/bin/env python3
"""
Register a Matrix user on a Synapse homeserver with the registration shared secret.

Every option can also come from the environment (or a .env file):
MATRIX_HOMESERVER_URL, MATRIX_REGISTRATION_SHARED_SECRET, MATRIX_USERNAME,
MATRIX_PASSWORD, MATRIX_DISPLAY_NAME, MATRIX_ADMIN, MATRIX_REGISTER_TIMEOUT, LOG_LEVEL.
"""
import argparse
import asyncio
import json
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from synapse_register.config import load_config, setup_logging
from synapse_register.core.exceptions import ConfigError, RegistrationError
from synapse_register.core.orchestrator import RegistrationOrchestrator

logger = logging.getLogger("synapse_register.cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="synapse-register",
        description="Register a Matrix user via the Synapse shared-secret admin API",
    )
    parser.add_argument("--homeserver", dest="homeserver_url", help="Homeserver URL, e.g. https://matrix.org")
    parser.add_argument("--secret", dest="shared_secret", help="Homeserver registration shared secret")
    parser.add_argument("--username", help="Matrix username (localpart)")
    parser.add_argument("--password", help="Matrix password")
    parser.add_argument("--display-name", dest="display_name", help="Matrix user display name, e.g. 'Michael Bolton'")
    parser.add_argument(
        "--admin",
        action="store_const",
        const=True,
        default=None,
        help="Register the user as a server admin",
    )
    parser.add_argument(
        "--timeout",
        help="Seconds allowed per HTTP request, 0 to wait indefinitely (default: 30)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON log lines")
    parser.add_argument("--env-file", default=".env", help="dotenv file to load (default: .env)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv(args.env_file)

    try:
        setup_logging(args.log_level or os.getenv("LOG_LEVEL", "INFO"), json_format=args.json_logs)
        config = load_config({
            "homeserver_url": args.homeserver_url,
            "shared_secret": args.shared_secret,
            "username": args.username,
            "password": args.password,
            "display_name": args.display_name,
            "admin": args.admin,
            "timeout": args.timeout,
        })
    except ConfigError as e:
        parser.print_help(sys.stderr)
        print(f"\nerror: {e}", file=sys.stderr)
        return EXIT_FAILURE

    orchestrator = RegistrationOrchestrator(config)
    try:
        response = asyncio.run(orchestrator.register())
    except RegistrationError as e:
        logger.error(f"failure ({e.category}): {e.diagnostic}")
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.error("Registration interrupted")
        return EXIT_INTERRUPTED

    logger.info(f"success: {response.user_id}")
    print(json.dumps(response.to_dict(), indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
