"""Command-line entry-point for the Astarte Pairing API client."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence

from pydantic import ValidationError

from .backend.http_client import HttpTransport
from .backend.pairing import PairingClient
from .config import Settings, get_settings
from .errors import PairingError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

Handler = Callable[[PairingClient, argparse.Namespace], Awaitable[None]]


async def _register(client: PairingClient, args: argparse.Namespace) -> None:
    introspection: Optional[Dict[str, Any]] = None
    if args.introspection_file:
        introspection = json.loads(_read_text(args.introspection_file))
    secret = await client.register_device(
        args.realm, args.device_id, args.token, initial_introspection=introspection
    )
    print(secret)


async def _unregister(client: PairingClient, args: argparse.Namespace) -> None:
    await client.unregister_device(args.realm, args.device_id, args.token)
    logger.info("Device %s unregistered from realm %s", args.device_id, args.realm)


async def _obtain_certificate(client: PairingClient, args: argparse.Namespace) -> None:
    csr = _read_text(args.csr_file)
    certificate = await client.obtain_certificate(args.realm, args.device_id, args.credentials_secret, csr)
    print(certificate)


async def _protocol_info(client: PairingClient, args: argparse.Namespace) -> None:
    info = await client.get_protocol_info(args.realm, args.device_id, args.credentials_secret)
    print(json.dumps(info.model_dump(), indent=2, sort_keys=True))


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="astarte-pairing", description=__doc__)
    parser.add_argument("--pairing-url", help="Pairing API base URL (default: $ASTARTE_PAIRING_URL)")
    parser.add_argument("--log-level", help="Logging level (default: $ASTARTE_LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    register = sub.add_parser("register", help="Register a device and print its credentials secret")
    register.add_argument("realm")
    register.add_argument("device_id")
    register.add_argument("--token", required=True, help="Realm token with agent API access")
    register.add_argument("--introspection-file", help="JSON file sent as initial_introspection")
    register.set_defaults(handler=_register)

    unregister = sub.add_parser("unregister", help="Reset the registration state of a device")
    unregister.add_argument("realm")
    unregister.add_argument("device_id")
    unregister.add_argument("--token", required=True, help="Realm token with agent API access")
    unregister.set_defaults(handler=_unregister)

    certificate = sub.add_parser("obtain-certificate", help="Sign a CSR and print the client certificate")
    certificate.add_argument("realm")
    certificate.add_argument("device_id")
    certificate.add_argument("--credentials-secret", required=True, help="Device credentials secret")
    certificate.add_argument("--csr-file", required=True, help="PEM encoded CSR, '-' reads stdin")
    certificate.set_defaults(handler=_obtain_certificate)

    info = sub.add_parser("protocol-info", help="Print astarte_mqtt_v1 connection info as JSON")
    info.add_argument("realm")
    info.add_argument("device_id")
    info.add_argument("--credentials-secret", required=True, help="Device credentials secret")
    info.set_defaults(handler=_protocol_info)

    return parser


def _load_settings(parser: argparse.ArgumentParser, args: argparse.Namespace) -> Settings:
    overrides: Dict[str, Any] = {}
    if args.pairing_url:
        overrides["pairing_url"] = args.pairing_url
    if args.log_level:
        overrides["log_level"] = args.log_level
    try:
        if overrides:
            return Settings(**overrides)
        return get_settings()
    except ValidationError:
        parser.error("a pairing URL is required: pass --pairing-url or set ASTARTE_PAIRING_URL")


async def _run(handler: Handler, args: argparse.Namespace, settings: Settings, transport: Optional[HttpTransport]) -> None:
    if transport is not None:
        await handler(PairingClient(settings.pairing_url, transport), args)
        return
    async with PairingClient.from_settings(settings) as client:
        await handler(client, args)


def main(argv: Optional[Sequence[str]] = None, transport: Optional[HttpTransport] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = _load_settings(parser, args)
    configure_logging(settings.log_level)

    try:
        asyncio.run(_run(args.handler, args, settings, transport))
    except PairingError as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1
    except (OSError, ValueError) as exc:
        logger.error("%s: %s", args.command, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
