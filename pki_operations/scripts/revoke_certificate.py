#!/usr/bin/env python3
"""Revoke an issued certificate and refresh the CRL."""

import argparse
import asyncio
import os
import sys

from pki_operations.lib.cli import add_pki_arguments, config_from_args
from pki_operations.lib.config import REVOKE_REASONS
from pki_operations.lib.errors import EasyRSAError
from pki_operations.lib.logging_config import LOGGER
from pki_operations.lib.pki_manager import PKIManager


async def revoke_and_publish(
    manager: PKIManager,
    name: str,
    reason: str,
    ca_password: str | None,
    gen_crl: bool = True,
) -> None:
    """Revoke `name`, then regenerate the CRL so the revocation is published."""
    await manager.revoke(name=name, reason=reason, ca_password=ca_password)
    if gen_crl:
        await manager.gen_crl(ca_password=ca_password)


def main() -> int:
    """Revoke the certificate named --name.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(description="Revoke certificate")
    parser.add_argument("--name", required=True, help="Certificate name")
    parser.add_argument(
        "--reason",
        choices=REVOKE_REASONS,
        default="unspecified",
        help="Revocation reason (default: unspecified)",
    )
    parser.add_argument("--no-crl", action="store_true", help="Do not regenerate the CRL")
    add_pki_arguments(parser)
    args = parser.parse_args()

    try:
        manager = PKIManager(config_from_args(args))

        LOGGER.info("Revoking %s (reason=%s)", args.name, args.reason)
        asyncio.run(
            revoke_and_publish(
                manager,
                name=args.name,
                reason=args.reason,
                ca_password=os.environ.get("PKI_CA_PASSWORD") or None,
                gen_crl=not args.no_crl,
            )
        )
        LOGGER.info("Certificate %s revoked", args.name)
        return 0

    except (EasyRSAError, OSError) as e:
        LOGGER.error("Revocation failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
