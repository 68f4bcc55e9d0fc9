#!/usr/bin/env python3
"""Renew an issued certificate and revoke the version it replaces."""

import argparse
import asyncio
import os
import sys

from pki_operations.lib.cli import add_pki_arguments, config_from_args
from pki_operations.lib.errors import EasyRSAError
from pki_operations.lib.logging_config import LOGGER
from pki_operations.lib.pki_manager import PKIManager


def main() -> int:
    """Renew the certificate named --name.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(description="Renew certificate")
    parser.add_argument("--name", required=True, help="Certificate name")
    parser.add_argument("--common-name", help="Subject common name for the renewed certificate")
    add_pki_arguments(parser)
    args = parser.parse_args()

    try:
        manager = PKIManager(config_from_args(args))

        LOGGER.info("Renewing %s", args.name)
        asyncio.run(
            manager.renew(
                name=args.name,
                common_name=args.common_name,
                password=os.environ.get("PKI_CERT_PASSWORD") or None,
                ca_password=os.environ.get("PKI_CA_PASSWORD") or None,
            )
        )
        LOGGER.info("Certificate %s renewed, previous version revoked", args.name)
        LOGGER.info("Next: run gen_crl.py to publish the revocation")
        return 0

    except (EasyRSAError, OSError) as e:
        LOGGER.error("Renewal failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
