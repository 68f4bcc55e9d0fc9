#!/usr/bin/env python3
"""Build the certificate authority of an initialized key-store."""

import argparse
import asyncio
import os
import sys

from pki_operations.lib.cli import add_pki_arguments, config_from_args
from pki_operations.lib.errors import EasyRSAError
from pki_operations.lib.logging_config import LOGGER
from pki_operations.lib.pki_manager import PKIManager


def main() -> int:
    """Build the CA, encrypted with $PKI_CA_PASSWORD when it is set.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(description="Build easyrsa CA")
    parser.add_argument("--common-name", help="CA common name")
    add_pki_arguments(parser)
    args = parser.parse_args()

    try:
        config = config_from_args(args)
        manager = PKIManager(config)

        password = os.environ.get("PKI_CA_PASSWORD") or None
        LOGGER.info("Building CA in %s", config.pki)
        asyncio.run(manager.build_ca(common_name=args.common_name, password=password))

        LOGGER.info("CA created:")
        LOGGER.info("  Cert: %s", manager.pki_dir / "ca.crt")
        LOGGER.info("  Key: %s", manager.pki_dir / "private" / "ca.key")
        LOGGER.info("Next: run issue_certificate.py")
        return 0

    except (EasyRSAError, OSError) as e:
        LOGGER.error("CA build failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
