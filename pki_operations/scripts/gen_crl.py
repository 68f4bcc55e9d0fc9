#!/usr/bin/env python3
"""Generate or refresh the certificate revocation list."""

import argparse
import asyncio
import os
import sys

from pki_operations.lib.cli import add_pki_arguments, config_from_args
from pki_operations.lib.errors import EasyRSAError
from pki_operations.lib.logging_config import LOGGER
from pki_operations.lib.pki_manager import PKIManager


def main() -> int:
    """Regenerate <pki>/crl.pem.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(description="Generate CRL")
    add_pki_arguments(parser)
    args = parser.parse_args()

    try:
        manager = PKIManager(config_from_args(args))
        asyncio.run(manager.gen_crl(ca_password=os.environ.get("PKI_CA_PASSWORD") or None))
        LOGGER.info("CRL written to %s", manager.pki_dir / "crl.pem")
        return 0

    except (EasyRSAError, OSError) as e:
        LOGGER.error("CRL generation failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
