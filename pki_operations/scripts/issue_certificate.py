#!/usr/bin/env python3
"""Issue a client or server certificate signed by the CA."""

import argparse
import asyncio
import os
import sys

from pki_operations.lib.cli import add_pki_arguments, config_from_args
from pki_operations.lib.errors import EasyRSAError, PrivateKeyIsEncryptedError
from pki_operations.lib.logging_config import LOGGER
from pki_operations.lib.pki_manager import PKIManager


def main() -> int:
    """Issue a certificate named --name.

    The certificate key is encrypted with $PKI_CERT_PASSWORD when set;
    $PKI_CA_PASSWORD unlocks an encrypted CA key.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(description="Issue client or server certificate")
    parser.add_argument("--name", required=True, help="Certificate name (file base name in the PKI)")
    parser.add_argument(
        "--type",
        choices=("client", "server"),
        default="client",
        help="Certificate type (default: client)",
    )
    parser.add_argument("--common-name", help="Subject common name (default: --name)")
    add_pki_arguments(parser)
    args = parser.parse_args()

    try:
        config = config_from_args(args)
        manager = PKIManager(config)
        create = manager.create_server if args.type == "server" else manager.create_client

        LOGGER.info("Issuing %s certificate for: %s", args.type, args.name)
        asyncio.run(
            create(
                name=args.name,
                common_name=args.common_name,
                password=os.environ.get("PKI_CERT_PASSWORD") or None,
                ca_password=os.environ.get("PKI_CA_PASSWORD") or None,
            )
        )

        LOGGER.info("Certificate issued:")
        LOGGER.info("  Cert: %s", manager.pki_dir / "issued" / f"{args.name}.crt")
        LOGGER.info("  Key: %s", manager.pki_dir / "private" / f"{args.name}.key")
        return 0

    except PrivateKeyIsEncryptedError as e:
        LOGGER.error("CA key is encrypted, set PKI_CA_PASSWORD: %s", e)
        return 1
    except (EasyRSAError, OSError) as e:
        LOGGER.error("Certificate issuance failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
