#!/usr/bin/env python3
"""Initialize (or re-initialize) an easyrsa key-store."""

import argparse
import asyncio
import sys

from pki_operations.lib.cli import add_pki_arguments, config_from_args
from pki_operations.lib.config import PKIConfig
from pki_operations.lib.errors import EasyRSAError
from pki_operations.lib.logging_config import LOGGER
from pki_operations.lib.pki_manager import PKIManager


async def init_pki(config: PKIConfig, force: bool) -> str:
    """Initialize the key-store and wait for the ta.key side task."""
    manager = PKIManager(config)
    output = await manager.init_pki(force=force)
    await manager.wait_background_tasks()
    return output


def main() -> int:
    """Initialize the PKI directory.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(description="Initialize easyrsa PKI directory")
    add_pki_arguments(parser)
    parser.add_argument(
        "--soft",
        action="store_true",
        help="Keep an existing compatible PKI instead of wiping it",
    )
    args = parser.parse_args()

    try:
        config = config_from_args(args)
        asyncio.run(init_pki(config, force=not args.soft))
        LOGGER.info("PKI initialized at %s. Next: run build_ca.py", config.pki)
        return 0

    except (EasyRSAError, OSError) as e:
        LOGGER.error("PKI initialization failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
