"""Argument handling shared by the entry scripts."""

import argparse
from pathlib import Path

from .config import ALGORITHMS, DIGESTS, PKIConfig
from .vars_file import load_config


def add_pki_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the key-store location and settings options to `parser`.

    Settings left unset keep the value stored in the key-store's vars file,
    so a later step never resets what an earlier one configured.
    """
    location = parser.add_argument_group("key-store")
    location.add_argument("--easyrsa-dir", type=Path, help="easyrsa install directory (default: $EASYRSA)")
    location.add_argument("--pki", type=Path, help="PKI directory (default: <easyrsa-dir>/pki)")
    location.add_argument("--vars-file", type=Path, help="easyrsa vars file (default: <pki>.vars)")

    settings = parser.add_argument_group("settings", "Unset options keep the value stored in the vars file")
    settings.add_argument("--days", type=int, help="CA validity in days (default: 3650)")
    settings.add_argument("--cert-days", type=int, help="Certificate validity in days (default: 825)")
    settings.add_argument("--digest", choices=DIGESTS, help="Digest algorithm (default: sha256)")
    settings.add_argument("--algo", choices=ALGORITHMS, help="Key algorithm (default: rsa)")
    settings.add_argument("--key-size", type=int, help="RSA key size (default: 2048)")
    settings.add_argument("--curve", help="EC curve name (default: sect571r1)")


def config_from_args(args: argparse.Namespace) -> PKIConfig:
    """Build the PKIConfig for parsed arguments (see add_pki_arguments).

    Raises:
        InvalidConfigurationError: If a setting is not allowed
    """
    return load_config(
        easyrsa_dir=args.easyrsa_dir,
        pki=args.pki,
        vars_file=args.vars_file,
        days=args.days,
        cert_days=args.cert_days,
        digest=args.digest,
        algo=args.algo,
        key_size=args.key_size,
        curve=args.curve,
    )
