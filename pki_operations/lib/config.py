"""PKI configuration dataclass and the closed option sets it is validated against."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import InvalidConfigurationError

DIGESTS = ("md5", "sha1", "sha256", "sha224", "sha384", "sha512")

ALGORITHMS = ("rsa", "ec")

CURVES = (
    "secp112r1",
    "secp112r2",
    "secp128r1",
    "secp128r2",
    "secp160k1",
    "secp160r1",
    "secp160r2",
    "secp192k1",
    "secp224k1",
    "secp224r1",
    "secp256k1",
    "secp384r1",
    "secp521r1",
    "prime192v1",
    "prime192v2",
    "prime192v3",
    "prime239v1",
    "prime239v2",
    "prime239v3",
    "prime256v1",
    "sect113r1",
    "sect113r2",
    "sect131r1",
    "sect131r2",
    "sect163k1",
    "sect163r1",
    "sect163r2",
    "sect193r1",
    "sect193r2",
    "sect233k1",
    "sect233r1",
    "sect239k1",
    "sect283k1",
    "sect283r1",
    "sect409k1",
    "sect409r1",
    "sect571k1",
    "sect571r1",
    "c2pnb163v1",
    "c2pnb163v2",
    "c2pnb163v3",
    "c2pnb176v1",
    "c2tnb191v1",
    "c2tnb191v2",
    "c2tnb191v3",
    "c2pnb208w1",
    "c2tnb239v1",
    "c2tnb239v2",
    "c2tnb239v3",
    "c2pnb272w1",
    "c2pnb304w1",
    "c2tnb359v1",
    "c2pnb368w1",
    "c2tnb431r1",
    "wap-wsg-idm-ecid-wtls1",
    "wap-wsg-idm-ecid-wtls3",
    "wap-wsg-idm-ecid-wtls4",
    "wap-wsg-idm-ecid-wtls5",
    "wap-wsg-idm-ecid-wtls6",
    "wap-wsg-idm-ecid-wtls7",
    "wap-wsg-idm-ecid-wtls8",
    "wap-wsg-idm-ecid-wtls9",
    "wap-wsg-idm-ecid-wtls10",
    "wap-wsg-idm-ecid-wtls11",
    "wap-wsg-idm-ecid-wtls12",
    "Oakley-EC2N-3",
    "Oakley-EC2N-4",
    "brainpoolP160r1",
    "brainpoolP160t1",
    "brainpoolP192r1",
    "brainpoolP192t1",
    "brainpoolP224r1",
    "brainpoolP224t1",
    "brainpoolP256r1",
    "brainpoolP256t1",
    "brainpoolP320r1",
    "brainpoolP320t1",
    "brainpoolP384r1",
    "brainpoolP384t1",
    "brainpoolP512r1",
    "brainpoolP512t1",
    "SM2",
)

REVOKE_REASONS = (
    "unspecified",
    "keyCompromise",
    "CACompromise",
    "affiliationChanged",
    "superseded",
    "cessationOfOperation",
    "certificateHold",
)


def _default_easyrsa_dir() -> Path:
    return Path(os.environ.get("EASYRSA", "/usr/share/easy-rsa"))


def _absolute(path: str | os.PathLike[str]) -> Path:
    """Anchor a relative path at the current working directory."""
    p = Path(path)
    return p if p.is_absolute() else Path.cwd() / p


@dataclass(frozen=True)
class PKIConfig:
    """Resolved easyrsa options for one key-store.

    Any field left as None is filled with its default. The vars file defaults
    to `<pki parent>/<pki name>.vars`, one per key-store. Relative paths are
    anchored at the current working directory. Raises
    InvalidConfigurationError for a digest, curve or algorithm outside its
    allowed set.
    """

    easyrsa_dir: Path = field(default_factory=_default_easyrsa_dir)
    pki: Path | None = None
    days: int = 3650
    cert_days: int = 825
    digest: str = "sha256"
    algo: str = "rsa"
    key_size: int = 2048
    curve: str = "sect571r1"
    vars_file: Path | None = None

    def __post_init__(self) -> None:
        if self.digest not in DIGESTS:
            raise InvalidConfigurationError(f"digest not valid: {self.digest!r}")
        if self.curve not in CURVES:
            raise InvalidConfigurationError(f"curve not valid: {self.curve!r}")
        if self.algo not in ALGORITHMS:
            raise InvalidConfigurationError(f"algorithm not valid: {self.algo!r}")

        easyrsa_dir = _absolute(self.easyrsa_dir)
        pki = _absolute(self.pki) if self.pki is not None else easyrsa_dir / "pki"
        vars_file = (
            _absolute(self.vars_file) if self.vars_file is not None else pki.parent / f"{pki.name}.vars"
        )

        # frozen dataclass: normalised paths are written once, here
        object.__setattr__(self, "easyrsa_dir", easyrsa_dir)
        object.__setattr__(self, "pki", pki)
        object.__setattr__(self, "vars_file", vars_file)

    @property
    def easyrsa_bin(self) -> Path:
        return self.easyrsa_dir / "easyrsa"


def resolve_config(**options: Any) -> PKIConfig:
    """Build a PKIConfig from a partial set of options.

    Options given as None fall back to their defaults, so callers can forward
    optional CLI arguments unchanged.
    """
    return PKIConfig(**{key: value for key, value in options.items() if value is not None})
