"""Request and outcome models for PKI operations."""

from dataclasses import dataclass
from typing import Literal

CertificateType = Literal["client", "server"]


@dataclass(frozen=True)
class CertificateRequest:
    """Parameters for issuing or renewing a leaf certificate.

    `password` protects the new private key; `ca_password` unlocks the CA key
    for signing.
    """

    name: str
    common_name: str | None = None
    password: str | None = None
    ca_password: str | None = None


@dataclass(frozen=True)
class RevokeRequest:
    """Parameters for revoking an issued certificate."""

    name: str
    reason: str
    ca_password: str | None = None


@dataclass(frozen=True)
class InvocationOutcome:
    """Captured result of one easyrsa invocation."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0
