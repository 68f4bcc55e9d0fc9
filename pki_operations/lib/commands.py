"""easyrsa command-line builders.

Every builder returns the argument string passed to the easyrsa entry point.
Caller-supplied text (names, common names, passwords) always goes through
escape_shell because the command runs through a shell.
"""

import re

from .config import REVOKE_REASONS
from .errors import InvalidConfigurationError
from .models import CertificateRequest, CertificateType, RevokeRequest

_SHELL_SPECIAL = re.compile(r"([\"'$`\\])")


def escape_shell(value: str) -> str:
    """Double-quote a value, backslash-escaping quotes, backticks, `$` and `\\`.

    A POSIX shell drops the backslash before `"`, `` ` ``, `$` and `\\` inside
    double quotes but keeps it before `'`, so `it's` reaches easyrsa as
    `it\\'s`. Passwords still round-trip because build_ca and every later
    `ca_password` go through the same escaping.
    """
    return '"' + _SHELL_SPECIAL.sub(r"\\\1", value) + '"'


def _join(*parts: str | None) -> str:
    return " ".join(part for part in parts if part)


def _req_cn(common_name: str | None) -> str | None:
    return f"--req-cn={escape_shell(common_name)}" if common_name else None


def _passin(password: str | None) -> str | None:
    return f"--passin=pass:{escape_shell(password)}" if password else None


def _passout(password: str | None) -> str | None:
    return f"--passout=pass:{escape_shell(password)}" if password else None


def _nopass(password: str | None) -> str | None:
    return None if password else "nopass"


def init_pki_command(force: bool = True) -> str:
    """`hard` wipes an existing key-store, `soft` keeps what it can."""
    return _join("init-pki", "hard" if force else "soft")


def build_ca_command(common_name: str | None = None, password: str | None = None) -> str:
    """Build the CA; with a password the CA key is encrypted with it."""
    return _join(
        _req_cn(common_name),
        _passin(password),
        _passout(password),
        "build-ca",
        _nopass(password),
    )


def gen_req_command(request: CertificateRequest) -> str:
    return _join(
        _req_cn(request.common_name),
        _passout(request.password),
        "gen-req",
        escape_shell(request.name),
        _nopass(request.password),
    )


def sign_req_command(cert_type: CertificateType, request: CertificateRequest) -> str:
    return _join(
        _passin(request.ca_password),
        "sign-req",
        cert_type,
        escape_shell(request.name),
    )


def revoke_command(request: RevokeRequest) -> str:
    """Build a revoke command.

    Raises:
        InvalidConfigurationError: If the reason is not a known revocation reason
    """
    if request.reason not in REVOKE_REASONS:
        raise InvalidConfigurationError(f"reason is not valid: {request.reason!r}")
    return _join(
        _passin(request.ca_password),
        "revoke",
        escape_shell(request.name),
        request.reason,
    )


def renew_commands(request: CertificateRequest) -> tuple[str, str]:
    """Build the renew command and the revoke-renewed command that must follow it.

    Returns:
        Tuple of (renew, revoke_renewed) argument strings, to run in that order
    """
    renew = _join(
        _req_cn(request.common_name),
        _passin(request.ca_password),
        _passout(request.password),
        "renew",
        escape_shell(request.name),
        _nopass(request.password),
    )
    revoke_renewed = _join(
        _passin(request.ca_password),
        _passout(request.password),
        "revoke-renewed",
        escape_shell(request.name),
    )
    return renew, revoke_renewed


def gen_crl_command(ca_password: str | None = None) -> str:
    return _join(_passin(ca_password), "gen-crl")
