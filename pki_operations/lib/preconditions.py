"""Local checks run before an operation that needs the CA private key."""

from pathlib import Path

from .errors import CaNotFoundError, PrivateKeyIsEncryptedError

ENCRYPTED_MARKER = "ENCRYPTED"


def ca_key_path(pki: Path) -> Path:
    return pki / "private" / "ca.key"


def is_private_key_encrypted(path: Path) -> bool:
    """Return True if the PEM key at `path` is passphrase protected.

    Raises:
        CaNotFoundError: If the key file does not exist
        OSError: For any other read failure
    """
    try:
        data = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError as e:
        raise CaNotFoundError(f"CA private key not found: {path}") from e
    return ENCRYPTED_MARKER in data


def ensure_ca_unlockable(pki: Path, ca_password: str | None) -> None:
    """Fail fast when the CA key needs a password and none was given.

    With a password the check is skipped and easyrsa reports any problem
    itself (missing PKI, wrong password...).

    Raises:
        CaNotFoundError: If no CA key exists in the key-store
        PrivateKeyIsEncryptedError: If the CA key is encrypted and no password was given
    """
    if ca_password:
        return
    if is_private_key_encrypted(ca_key_path(pki)):
        raise PrivateKeyIsEncryptedError("CA is encrypted")
