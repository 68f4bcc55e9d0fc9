"""Typed errors raised by PKI lifecycle operations."""


class EasyRSAError(Exception):
    """Base class for every error surfaced by the PKI manager."""

    default_message = "easyrsa operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidConfigurationError(EasyRSAError, ValueError):
    """Option or argument outside its allowed set (digest, curve, reason...)."""

    default_message = "invalid configuration"


class CaAlreadyExistsError(EasyRSAError):
    default_message = "CA already exists"


class PkiDirNotFoundError(EasyRSAError):
    default_message = "PKI directory not found, run init_pki first"


class CaNotFoundError(EasyRSAError):
    default_message = "CA not found"


class CertificateAlreadyExistsError(EasyRSAError):
    default_message = "certificate already exists"


class CertificateNotFoundError(EasyRSAError):
    default_message = "certificate not found"


class BadCaPasswordError(EasyRSAError):
    default_message = "wrong CA password"


class PrivateKeyIsEncryptedError(EasyRSAError):
    default_message = "CA private key is encrypted, a CA password is required"


class EasyRSACommandError(EasyRSAError):
    """Unrecognised easyrsa failure.

    The message is the raw stderr of the failing invocation; stdout and the
    exit code are kept as attributes for diagnostics.
    """

    default_message = "easyrsa exited with an error"

    def __init__(self, stderr: str, stdout: str = "", returncode: int | None = None) -> None:
        super().__init__(stderr.strip() or None)
        self.stderr = stderr
        self.stdout = stdout
        self.returncode = returncode
