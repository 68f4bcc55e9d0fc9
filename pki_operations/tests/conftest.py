"""Test fixtures for pki_operations tests."""

import stat
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from pki_operations.lib.config import PKIConfig
from pki_operations.lib.pki_manager import PKIManager

# Stand-in for the easyrsa entry point. Each call N records its arguments
# (NUL separated) and EASYRSA_* environment, then replays response-N.* files.
STUB_EASYRSA = """#!/bin/sh
dir="$(cd "$(dirname "$0")" && pwd)"
n=$(( $(cat "$dir/.count" 2>/dev/null || echo 0) + 1 ))
echo "$n" > "$dir/.count"
for arg in "$@"; do printf '%s\\0' "$arg"; done > "$dir/call-$n.args"
env | grep '^EASYRSA_' | sort > "$dir/call-$n.env"
pwd > "$dir/call-$n.cwd"
[ -f "$dir/response-$n.stdout" ] && cat "$dir/response-$n.stdout"
[ -f "$dir/response-$n.stderr" ] && cat "$dir/response-$n.stderr" >&2
if [ -f "$dir/response-$n.code" ]; then exit "$(cat "$dir/response-$n.code")"; fi
exit 0
"""


class StubEasyRSA:
    """Handle on a stub easyrsa install living in a temporary directory."""

    def __init__(self, directory: Path) -> None:
        self.dir = directory
        self.dir.mkdir(parents=True, exist_ok=True)
        script = self.dir / "easyrsa"
        script.write_text(STUB_EASYRSA)
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    def respond(self, call: int, stdout: str = "", stderr: str = "", code: int = 0) -> None:
        """Set what the `call`-th invocation (1-based) prints and returns."""
        (self.dir / f"response-{call}.stdout").write_text(stdout, encoding="utf-8")
        (self.dir / f"response-{call}.stderr").write_text(stderr, encoding="utf-8")
        (self.dir / f"response-{call}.code").write_text(str(code))

    @property
    def call_count(self) -> int:
        count_file = self.dir / ".count"
        return int(count_file.read_text()) if count_file.exists() else 0

    def args(self, call: int) -> list[str]:
        raw = (self.dir / f"call-{call}.args").read_bytes().decode()
        return raw.split("\0")[:-1]

    def env(self, call: int) -> dict[str, str]:
        lines = (self.dir / f"call-{call}.env").read_text().splitlines()
        return dict(line.split("=", 1) for line in lines)

    def cwd(self, call: int) -> Path:
        return Path((self.dir / f"call-{call}.cwd").read_text().strip())


@pytest.fixture
def stub_easyrsa(tmp_path: Path) -> StubEasyRSA:
    """Return a stub easyrsa install under tmp_path/easyrsa."""
    return StubEasyRSA(tmp_path / "easyrsa")


@pytest.fixture
def pki_config(tmp_path: Path, stub_easyrsa: StubEasyRSA) -> PKIConfig:
    """Return config pointing at the stub easyrsa and tmp_path/pki."""
    return PKIConfig(easyrsa_dir=stub_easyrsa.dir, pki=tmp_path / "pki", key_size=1024)


@pytest.fixture
def manager(pki_config: PKIConfig) -> PKIManager:
    """Return PKI manager driving the stub easyrsa."""
    return PKIManager(pki_config)


def _private_key_pem(password: bytes | None) -> bytes:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    encryption = (
        serialization.BestAvailableEncryption(password)
        if password
        else serialization.NoEncryption()
    )
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=encryption,
    )


@pytest.fixture(scope="session")
def plain_key_pem() -> bytes:
    """Return unencrypted PKCS8 private key PEM."""
    return _private_key_pem(None)


@pytest.fixture(scope="session")
def encrypted_key_pem() -> bytes:
    """Return passphrase-protected PKCS8 private key PEM."""
    return _private_key_pem(b"Testing")


@pytest.fixture
def plain_ca(pki_config: PKIConfig, plain_key_pem: bytes) -> Path:
    """Write an unencrypted CA key into the PKI and return its path."""
    key_path = Path(pki_config.pki) / "private" / "ca.key"
    key_path.parent.mkdir(parents=True, exist_ok=True)
    key_path.write_bytes(plain_key_pem)
    return key_path


@pytest.fixture
def encrypted_ca(pki_config: PKIConfig, encrypted_key_pem: bytes) -> Path:
    """Write an encrypted CA key into the PKI and return its path."""
    key_path = Path(pki_config.pki) / "private" / "ca.key"
    key_path.parent.mkdir(parents=True, exist_ok=True)
    key_path.write_bytes(encrypted_key_pem)
    return key_path
