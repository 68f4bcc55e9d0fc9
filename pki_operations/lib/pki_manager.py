"""PKI manager orchestrating easyrsa lifecycle operations."""

import asyncio
from collections.abc import Coroutine
from pathlib import Path
from typing import Any

from .classifier import classify
from .commands import (
    build_ca_command,
    gen_crl_command,
    gen_req_command,
    init_pki_command,
    renew_commands,
    revoke_command,
    sign_req_command,
)
from .config import PKIConfig, resolve_config
from .logging_config import LOGGER
from .models import CertificateRequest, CertificateType, RevokeRequest
from .preconditions import ensure_ca_unlockable
from .runner import EasyRSARunner
from .vars_file import write_vars_file


class PKIManager:
    """Drives one easyrsa key-store through its lifecycle.

    Every operation returns easyrsa's stdout on success and raises an
    EasyRSAError subclass on failure. Operations that need several easyrsa
    calls run them strictly in order and stop at the first failure; whatever
    easyrsa already wrote to the key-store is left in place.

    Not safe for concurrent use against the same key-store.
    """

    def __init__(self, config: PKIConfig | None = None, **options: Any) -> None:
        """Resolve options and write the easyrsa vars file.

        Args:
            config: Pre-built configuration; when omitted, `options` are resolved with resolve_config
            **options: PKIConfig fields (pki, days, cert_days, digest, algo, key_size, curve...)

        Raises:
            InvalidConfigurationError: If digest, curve or algo is not allowed
            OSError: If the vars file cannot be written
        """
        self.config = config if config is not None else resolve_config(**options)
        self.runner = EasyRSARunner(self.config)
        self._background_tasks: set[asyncio.Task[None]] = set()
        write_vars_file(self.config)

    @property
    def pki_dir(self) -> Path:
        return Path(self.config.pki)

    async def _pipeline(self, *commands: str) -> list[str]:
        """Run commands in order, raising the classified error of the first failure.

        Returns:
            stdout of each command, in order
        """
        outputs: list[str] = []
        for args in commands:
            outcome = await self.runner.run(args)
            if not outcome.ok:
                raise classify(outcome)
            outputs.append(outcome.stdout)
        return outputs

    def _detach(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def wait_background_tasks(self) -> None:
        """Wait for detached side tasks started by earlier operations."""
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks)

    async def _generate_tls_auth_key(self) -> None:
        """Generate the OpenVPN shared secret <pki>/ta.key. Failures are only logged."""
        ta_key = self.pki_dir / "ta.key"
        try:
            proc = await asyncio.create_subprocess_exec(
                "openvpn",
                "--genkey",
                "--secret",
                str(ta_key),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            _stdout, stderr = await proc.communicate()
        except OSError as e:
            LOGGER.warning("Could not generate ta.key: %s", e)
            return

        if proc.returncode != 0:
            LOGGER.warning(
                "Could not generate ta.key (exit %s): %s",
                proc.returncode,
                stderr.decode("utf-8", errors="replace").strip(),
            )
            return
        LOGGER.info("Generated shared secret: %s", ta_key)

    async def init_pki(self, force: bool = True) -> str:
        """Initialize the key-store; `force` wipes an existing one.

        Also starts generation of the OpenVPN ta.key in the background. That
        step never affects the result of this call.
        """
        LOGGER.info("Initializing PKI at %s (force=%s)", self.pki_dir, force)
        [output] = await self._pipeline(init_pki_command(force))
        self._detach(self._generate_tls_auth_key())
        return output

    async def build_ca(self, common_name: str | None = None, password: str | None = None) -> str:
        """Build the CA. With a password, the CA key is encrypted with it.

        Raises:
            PkiDirNotFoundError: If the key-store was never initialized
            CaAlreadyExistsError: If a CA already exists
        """
        LOGGER.info("Building CA in %s (encrypted=%s)", self.pki_dir, bool(password))
        [output] = await self._pipeline(build_ca_command(common_name, password))
        return output

    async def _create_cert(self, cert_type: CertificateType, request: CertificateRequest) -> str:
        ensure_ca_unlockable(self.pki_dir, request.ca_password)

        LOGGER.info("Issuing %s certificate: %s", cert_type, request.name)
        outputs = await self._pipeline(
            gen_req_command(request),
            sign_req_command(cert_type, request),
        )
        return outputs[-1]

    async def create_server(
        self,
        name: str,
        common_name: str | None = None,
        password: str | None = None,
        ca_password: str | None = None,
    ) -> str:
        """Issue a server certificate and key named `name`.

        Raises:
            CaNotFoundError: If no CA exists
            PrivateKeyIsEncryptedError: If the CA key is encrypted and ca_password is missing
            BadCaPasswordError: If ca_password does not unlock the CA key
            CertificateAlreadyExistsError: If `name` is already issued
        """
        request = CertificateRequest(name, common_name, password, ca_password)
        return await self._create_cert("server", request)

    async def create_client(
        self,
        name: str,
        common_name: str | None = None,
        password: str | None = None,
        ca_password: str | None = None,
    ) -> str:
        """Issue a client certificate and key named `name`. Raises as create_server."""
        request = CertificateRequest(name, common_name, password, ca_password)
        return await self._create_cert("client", request)

    async def revoke(self, name: str, reason: str, ca_password: str | None = None) -> str:
        """Revoke certificate `name` for `reason` (one of config.REVOKE_REASONS).

        Raises:
            InvalidConfigurationError: If reason is not a known revocation reason
            CertificateNotFoundError: If no certificate named `name` exists
        """
        request = RevokeRequest(name, reason, ca_password)
        args = revoke_command(request)
        ensure_ca_unlockable(self.pki_dir, ca_password)

        LOGGER.info("Revoking certificate %s (reason=%s)", name, reason)
        [output] = await self._pipeline(args)
        return output

    async def renew(
        self,
        name: str,
        common_name: str | None = None,
        password: str | None = None,
        ca_password: str | None = None,
    ) -> str:
        """Renew certificate `name` and revoke the version it replaces.

        Returns:
            stdout of the renew step
        """
        request = CertificateRequest(name, common_name, password, ca_password)
        ensure_ca_unlockable(self.pki_dir, ca_password)

        LOGGER.info("Renewing certificate %s", name)
        renewed, _revoked = await self._pipeline(*renew_commands(request))
        return renewed

    async def gen_crl(self, ca_password: str | None = None) -> str:
        """Generate or refresh the certificate revocation list."""
        ensure_ca_unlockable(self.pki_dir, ca_password)

        LOGGER.info("Generating CRL for %s", self.pki_dir)
        [output] = await self._pipeline(gen_crl_command(ca_password))
        return output
