"""Run the easyrsa entry point as a subprocess and capture its output."""

import asyncio
import os

from .commands import escape_shell
from .config import PKIConfig
from .logging_config import LOGGER, redact_passwords
from .models import InvocationOutcome


class EasyRSARunner:
    """Invokes easyrsa for a single key-store.

    EASYRSA_PKI and EASYRSA_VARS_FILE are passed per invocation, so runners for
    different key-stores can share a process and an easyrsa install.
    """

    def __init__(self, config: PKIConfig) -> None:
        self.config = config

    def _env(self) -> dict[str, str]:
        return {
            **os.environ,
            "EASYRSA_PKI": str(self.config.pki),
            "EASYRSA_VARS_FILE": str(self.config.vars_file),
        }

    async def run(self, args: str) -> InvocationOutcome:
        """Run `easyrsa <args>` to completion.

        `args` must already be shell-escaped (see commands.escape_shell): it is
        handed to the shell verbatim.

        Args:
            args: easyrsa argument string

        Returns:
            InvocationOutcome with the full stdout, stderr and exit code
        """
        command = f"{escape_shell(str(self.config.easyrsa_bin))} {args}"
        LOGGER.debug("Running easyrsa %s", redact_passwords(args))

        proc = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(self.config.easyrsa_dir),
            env=self._env(),
        )
        stdout, stderr = await proc.communicate()

        outcome = InvocationOutcome(
            stdout=stdout.decode("utf-8", errors="replace") if stdout else "",
            stderr=stderr.decode("utf-8", errors="replace") if stderr else "",
            returncode=proc.returncode if proc.returncode is not None else -1,
        )
        if not outcome.ok:
            LOGGER.debug("easyrsa exited with code %d", outcome.returncode)
        return outcome
