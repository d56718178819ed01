"""Remote command execution over SSH."""

from __future__ import annotations

import os
from typing import Any, Protocol

import paramiko
from loguru import logger

from hostbot.config.model import Host, PasswordAuth
from hostbot.core.types import Invocation
from hostbot.errors import ExecutionError


class Executor(Protocol):
    def run(self, invocation: Invocation) -> str:
        """Run the invocation and return its combined output."""
        ...


def connect_kwargs(host: Host, timeout: float) -> dict[str, Any]:
    """Build :meth:`paramiko.SSHClient.connect` arguments for ``host``."""

    auth = host.auth
    kwargs: dict[str, Any] = {
        "hostname": host.address,
        "port": host.port,
        "username": auth.username,
        "timeout": timeout or None,
        "allow_agent": False,
        "look_for_keys": False,
    }
    if isinstance(auth, PasswordAuth):
        kwargs["password"] = auth.password
    else:
        kwargs["key_filename"] = os.path.expanduser(auth.private_key_path)
        kwargs["passphrase"] = auth.passphrase or None
    return kwargs


class SSHExecutor:
    """Run one command per connection and capture stdout and stderr together."""

    def __init__(self, client_factory: type[paramiko.SSHClient] = paramiko.SSHClient) -> None:
        self._client_factory = client_factory

    def run(self, invocation: Invocation) -> str:
        host = invocation.host
        timeout = invocation.command.timeout
        addr = f"{host.address}:{host.port}"
        logger.info("ssh.execute cmd={!r} host={}", invocation.raw_command, addr)

        with self._client_factory() as client:
            # Unknown host keys are accepted.
            client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
            try:
                client.connect(**connect_kwargs(host, timeout))
            except (paramiko.SSHException, OSError) as exc:
                raise ExecutionError(f"error opening ssh connection to {addr}: {exc}") from exc

            try:
                output, status = self._exec(client, invocation.raw_command, timeout)
            except (paramiko.SSHException, OSError) as exc:
                raise ExecutionError(f"error calling ssh command: {exc}") from exc

        if status != 0:
            raise ExecutionError(f"error calling ssh command: exit status {status}, out: {output}")
        logger.info("ssh.done host={} chars={}", addr, len(output))
        return output

    @staticmethod
    def _exec(client: paramiko.SSHClient, command: str, timeout: float) -> tuple[str, int]:
        transport = client.get_transport()
        if transport is None:
            raise paramiko.SSHException("transport is not open")
        channel = transport.open_session(timeout=timeout or None)
        with channel:
            channel.set_combined_stderr(True)
            channel.settimeout(timeout or None)
            channel.exec_command(command)
            with channel.makefile("rb") as stream:
                data = stream.read()
            status = channel.recv_exit_status()
        return data.decode("utf-8", errors="replace"), status
