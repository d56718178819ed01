from __future__ import annotations

import io
import os

import paramiko
import pytest

from hostbot.config import Config
from hostbot.core import Invocation, resolve_action
from hostbot.errors import ExecutionError
from hostbot.remote import SSHExecutor, connect_kwargs


class FakeChannel:
    def __init__(self, output: bytes, status: int) -> None:
        self.output = output
        self.status = status
        self.combined = False
        self.timeout: float | None = None
        self.command: str | None = None

    def __enter__(self) -> FakeChannel:
        return self

    def __exit__(self, *exc: object) -> None:
        return None

    def set_combined_stderr(self, combine: bool) -> None:
        self.combined = combine

    def settimeout(self, timeout: float | None) -> None:
        self.timeout = timeout

    def exec_command(self, command: str) -> None:
        self.command = command

    def makefile(self, mode: str) -> io.BytesIO:
        assert mode == "rb"
        return io.BytesIO(self.output)

    def recv_exit_status(self) -> int:
        return self.status


class FakeTransport:
    def __init__(self, channel: FakeChannel) -> None:
        self.channel = channel

    def open_session(self, timeout: float | None = None) -> FakeChannel:
        return self.channel


def _client_factory(channel: FakeChannel, *, connect_error: Exception | None = None) -> type:
    class FakeClient:
        instances: list[FakeClient] = []

        def __init__(self) -> None:
            self.connect_kwargs: dict[str, object] = {}
            self.closed = False
            FakeClient.instances.append(self)

        def __enter__(self) -> FakeClient:
            return self

        def __exit__(self, *exc: object) -> None:
            self.closed = True

        def set_missing_host_key_policy(self, policy: object) -> None:
            assert isinstance(policy, paramiko.AutoAddPolicy)

        def connect(self, **kwargs: object) -> None:
            self.connect_kwargs = kwargs
            if connect_error is not None:
                raise connect_error

        def get_transport(self) -> FakeTransport:
            return FakeTransport(channel)

    return FakeClient


def _invocation(config: Config, action: str) -> Invocation:
    result = resolve_action(action, config)
    assert isinstance(result, Invocation)
    return result


def test_connect_kwargs_password(config: Config) -> None:
    kwargs = connect_kwargs(config.hosts["onehost"], 30.0)
    assert kwargs["hostname"] == "onehost.example"
    assert kwargs["port"] == 22
    assert kwargs["username"] == "shmee"
    assert kwargs["password"] == "secret"
    assert kwargs["timeout"] == 30.0
    assert "key_filename" not in kwargs


def test_connect_kwargs_publickey(config: Config) -> None:
    kwargs = connect_kwargs(config.hosts["anotherhost"], 0)
    assert kwargs["key_filename"] == os.path.expanduser("~/.ssh/your_private_key")
    assert kwargs["passphrase"] == "your_passphrase"
    assert kwargs["timeout"] is None
    assert "password" not in kwargs


def test_run_returns_combined_output(config: Config) -> None:
    channel = FakeChannel("out\nerr\n".encode(), 0)
    factory = _client_factory(channel)
    output = SSHExecutor(factory).run(_invocation(config, "group1 command2 arg-name"))

    assert output == "out\nerr\n"
    assert channel.command == "raw command2 arg-value"
    assert channel.combined is True
    assert channel.timeout == 30.0
    assert factory.instances[0].closed is True


def test_run_non_zero_exit(config: Config) -> None:
    factory = _client_factory(FakeChannel(b"boom", 2))
    with pytest.raises(ExecutionError, match="exit status 2, out: boom"):
        SSHExecutor(factory).run(_invocation(config, "group1 command1"))


def test_run_connection_failure(config: Config) -> None:
    factory = _client_factory(FakeChannel(b"", 0), connect_error=paramiko.AuthenticationException("denied"))
    with pytest.raises(ExecutionError, match="error opening ssh connection to onehost.example:22"):
        SSHExecutor(factory).run(_invocation(config, "group1 command1"))
    assert factory.instances[0].closed is True
