from __future__ import annotations

from pathlib import Path

import pytest

from hostbot.config import Config, parse

SAMPLE_CONFIG = """
# hostbot test configuration

[settings]
    description = "test bot description"
    token = "123456:test-token"
    maxSymbolsPerMessage = 3000
    timeout = "30s"
    argumentsTrimCutSet = "`"

[[group]]
    id = "group1"
    description = "Group1 commands"
    hosts = ["onehost"]

    [[group.command]]
        id = "command1"
        description = "First command"
        cmdFmt = "raw command1"

    [[group.command]]
        id = "command2"
        description = "Second command"
        cmdFmt = "raw command2 %s"
        arguments = ["argument"]

    [[group.argument]]
        id = "argument"
        description = "Argument for command"

        [[group.argument.item]]
            name = "arg-name"
            value = "arg-value"

[[group]]
    id = "group2"
    description = "Group2 commands"
    hosts = ["onehost", "anotherhost"]

    [[group.command]]
        id = "no-args-cmd"
        description = "No args cmd"
        cmdFmt = "cmd-no-args"

    [[group.command]]
        id = "command-with-custom-timeout"
        description = "Command with custom timeout"
        cmdFmt = "command-with-custom-timeout"
        timeout = "2m"
        maxSymbolsPerMessage = 10
        maxMessages = 2

    [[group.command]]
        id = "with-args-cmd"
        description = "With args cmd"
        cmdFmt = "cmd-with-args %s --unit=%s"
        arguments = ["level", "unit"]

    [[group.argument]]
        id = "level"
        description = "Log level"

        [[group.argument.item]]
            name = "warn"
            value = "warning"

        [[group.argument.item]]
            name = "error"
            value = "err"

    [[group.argument]]
        id = "unit"
        description = "Unit"

        [[group.argument.item]]
            name = "nginx"
            value = "nginx.service"

[[group]]
    id = "group3"
    description = "Empty group"

    [[group.command]]
        id = "status"
        description = "Status"
        cmdFmt = "status"

[[host]]
    id = "onehost"
    address = "onehost.example"
    port = 22

    [host.auth]
        type = "password"
        username = "shmee"
        password = "secret"

[[host]]
    id = "anotherhost"
    address = "anotherhost.example"
    port = 2222

    [host.auth]
        type = "publickey"
        username = "root"
        privateKeyPath = "~/.ssh/your_private_key"
        passphrase = "your_passphrase"
"""


@pytest.fixture
def config() -> Config:
    return parse(SAMPLE_CONFIG)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "hostbot.toml"
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path
