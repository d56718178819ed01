"""Raw declarative config models, validated straight from TOML."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class _RawModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class RawSettings(_RawModel):
    """The ``[settings]`` table."""

    token: str = Field(default="", description="Chat transport token")
    description: str = Field(default="", description="Bot description shown on top of the root help")
    timeout: str = Field(default="", description="Default command timeout, e.g. '30s'")
    max_symbols_per_message: int = Field(default=0, alias="maxSymbolsPerMessage")
    max_messages: int = Field(default=0, alias="maxMessages")
    arguments_trim_cut_set: str = Field(default="", alias="argumentsTrimCutSet")
    channels: list[str] = Field(default_factory=list)
    users: list[str] = Field(default_factory=list)
    admins: list[str] = Field(default_factory=list)
    strict_references: bool = Field(default=False, alias="strictReferences")
    report_truncation: bool = Field(default=False, alias="reportTruncation")
    output_mode: Literal["chunks", "single"] = Field(default="chunks", alias="outputMode")


class RawPasswordAuth(_RawModel):
    type: Literal["password"]
    username: str = ""
    password: str = ""


class RawPublicKeyAuth(_RawModel):
    type: Literal["publickey"]
    username: str = ""
    private_key_path: str = Field(default="", alias="privateKeyPath")
    passphrase: str = ""


RawAuth = Annotated[RawPasswordAuth | RawPublicKeyAuth, Field(discriminator="type")]


class RawHost(_RawModel):
    id: str
    address: str
    port: int = 22
    auth: RawAuth


class RawItem(_RawModel):
    name: str
    value: str = ""


class RawArgument(_RawModel):
    id: str
    description: str = ""
    items: list[RawItem] = Field(default_factory=list, alias="item")


class RawCommand(_RawModel):
    id: str
    description: str = ""
    format: str = Field(default="", alias="cmdFmt")
    arguments: list[str] = Field(default_factory=list)
    timeout: str = ""
    max_symbols_per_message: int = Field(default=0, alias="maxSymbolsPerMessage")
    max_messages: int = Field(default=0, alias="maxMessages")


class RawGroup(_RawModel):
    id: str
    description: str = ""
    hosts: list[str] = Field(default_factory=list)
    commands: list[RawCommand] = Field(default_factory=list, alias="command")
    arguments: list[RawArgument] = Field(default_factory=list, alias="argument")


class RawConfig(_RawModel):
    """Root of the declarative source."""

    settings: RawSettings = Field(default_factory=RawSettings)
    hosts: list[RawHost] = Field(default_factory=list, alias="host")
    groups: list[RawGroup] = Field(default_factory=list, alias="group")
