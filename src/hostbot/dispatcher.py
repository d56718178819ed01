"""Turn one chat action into the messages to send back."""

from __future__ import annotations

from loguru import logger

from hostbot.access import check_access
from hostbot.config.model import Config
from hostbot.core.chunker import fence_output, split_output
from hostbot.core.resolver import ActionResolver
from hostbot.core.types import HelpReply, Invocation
from hostbot.errors import ExecutionError
from hostbot.remote.ssh import Executor


class Dispatcher:
    """Permission check, resolution, execution and output rendering."""

    def __init__(self, config: Config, executor: Executor) -> None:
        self.config = config
        self._resolver = ActionResolver(config)
        self._executor = executor

    def handle(self, action: str, *, sender_id: str, chat_id: str) -> list[str]:
        denied = check_access(self.config.settings, sender_id, chat_id)
        if denied is not None:
            logger.info("dispatcher.denied sender_id={} chat_id={} reason={!r}", sender_id, chat_id, denied)
            return [denied]

        resolution = self._resolver.resolve(action.strip())
        if isinstance(resolution, HelpReply):
            return [resolution.text]

        try:
            output = self._executor.run(resolution)
        except ExecutionError as exc:
            logger.warning("dispatcher.execution.error command={} error={}", resolution.command.id, exc)
            return [f"error execution action: {exc}"]
        return self.render(resolution, output)

    def render(self, invocation: Invocation, output: str) -> list[str]:
        command = invocation.command
        settings = self.config.settings
        if settings.output_mode == "single":
            return [fence_output(output, command.max_symbols_per_message)]

        result = split_output(output, command.max_symbols_per_message, command.max_messages)
        messages = list(result.chunks)
        if result.truncated:
            logger.info("dispatcher.output.truncated command={} messages={}", command.id, len(messages))
            if settings.report_truncation:
                messages.append(f"_output truncated after {len(messages)} messages_")
        return messages
