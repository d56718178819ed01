"""Telegram channel adapter."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, ClassVar

from loguru import logger
from telegram import Message, Update
from telegram.constants import ParseMode
from telegram.error import BadRequest
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from hostbot.core.chunker import chunk_output
from hostbot.dispatcher import Dispatcher

BOT_PREFIX = "/bot "
MAX_MESSAGE_LENGTH = 4096


def strip_mention(text: str, bot_username: str) -> str | None:
    """Return the action after a leading ``@bot`` mention or ``/bot`` prefix."""

    if text.startswith(BOT_PREFIX):
        return text[len(BOT_PREFIX) :]
    if bot_username:
        mention = f"@{bot_username}"
        if text[: len(mention)].lower() == mention.lower():
            return text[len(mention) :]
    return None


class HostbotMessageFilter(filters.MessageFilter):
    GROUP_CHAT_TYPES: ClassVar[set[str]] = {"group", "supergroup"}

    def filter(self, message: Message) -> bool | dict[str, list[Any]] | None:
        text = message.text
        if not text:
            return False

        # Private chat: plain text and the /bot prefix are actions, other slash commands are not.
        if message.chat.type == "private":
            return text.startswith(BOT_PREFIX) or not filters.COMMAND.filter(message)

        # Group chat: only messages addressed to the bot.
        if message.chat.type in self.GROUP_CHAT_TYPES:
            bot_username = message.get_bot().username or ""
            return strip_mention(text, bot_username) is not None

        return False


@dataclass(frozen=True)
class TelegramConfig:
    """Telegram adapter config."""

    token: str


class TelegramChannel:
    """Telegram adapter using long polling mode."""

    name = "telegram"

    def __init__(self, dispatcher: Dispatcher, config: TelegramConfig) -> None:
        self._dispatcher = dispatcher
        self._config = config
        self._app: Application | None = None
        self._running = False
        self._bot_username = ""

    async def start(self) -> None:
        if not self._config.token:
            raise RuntimeError("telegram token is empty")
        logger.info("telegram.channel.start groups={}", len(self._dispatcher.config.groups))
        self._running = True
        self._app = Application.builder().token(self._config.token).build()
        self._app.add_handler(CommandHandler("start", self._on_start))
        self._app.add_handler(CommandHandler("help", self._on_help))
        self._app.add_handler(MessageHandler(HostbotMessageFilter(), self._on_text, block=False))
        await self._app.initialize()
        self._bot_username = self._app.bot.username or ""
        await self._app.start()
        updater = self._app.updater
        if updater is None:
            return
        await updater.start_polling(drop_pending_updates=True, allowed_updates=["message"])
        logger.info("telegram.channel.polling username={}", self._bot_username)
        while self._running:
            await asyncio.sleep(0.5)

    async def stop(self) -> None:
        self._running = False
        if self._app is None:
            return
        updater = self._app.updater
        if updater is not None:
            await updater.stop()
        await self._app.stop()
        await self._app.shutdown()
        self._app = None
        logger.info("telegram.channel.stopped")

    async def send(self, chat_id: str, text: str) -> None:
        if self._app is None:
            return
        for part in chunk_output(text, MAX_MESSAGE_LENGTH, 0):
            await self._send_part(chat_id, part)

    async def _send_part(self, chat_id: str, text: str) -> None:
        bot = _required_app(self._app).bot
        try:
            await bot.send_message(chat_id=int(chat_id), text=text, parse_mode=ParseMode.MARKDOWN)
            return
        except BadRequest as exc:
            logger.warning("telegram.channel.markdown_rejected chat_id={} error={}", chat_id, exc)
        try:
            await bot.send_message(chat_id=int(chat_id), text=text)
        except BadRequest:
            logger.exception("telegram.channel.send.error chat_id={} chars={}", chat_id, len(text))

    async def _on_start(self, update: Update, _context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None:
            return
        await update.message.reply_text("hostbot is online. Send `help` to list command groups.")

    async def _on_help(self, update: Update, _context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None or update.effective_user is None:
            return
        await self._dispatch(str(update.message.chat_id), str(update.effective_user.id), "help")

    async def _on_text(self, update: Update, _context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None or update.effective_user is None:
            return
        user = update.effective_user
        chat_id = str(update.message.chat_id)
        text = update.message.text or ""
        action = strip_mention(text, self._bot_username)
        if action is None:
            action = text

        logger.info(
            "telegram.channel.inbound chat_id={} sender_id={} username={} content={}",
            chat_id,
            user.id,
            user.username or "",
            action[:100],
        )
        await self._dispatch(chat_id, str(user.id), action)

    async def _dispatch(self, chat_id: str, sender_id: str, action: str) -> None:
        # Dispatch blocks on the SSH session, keep it off the event loop.
        messages = await asyncio.to_thread(self._dispatcher.handle, action, sender_id=sender_id, chat_id=chat_id)
        for message in messages:
            await self.send(chat_id, message)


def _required_app(app: Application | None) -> Application:
    if app is None:
        raise RuntimeError("telegram application is not started")
    return app
