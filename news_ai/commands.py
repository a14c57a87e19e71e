from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Awaitable, Callable, Mapping, Optional, Tuple

from .core import CATEGORY_QUERIES, DEFAULT_QUERY, NewsAggregator
from .formatting import format_news_result


logger = logging.getLogger(__name__)

COMMAND_PREFIX = "!"

HELP_TEXT = (
    "📋 Available Commands:\n\n"
    "!start - Welcome message and bot introduction\n"
    "!hello - Get a personalized greeting\n"
    "!news [topic] - Latest news, optionally about a topic\n"
    "!category <name> - Latest news in a category\n"
    "!help - Show this help message\n\n"
    f"Categories: {', '.join(CATEGORY_QUERIES)}"
)


@dataclass(frozen=True)
class CommandContext:
    aggregator: NewsAggregator
    user_name: str
    limit: int
    args: str = ""


Handler = Callable[[CommandContext], Awaitable[str]]


async def _start(ctx: CommandContext) -> str:
    return f"🤖 Hello {ctx.user_name}!\n\nWelcome to the News AI Bot!\n\n{HELP_TEXT}"


async def _hello(ctx: CommandContext) -> str:
    return f"Hello {ctx.user_name}! 👋 How can I help you today?"


async def _help(ctx: CommandContext) -> str:
    return HELP_TEXT


async def _news(ctx: CommandContext) -> str:
    query = ctx.args or DEFAULT_QUERY
    result = await ctx.aggregator.fetch(query, ctx.limit)
    return format_news_result(result)


async def _category(ctx: CommandContext) -> str:
    if not ctx.args:
        return f"Usage: !category <name>\nCategories: {', '.join(CATEGORY_QUERIES)}"
    result = await ctx.aggregator.fetch_by_category(ctx.args, ctx.limit)
    return format_news_result(result, header=f"📰 Latest {ctx.args.lower()} news")


COMMANDS: Mapping[str, Handler] = MappingProxyType({
    "start": _start,
    "hello": _hello,
    "help": _help,
    "news": _news,
    "category": _category,
})

# Commands that reach out to news providers and may take a while.
SLOW_COMMANDS = frozenset({"news", "category"})


def parse_command(text: str) -> Optional[Tuple[str, str]]:
    """Split "!name rest of line" into ("name", "rest of line"); None for plain chat."""
    text = (text or "").strip()
    if not text.startswith(COMMAND_PREFIX):
        return None
    parts = text[len(COMMAND_PREFIX):].split(maxsplit=1)
    if not parts:
        return None
    name = parts[0].lower()
    args = parts[1].strip() if len(parts) > 1 else ""
    return name, args


async def handle_message(
    text: str,
    aggregator: NewsAggregator,
    *,
    user_name: Optional[str] = None,
    limit: int = 5,
) -> Optional[str]:
    """Dispatch a chat message to its command handler and return the reply, if any."""
    parsed = parse_command(text)
    if parsed is None:
        return None
    name, args = parsed
    handler = COMMANDS.get(name)
    if handler is None:
        return f"Unknown command {COMMAND_PREFIX}{name}. Try !help to see what I can do."
    logger.info("Handling %s%s (args=%r)", COMMAND_PREFIX, name, args)
    ctx = CommandContext(aggregator=aggregator, user_name=user_name or "there", limit=limit, args=args)
    return await handler(ctx)
