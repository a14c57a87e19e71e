import logging

import discord

from news_ai import NewsAggregator, load_settings
from news_ai.commands import SLOW_COMMANDS, handle_message, parse_command
from news_ai.formatting import truncate_message
from news_ai.logger import setup_logging

logger = logging.getLogger("news_ai.discord_bot")

# Intents needed to read message text.
intents = discord.Intents.default()
intents.message_content = True

client = discord.Client(intents=intents)

settings = None
aggregator = None


@client.event
async def on_ready():
    """Called once the bot has logged in."""
    logger.info("Logged in as %s", client.user)


@client.event
async def on_message(message):
    """Called for every message the bot can see."""
    # Ignore the bot's own messages.
    if message.author == client.user:
        return

    parsed = parse_command(message.content)
    if parsed is None:
        return

    if parsed[0] in SLOW_COMMANDS:
        await message.channel.send("Fetching the latest news... one moment please.")

    try:
        reply = await handle_message(
            message.content,
            aggregator,
            user_name=message.author.display_name,
            limit=settings.default_limit,
        )
    except Exception:
        logger.exception("Failed to handle %r", message.content)
        await message.channel.send("Something went wrong while handling your request.")
        return

    if reply:
        await message.channel.send(truncate_message(reply))


def main():
    global settings, aggregator

    settings = load_settings()
    setup_logging(settings.log_level)

    token = settings.require_bot_token()
    settings.require_provider()

    aggregator = NewsAggregator(
        settings.perplexity_api_key,
        settings.news_api_key,
        perplexity_model=settings.perplexity_model,
        timeout_sec=settings.request_timeout_sec,
    )

    logger.info("Starting Discord bot")
    client.run(token, log_handler=None)


if __name__ == "__main__":
    main()
