"""
Entry point for the chat-cmdlib Discord client.
"""

import asyncio
import logging
import sys

from chat_cmdlib.bot.client import run_client
from chat_cmdlib.bot.config import config
from chat_cmdlib.utils.logger import get_logger, set_default_level

logger = get_logger("Main")


def main():
    """Main entry point."""
    if config.DEBUG:
        set_default_level(logging.DEBUG)

    try:
        logger.info("Starting command client...")
        asyncio.run(run_client(config))
    except KeyboardInterrupt:
        logger.info("Client stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
