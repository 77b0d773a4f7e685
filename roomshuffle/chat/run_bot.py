import asyncio

from roomshuffle.config.logging import setup_logging
from roomshuffle.config.settings import settings
from roomshuffle.chat.bot import start_bot


def main():
    setup_logging(settings.LOG_LEVEL)
    asyncio.run(start_bot())


if __name__ == "__main__":
    main()
