import asyncio
import logging
import os
import signal
import sys

from dotenv import load_dotenv

from config.config_manager import ConfigManager
from config.config_validator import ConfigValidator
from config.exceptions import ConfigError, ConfigFileNotFoundError
from core.bot_management.grid_ticker_bot import GridTickerBot
from core.services.exceptions import UnsupportedExchangeError, UnsupportedTickerStreamError
from utils.arg_parser import parse_and_validate_console_args
from utils.logging_config import setup_logging
from utils.user_prompt import confirm

logger = logging.getLogger("GridTickerBot")


async def run_bot(bot: GridTickerBot) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, bot.stop)
        except NotImplementedError:
            # Not available on Windows event loops, KeyboardInterrupt still ends the run.
            logger.debug(f"Signal handler for {sig.name} not supported on this platform.")

    await bot.run()


def main(cli_args=None) -> int:
    load_dotenv()

    try:
        args = parse_and_validate_console_args(cli_args, default_log_level=os.getenv("LOG_LEVEL", "INFO"))
    except RuntimeError as e:
        logging.error(e)
        return 1

    config_name = os.path.splitext(os.path.basename(args.config))[0]
    setup_logging(args.log_level, log_to_file=args.log_to_file, config_name=config_name)

    logger.info("<<<<<< Grid Ticker Bot >>>>>>")
    logger.info("Loading bot configuration...")

    try:
        config_manager = ConfigManager(args.config, ConfigValidator())
    except ConfigFileNotFoundError as e:
        logger.warning(e.message)
        return 1
    except ConfigError as e:
        logger.error(f"{e} Cannot continue. Fix the configuration file and run the bot again.")
        return 1

    try:
        bot = GridTickerBot(config_manager, confirm_func=None if args.yes else confirm)
    except UnsupportedExchangeError:
        return 1

    if not bot.prepare():
        return 0

    try:
        asyncio.run(run_bot(bot))
    except UnsupportedTickerStreamError:
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by the operator.")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
