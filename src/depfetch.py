"""depfetch: fetch npm packages into a project and verify the installation."""

import asyncio
import logging
import sys

from args import parse_args
from cli_config import apply_cli_overrides, apply_config, apply_env_overrides, load_config
from common.errors import FetchError
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from fetch import FetchOptions, fetch, is_package_manager_available, uninstall

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure logging, adding a file handler when --logfile is given."""
    configure_logging(getattr(args, "LOG_LEVEL", None))
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


async def run_action(args) -> int:
    """Run the selected action and return the process exit code."""
    if args.action == "fetch":
        opts = FetchOptions(save=args.SAVE, save_exact=args.SAVE_EXACT)
        path = await fetch(args.TARGET, args.DEST, opts)
        print(path)
    elif args.action == "uninstall":
        await uninstall(args.TARGET, args.DEST, FetchOptions(save=args.SAVE))
        logger.info("Removed %s from %s", args.TARGET, args.DEST)
    elif args.action == "check":
        try:
            print(await is_package_manager_available())
        except Exception as e:  # pylint: disable=broad-exception-caught
            raise FetchError.wrap(e) from e
    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)

    apply_config(load_config(getattr(args, "CONFIG", None)))
    apply_env_overrides()
    apply_cli_overrides(args)
    _setup_logging(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action),
        )

    try:
        code = asyncio.run(run_action(args))
    except FetchError as e:
        logger.error("%s failed (%s): %s", args.action, e.kind, e)
        code = ExitCodes.FAILURE.value
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
