"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FAILURE = 1


class PersistenceFlags(Enum):
    """npm flags controlling whether the project manifest is updated.

    Args:
        Enum (string): Flags passed through to npm.
    """

    SAVE_EXACT = "--save-exact"
    SAVE = "--save-dev"
    NO_SAVE = "--no-save"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    NPM_COMMAND = "npm"
    INSTALL_VERB = "install"
    UNINSTALL_VERB = "uninstall"
    NODE_MODULES_DIR = "node_modules"
    PACKAGE_JSON_FILE = "package.json"
    NODE_PATH_ENV = "NODE_PATH"
    INSTALL_MARKER = "+ "
    OUTPUT_DIALECT = "plus"
    DEFAULT_RANGE = "*"
    LOG_LEVEL_ENV = "DEPFETCH_LOG_LEVEL"
    LOG_LEVEL = None  # from the config file; env and CLI take precedence
    NPM_COMMAND_ENV = "DEPFETCH_NPM_COMMAND"
    CONFIG_FILE = "depfetch.yml"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    # Extra dependency stores appended after NODE_PATH; set from config.
    EXTRA_SEARCH_PATHS: list = []
