"""Argument parsing functionality for depfetch."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="depfetch",
        description=(
            "depfetch - fetch npm packages into a project and verify the installation"
        ),
        add_help=True,
    )

    parser.add_argument("--config",
                        dest="CONFIG",
                        help="Path to a YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("--npm",
                        dest="NPM_COMMAND",
                        help="Package manager executable to run (default: npm)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    sub = parser.add_subparsers(dest="action", required=True)

    fetch_p = sub.add_parser("fetch", help="Install a package and print its path")
    fetch_p.add_argument("TARGET", help="Anything npm install accepts")
    fetch_p.add_argument("DEST", help="Directory to install into")
    fetch_p.add_argument("--save",
                         dest="SAVE",
                         help="Record the dependency in the project manifest",
                         action="store_true")
    fetch_p.add_argument("--save-exact",
                         dest="SAVE_EXACT",
                         help="Record the exact installed version",
                         action="store_true")

    uninstall_p = sub.add_parser("uninstall", help="Remove an installed package")
    uninstall_p.add_argument("TARGET", help="Name of the package to remove")
    uninstall_p.add_argument("DEST", help="Directory to remove it from")
    uninstall_p.add_argument("--save",
                             dest="SAVE",
                             help="Also remove the dependency from the project manifest",
                             action="store_true")

    sub.add_parser("check", help="Print the path of the package manager executable")

    return parser.parse_args(argv)
