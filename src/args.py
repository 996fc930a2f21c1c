"""Argument parsing for the naming-router diagnostic CLI."""

import argparse


def build_parser():
    """Builds the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="naming-router",
        description=(
            "naming-router - inspect how names are split and routed to providers"
        ),
        add_help=True,
    )

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--set",
                        dest="PROPERTY_SET",
                        help="Set an environment property (KEY=VALUE format, can be used multiple times)",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    subparsers = parser.add_subparsers(dest="COMMAND", required=True)

    split_parser = subparsers.add_parser("split",
                                         help="Show the URL scheme and residual name of NAME")
    split_parser.add_argument("NAME", help="Name to split, e.g. ejb:app/module/bean")

    subparsers.add_parser("endpoints",
                          help="Show the provider URIs derived from the configuration")
    subparsers.add_parser("plugins",
                          help="List discovered provider and context plugins")

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
