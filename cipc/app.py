"""The library's command entry point."""

import argparse
import sys

GREETING = "Hello, world!"


def _parser():
    return argparse.ArgumentParser(
        prog="cipc",
        description="Inter-process communication over ZeroMQ or plain TCP.",
    )


def main(argv=None):
    """Parse the command line, print a greeting and return the exit status."""
    _parser().parse_args(sys.argv[1:] if argv is None else argv)
    sys.stdout.write(GREETING + "\n")
    sys.stdout.flush()
    return 0