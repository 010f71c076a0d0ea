"""
Beatcut - Entry point for python -m beatcut
"""

if __name__ == "__main__":
    import sys
    import signal
    import logging

    # Default SIGPIPE behavior (terminate) so writes to closed pipes don't
    # raise expensive exceptions later on.
    try:
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)
    except (AttributeError, ValueError):
        # Not all platforms support SIGPIPE (e.g., Windows)
        pass

    logging.raiseExceptions = False

    try:
        from beatcut.cli import cli
        cli()
    except BrokenPipeError:
        sys.exit(0)
