import logging


def pytest_configure(config):
    """Disable the loggers."""
    # Debug logs clobber output on CI
    for name in ["groupassign"]:
        logger = logging.getLogger(name)
        logger.setLevel(logging.INFO)
