"""Package logger with an on/off switch for per-instruction tracing."""

import logging

logger = logging.getLogger("chip8")

#make it true if you want the logs
logs_on = False


def log(msg, *args):
    # formatted by logging, only when the logs are on
    if logs_on:
        logger.debug(msg, *args)


def set_logs(on):
    global logs_on
    logs_on = bool(on)
    if logs_on and logger.getEffectiveLevel() > logging.DEBUG:
        logger.setLevel(logging.DEBUG)


def toggle_logs():
    set_logs(not logs_on)
    logger.info("logs on: %s", logs_on)
    return logs_on
