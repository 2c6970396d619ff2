# logger_setup.py

import datetime
import json
import logging
import os

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(module)s: %(message)s"


def _resolve_run_id(run_id):
    """A missing or "auto" run id becomes a timestamp so each show gets its own log."""
    if run_id in (None, "", "auto"):
        return datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    return str(run_id)


def setup_logging(config_path='config.json', level=None, runs_dir='runs'):
    """
    Sets up the "fireworks" logger for a display session.

    The logger writes to the console and to <runs_dir>/<run_id>/display.log and
    does not propagate, so pygame and Numba records never reach the run log.

    Data Contract:
    - Inputs:
        - config_path (str): JSON file with an optional 'run_id' and an optional
          'logging' section holding 'level' and 'format'.
        - level (str | int, optional): overrides the configured level.
        - runs_dir (str): parent directory of the per-run log folders.
    - Outputs: the configured logger.
    - Side Effects: creates the run directory and opens display.log in it.
      Handlers from a previous call are closed and replaced.
    """
    with open(config_path, 'r') as f:
        config = json.load(f)

    run_id = _resolve_run_id(config.get('run_id'))
    log_config = config.get('logging', {})

    logger = logging.getLogger("fireworks")
    logger.setLevel(level or log_config.get('level', 'INFO'))
    logger.propagate = False

    log_dir = os.path.join(runs_dir, run_id)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'display.log')

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(log_config.get('format', DEFAULT_FORMAT))
    for handler in (logging.FileHandler(log_file), logging.StreamHandler()):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized. Run ID: {run_id}. Log file: {log_file}")
    return logger
