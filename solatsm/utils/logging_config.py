# solatsm/utils/logging_config.py

"""
Configures the logging system for solatsm based on loaded settings.
Uses Rich for enhanced console logging.
"""

import logging
from datetime import datetime

from rich.logging import RichHandler

from solatsm.config import SolaConfig
from solatsm.version import __version__

# --- Constants ---
# Map verbosity levels (from CLI flags) to logging levels
VERBOSITY_MAP = {
    0: logging.WARNING,  # Default (normal); replaced by logging.log_level_console
    1: logging.INFO,     # -v (verbose)
    2: logging.DEBUG,    # -vv (debug)
    -1: logging.CRITICAL + 10 # -q (quiet/silent)
}

# --- Setup Function ---

def setup_logging(config: SolaConfig, verbosity: int = 0):
    """
    Configures the 'solatsm' logger based on the configuration and verbosity.

    Args:
        config: The loaded SolaConfig object.
        verbosity: 0 for normal, 1 for verbose, 2 for debug, -1 for quiet.
                   Values above 2 are treated as debug.
    """
    log_cfg = config.logging
    paths_cfg = config.paths

    if verbosity == 0:
        console_level = logging.getLevelName(log_cfg.log_level_console)
    else:
        console_level = VERBOSITY_MAP[max(-1, min(verbosity, 2))]

    root_logger = logging.getLogger("solatsm")
    root_logger.setLevel(logging.DEBUG) # Handlers filter by their own levels
    root_logger.handlers.clear()
    root_logger.propagate = False

    # --- Console Handler (Rich) ---
    if console_level <= logging.CRITICAL:
        console_handler = RichHandler(
            level=console_level,
            show_time=False,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    # --- File Handler ---
    log_filepath = None
    if log_cfg.log_file_enabled:
        try:
            log_dir = paths_cfg.log_directory
            log_dir.mkdir(parents=True, exist_ok=True)
            log_filepath = log_dir / log_cfg.log_filename_template.format(timestamp=datetime.now())

            file_handler = logging.FileHandler(log_filepath, encoding='utf-8')
            file_handler.setLevel(log_cfg.log_level_file)
            file_handler.setFormatter(logging.Formatter(log_cfg.log_format))
            root_logger.addHandler(file_handler)

            file_logger = logging.getLogger("solatsm.init")
            file_logger.info(f"--- solatsm v{__version__} Log Start ---")
            file_logger.info(f"File logging level set to: {log_cfg.log_level_file}")
            file_logger.info(f"Console logging level set to: {logging.getLevelName(console_level)}")
            file_logger.debug(f"Full configuration loaded: {config.model_dump()}")

        except (OSError, ValueError, KeyError) as e:
            logging.getLogger("solatsm.error").error(f"Failed to configure file logging: {e}", exc_info=True)
            log_filepath = None

    init_logger = logging.getLogger("solatsm.init")
    init_logger.info(f"solatsm v{__version__} initialized.")
    if log_filepath is not None:
        init_logger.info(f"Logging to file: {log_filepath}")
    else:
        init_logger.debug("File logging is disabled.")
