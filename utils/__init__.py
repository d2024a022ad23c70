from utils.logger import setup_logging, apply_logging_config, log_info, log_success, log_warning, log_error

__all__ = [
    "setup_logging",
    "apply_logging_config",
    "log_info",
    "log_success",
    "log_warning",
    "log_error",
]
