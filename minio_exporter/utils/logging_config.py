# minio_exporter/utils/logging_config.py
"""
Centralized logging configuration for the exporter.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional


class LoggingConfig:
    """Manages logging configuration for the entire application"""

    @staticmethod
    def setup_logging(log_level: str = 'INFO', log_file: Optional[str] = None):
        """
        Set up logging for the application

        Args:
            log_level: Root log level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
            log_file: Optional path of a rotating log file
        """
        level = getattr(logging, log_level.upper(), logging.INFO)

        # Configure root logger
        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        # Clear existing handlers
        root_logger.handlers.clear()

        # Create formatters
        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        simple_formatter = logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s'
        )

        # Console handler (always present)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        root_logger.addHandler(console_handler)

        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_path, maxBytes=10 * 1024 * 1024, backupCount=5
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(detailed_formatter)
            root_logger.addHandler(file_handler)

        LoggingConfig._configure_component_loggers(level)

    @staticmethod
    def _configure_component_loggers(level: int):
        """Configure logging levels for specific components"""

        # HTTP pool used by the minio SDK (too verbose on DEBUG)
        logging.getLogger('urllib3').setLevel(logging.WARNING)

        # Application component loggers
        logging.getLogger('config_manager').setLevel(logging.INFO)
        logging.getLogger('collector').setLevel(level)
        logging.getLogger('subcollector').setLevel(level)
        logging.getLogger('minio_connector').setLevel(level)

    @staticmethod
    def get_logger(name):
        """Get a logger for a specific component"""
        return logging.getLogger(name)


# Convenience functions
def setup_logging(log_level: str = 'INFO', log_file: Optional[str] = None):
    """Convenience function to set up logging"""
    LoggingConfig.setup_logging(log_level, log_file)


def get_logger(name):
    """Convenience function to get a logger"""
    return LoggingConfig.get_logger(name)
