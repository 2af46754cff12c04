# api/utils/logging.py
import logging
import sys
import os
import time

# Determine if we're in production based on environment variable
IS_PRODUCTION = os.environ.get("ENVIRONMENT", "development") == "production"

class TimezoneFormatter(logging.Formatter):
    def formatTime(self, record, datefmt=None):
        # Use local time for log timestamps
        return time.strftime(datefmt or self.default_time_format, 
                            time.localtime(record.created))

def setup_logger(name):
    """Set up a logger with proper formatting and handlers."""
    logger = logging.getLogger(name)
    
    # Set default level
    logger.setLevel(logging.INFO if IS_PRODUCTION else logging.DEBUG)
    
    # Avoid stacking handlers when a module is re-imported
    if logger.handlers:
        return logger

    formatter = TimezoneFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    
    # Console handler for immediate feedback
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    
    return logger

# Create loggers for different modules
api_logger = setup_logger("building_compliance.api")
db_logger = setup_logger("building_compliance.db")
