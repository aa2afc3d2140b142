import logging
import os
import opentelemetry.trace
from azure.monitor.opentelemetry import configure_azure_monitor

from catalog_api.config import get_app_settings

# Only export to Application Insights when running inside Azure Functions
if os.environ.get("FUNCTIONS_WORKER_RUNTIME"):
    try:
        configure_azure_monitor()
        logging.info("Azure Monitor OpenTelemetry configured successfully")
    except Exception as e:
        logging.error(f"Error configuring Azure Monitor: {str(e)}")

# Tracer shared by routes and services
tracer = opentelemetry.trace.get_tracer("catalog_api")

logger = logging.getLogger("catalog_api")

_level = logging.getLevelName(get_app_settings().log_level)
logger.setLevel(_level if isinstance(_level, int) else logging.INFO)

if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )
    logger.addHandler(console_handler)


def get_child_logger(name):
    """Get a child logger with the given name."""
    return logger.getChild(name)
