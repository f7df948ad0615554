import logging

logger = logging.getLogger("taskflow_app")
