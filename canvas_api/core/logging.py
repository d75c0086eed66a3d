import os
import sys
import json
from loguru import logger as loguru_logger

from canvas_api.core.config import settings

# Remove default logger
loguru_logger.remove()


class CloudLoggingAdapter:
    """
    Sink converting Loguru records to Cloud Logging compatible JSON lines
    """
    def __init__(self):
        self.env = os.getenv("ENV", "development")
        self.service_name = settings.PROJECT_NAME

    def write(self, message):
        record = message.record

        # Basic structure required by Cloud Logging
        cloud_log = {
            "severity": record["level"].name,
            "time": record["time"].isoformat(),
            "message": record["message"],
            "logging.googleapis.com/labels": {
                "environment": self.env,
                "service": self.service_name
            }
        }

        # Fields bound with logger.bind() or passed as kwargs
        for k, v in record["extra"].items():
            cloud_log[k] = v

        if record["exception"] is not None:
            exc_type, exc_value, _ = record["exception"]
            cloud_log["exception"] = f"{exc_type.__name__}: {exc_value}" if exc_type else None

        # Print as JSON for Cloud Logging structured logs
        print(json.dumps(cloud_log, default=str), file=sys.stderr)


# Configure Loguru
loguru_logger.configure(
    handlers=[
        {
            "sink": CloudLoggingAdapter().write,
            "format": "{message}",
            "level": settings.LOG_LEVEL,
        }
    ]
)

# Export the logger
logger = loguru_logger
