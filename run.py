# run.py
import uvicorn
import sys

from canvas_api.core.logging import logger

if __name__ == "__main__":
    logger.info("Starting Canvas API...")
    try:
        uvicorn.run("canvas_api.main:app", host="0.0.0.0", port=8000, reload=True)
    except Exception as e:
        logger.error(f"Error starting server: {str(e)}")
        sys.exit(1)
