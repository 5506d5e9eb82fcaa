"""
ClaimServer class for CLI control of the FastAPI application.
"""
import logging
import os
from typing import Optional

import uvicorn

import settings
from .app import create_app

logger = logging.getLogger(__name__)

DEBUG_LOG_FILE = "claim_debug.log"


class ClaimServer:
    """uvicorn wrapper used by the CLI"""

    def __init__(self, debug: bool = False, bind_address: Optional[str] = None, port: Optional[int] = None):
        self.server = None
        self.config = None
        self.debug = debug
        self.bind_address = bind_address or settings.BIND_ADDRESS
        self.port = port or settings.PORT

        if debug:
            self._setup_debug_logging()

    def _setup_debug_logging(self):
        """Send DEBUG logs to the console and an appended log file"""
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)

        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        log_file = os.path.abspath(DEBUG_LOG_FILE)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)

        logger.info(f"Debug logging enabled - appending to {log_file}")

    def run(self):
        """Run the claim service (blocking)"""
        logger.info(f"Starting creator claim service on http://{self.bind_address}:{self.port}")
        logger.info(f"OAuth redirect URI: {settings.X_REDIRECT_URI}")
        if not settings.COOKIE_SECURE:
            logger.warning("COOKIE_SECURE is disabled - cookies will be sent over plain HTTP")

        self.config = uvicorn.Config(
            create_app(),
            host=self.bind_address,
            port=self.port,
            log_level="debug" if self.debug else settings.LOG_LEVEL,
            access_log=False  # Query strings carry codes and state
        )
        self.server = uvicorn.Server(self.config)
        self.server.run()

    def stop(self):
        if self.server:
            self.server.should_exit = True
