"""EchoBot: configuration from environment variables."""

import os

from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

SERVICE_NAME = "echobot"

LOG_LEVEL = os.getenv("ECHOBOT_LOG_LEVEL", "INFO")
HOST = os.getenv("ECHOBOT_HOST", "0.0.0.0")
PORT = int(os.getenv("ECHOBOT_PORT", 8888))
