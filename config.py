# config.py
import os

from dotenv import load_dotenv

load_dotenv()

try:
    TIMEOUT = float(os.getenv("STEAM_API_TIMEOUT", "10"))
except ValueError:
    raise RuntimeError("STEAM_API_TIMEOUT must be a number of seconds")

OUTPUT_FILE = os.getenv("SWSIZE_OUTPUT_FILE", "output.txt")
USER_AGENT = os.getenv("SWSIZE_USER_AGENT", "steam-workshop-size/1.0")
