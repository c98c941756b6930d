# color_changer/__init__.py

from dotenv import load_dotenv

# Load .env file at module import time
# This makes the COLOR_CHANGER_* settings available everywhere
load_dotenv()
