# python
"""devshell package"""
__version__ = "0.1"

from devshell.env import load_env

# Load .env values at import time so provider settings come from python-dotenv.
load_env()
