"""Environment-driven settings for the expense tracker"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv() # Searches for .env in current dir and parent dirs

EXPENSES_DATA_FILE = Path(os.getenv("EXPENSES_DATA_FILE", "expenses_data.json"))
EXPENSES_STORAGE_KEY = os.getenv("EXPENSES_STORAGE_KEY", "expenses")
EXPENSES_EXPORT_DIR = Path(os.getenv("EXPENSES_EXPORT_DIR", "."))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
