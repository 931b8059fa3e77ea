# paths.py

from pathlib import Path

# Project root (this file lives at the root)
ROOT = Path(__file__).parent

# Ledger files live here unless configured otherwise
DATA_DIR = ROOT / "Data"

def data_file(filename: str) -> Path:
    return DATA_DIR / filename
