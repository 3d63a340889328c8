"""
Runtime configuration, read once from the environment.
"""
import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent
FESTIVAL_DATA_DIR = PACKAGE_DIR / "data"

# Skyfield kernel and where the loader keeps its downloads
EPHEMERIS_FILE = os.getenv("UPOSATHA_EPHEMERIS", "de421.bsp")
EPHEMERIS_DIR = Path(os.getenv("UPOSATHA_DATA_DIR", Path.home() / ".cache" / "uposatha"))

# ~500 entries covers more than a year of daily lookups
CACHE_MAX_ENTRIES = int(os.getenv("UPOSATHA_CACHE_SIZE", "500"))

# Upcoming festival scan
SCAN_DAYS = int(os.getenv("UPOSATHA_SCAN_DAYS", "365"))
SCAN_YIELD_EVERY = int(os.getenv("UPOSATHA_SCAN_YIELD_EVERY", "10"))

# Default observer: Gaya, Bihar
DEFAULT_LOCATION_NAME = os.getenv("UPOSATHA_DEFAULT_NAME", "Gaya, Bihar")
DEFAULT_LATITUDE = float(os.getenv("UPOSATHA_DEFAULT_LAT", "24.7914"))
DEFAULT_LONGITUDE = float(os.getenv("UPOSATHA_DEFAULT_LON", "85.0002"))
DEFAULT_ALTITUDE = float(os.getenv("UPOSATHA_DEFAULT_ALT", "111"))

LOG_LEVEL = os.getenv("UPOSATHA_LOG_LEVEL", "INFO").upper()
