# company_match/config.py
from dotenv import load_dotenv
import os

load_dotenv()

# API Keys
ZYTE_API_KEY = os.getenv("ZYTE_API_KEY")

# Runtime parameters
BATCH_SIZE = 10
CONCURRENCY = 20
CRAWL_TIMEOUT = 10
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Fuzzy index parameters
FUZZY_THRESHOLD = 0.4
FIELD_WEIGHTS = {
    "commercial_name": 0.4,
    "legal_name": 0.3,
    "all_names": 0.3,
    "domain": 0.8,
    "phone_numbers": 0.9,
    "facebook": 0.7,
}
NAME_FIELDS = ("commercial_name", "legal_name", "all_names")
MIN_FIELD_LENGTH = 3

# Match cascade parameters
EARLY_EXIT_SCORE = 0.7
NAME_MATCH_THRESHOLD = 0.3
NAME_HIGH_CONFIDENCE = 0.1
FIELD_BONUSES = {"domain": 0.30, "phone": 0.25, "facebook": 0.20}
# Fallback returns pure lexical proximity as a low-confidence match (recall over precision)
FALLBACK_ENABLED = os.getenv("MATCH_FALLBACK_ENABLED", "true").lower() not in ("0", "false", "no")
FALLBACK_MIN_SCORE = 0.1

# URLs
ZYTE_URL = "https://api.zyte.com/v1/extract"
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

# File names
CATALOG_CSV = os.getenv("CATALOG_CSV", "data/sample-websites-company-names.csv")
WEBSITES_CSV = os.getenv("WEBSITES_CSV", "data/sample-websites.csv")
QUERY_SAMPLE_CSV = os.getenv("QUERY_SAMPLE_CSV", "data/API-input-sample.csv")
OUTPUT_CSV = "match_results.csv"
