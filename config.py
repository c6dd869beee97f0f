"""
Configuration for the Happy Paws feed
"""
import os

# Local storage configuration
STORAGE_PATH = os.environ.get("HAPPY_PAWS_STORAGE", "happy_paws_storage.json")

# Browsers allow roughly 5M characters per origin
STORAGE_QUOTA_CHARS = int(os.environ.get("HAPPY_PAWS_QUOTA", 5_000_000))

# Store key namespace - one self-contained collection per slot
STORAGE_KEYS = {
  "pets": "happyPaws.pets",
  "visits": "happyPaws.visits",
  "contact_messages": "happyPaws.contactMessages",
}

# Bundled datasets
SEED_DATASET = os.environ.get("HAPPY_PAWS_SEED", "posts.json")
DIRECTORY_DATASET = os.environ.get("HAPPY_PAWS_DIRECTORY", "shelters.json")
FETCH_TIMEOUT = 30  # seconds

# Pagination
FEED_PAGE_SIZE = 6
DIRECTORY_PAGE_SIZE = 9

# Pet type synonyms (matched against the lower-cased raw value)
TYPE_SYNONYMS = {
  "Dog": ["dog", "หมา", "สุนัข"],
  "Cat": ["cat", "แมว"],
  "Bird": ["bird", "นก"],
}

# Closed region whitelist - anything else collapses to EMPTY_REGION
REGION_WHITELIST = ["Bangkok", "Northern", "NorthEast", "Central", "East", "South"]
EMPTY_REGION = "Empty"

NO_NAME_PLACEHOLDER = "(no name)"

# Image reduction before storage
IMAGE_MAX_WIDTH = 1200  # px
IMAGE_QUALITY = 0.8     # lossy re-encode factor (0-1)

# Feed behaviour flags
FEED_OPTIONS = {
  "protect_flagged": True,   # demo records cannot be deleted
  "compress_images": True,   # shrink uploads before storing
}

# Contact form field limits
CONTACT_LIMITS = {
  "name": 80,
  "email": 120,
  "subject": 100,
  "message": 1500,
  "topic": 40,
}

# User agent for dataset requests
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
