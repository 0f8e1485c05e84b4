from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

# Get project root directory (1 level up from this package)
PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Path settings
DATA_DIR = PROJECT_ROOT / "db"
EMOJI_DATA_PATH = Path(os.getenv('EMOJI_DATA_PATH', str(DATA_DIR / "emojis.json")))
ORDERED_NAMES_PATH = Path(os.getenv('EMOJI_ORDERED_PATH', str(DATA_DIR / "ordered.json")))

# Remote dataset (emojilib v2 layout: name -> {keywords, char, fitzpatrick_scale, category})
EMOJILIB_BASE_URL = "https://raw.githubusercontent.com/muan/emojilib/v2.4.0"
EMOJI_SOURCE_URL = os.getenv('EMOJI_SOURCE_URL', f"{EMOJILIB_BASE_URL}/emojis.json")
# empty string disables fetching the ordered list
ORDERED_NAMES_URL = os.getenv('EMOJI_ORDERED_URL', f"{EMOJILIB_BASE_URL}/ordered.json")
FETCH_TIMEOUT = float(os.getenv('EMOJI_FETCH_TIMEOUT', '10'))

# Server defaults
DEFAULT_HOST = os.getenv('EMOJI_PICKER_HOST', '127.0.0.1')
DEFAULT_PORT = int(os.getenv('EMOJI_PICKER_PORT', '4567'))

# emoji categories, in display order
CATEGORIES = [
    ("people", "Smileys & People"),
    ("animals_and_nature", "Animals & Nature"),
    ("food_and_drink", "Food & Drink"),
    ("activity", "Activity"),
    ("travel_and_places", "Travel & Places"),
    ("objects", "Objects"),
    ("symbols", "Symbols"),
    ("flags", "Flags"),
]

# https://en.wikipedia.org/wiki/Fitzpatrick_scale
FITZPATRICK_SCALE_MODIFIERS = {
    "skin_tone_0": "",
    "skin_tone_1": "🏻",
    "skin_tone_2": "🏼",
    "skin_tone_3": "🏽",
    "skin_tone_4": "🏾",
    "skin_tone_5": "🏿",
}

SKIN_TONE_BASE = "✋"
ZERO_WIDTH_JOINER = "\u200d"

# skin tone preference cookie
TONE_COOKIE = "tone"
TONE_COOKIE_MAX_AGE = 365 * 24 * 60 * 60
