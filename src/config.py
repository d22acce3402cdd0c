"""
Environment configuration for the phone recommendation service.

Values come from the process environment (or a local .env file) so that
credentials never live in code.
"""
import os
from typing import Dict, List
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    return str(value).strip().lower() in {'1', 'true', 'yes', 'on'}


def _parse_channels(raw: str) -> Dict[str, str]:
    """Parse 'Name:UCxxxx,Other:UCyyyy' into {name: channel_id}."""
    channels = {}
    for entry in (raw or '').split(','):
        entry = entry.strip()
        if not entry or ':' not in entry:
            continue
        name, channel_id = entry.split(':', 1)
        if name.strip() and channel_id.strip():
            channels[name.strip()] = channel_id.strip()
    return channels


def _parse_list(raw: str) -> List[str]:
    return [item.strip() for item in (raw or '').split(',') if item.strip()]


DB_CONFIG = {
    'host': os.getenv('DB_HOST', 'localhost'),
    'port': os.getenv('DB_PORT', '5432'),
    'database': os.getenv('DB_NAME', 'phonepick'),
    'user': os.getenv('DB_USER', 'postgres'),
    'password': os.getenv('DB_PASSWORD', 'postgres')
}

API_KEY = os.getenv('API_KEY', '')

PHONES_CSV = os.getenv('PHONES_CSV', 'data/flipkart_phones.csv')

YOUTUBE_API_KEY = os.getenv('YOUTUBE_API_KEY', '')
YOUTUBE_CHANNELS = _parse_channels(os.getenv('YOUTUBE_CHANNELS', ''))

REDDIT_SUBREDDITS = _parse_list(os.getenv(
    'REDDIT_SUBREDDITS',
    'Android,smartphones,PickAnAndroidForMe,AndroidQuestions,smartphone,IndianGaming'
))
REDDIT_USER_AGENT = os.getenv('REDDIT_USER_AGENT', 'PhonePick/1.0')

BATCH_PROCESSING_ENABLED = _as_bool(os.getenv('BATCH_PROCESSING_ENABLED'), False)
TRANSCRIPT_BATCH_LIMIT = int(os.getenv('TRANSCRIPT_BATCH_LIMIT', '10'))
BATCH_DELAY_SECONDS = float(os.getenv('BATCH_DELAY_SECONDS', '2.0'))
