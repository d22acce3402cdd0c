"""
Reddit Client - Search phone subreddits for posts about a phone.

Uses Reddit's public JSON search endpoint, no credentials needed. A failing
subreddit only drops that subreddit's posts.
"""
import time
from typing import List, Optional

import requests

from src.config import REDDIT_SUBREDDITS, REDDIT_USER_AGENT
from src.store.records import PhoneReview

REDDIT_BASE_URL = "https://www.reddit.com"
SEARCH_LIMIT = 25


class RedditClient:
    """Fetch Reddit posts mentioning a phone as unscored PhoneReview records."""

    def __init__(
        self,
        subreddits: Optional[List[str]] = None,
        user_agent: Optional[str] = None,
        delay: float = 2.0,
        timeout: int = 15,
        session: Optional[requests.Session] = None,
        verbose: bool = False
    ):
        self.subreddits = subreddits if subreddits is not None else list(REDDIT_SUBREDDITS)
        self.user_agent = user_agent or REDDIT_USER_AGENT
        self.delay = delay
        self.timeout = timeout
        self.session = session or requests.Session()
        self.verbose = verbose

    def search_phone(self, phone) -> List[PhoneReview]:
        """Posts about a phone across all configured subreddits."""
        posts = []
        for index, subreddit in enumerate(self.subreddits):
            if index > 0 and self.delay > 0:
                time.sleep(self.delay)
            posts.extend(self.search_subreddit(subreddit, phone))
        return posts

    def search_subreddit(self, subreddit: str, phone) -> List[PhoneReview]:
        url = f"{REDDIT_BASE_URL}/r/{subreddit}/search.json"
        params = {
            'q': phone.model,
            'restrict_sr': 1,
            'sort': 'relevance',
            'limit': SEARCH_LIMIT,
        }

        try:
            response = self.session.get(
                url,
                params=params,
                headers={'User-Agent': self.user_agent},
                timeout=self.timeout
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            if self.verbose:
                print(f"[-] Error fetching from r/{subreddit}: {e}")
            return []

        return parse_search_response(payload, phone.id)


def parse_search_response(payload, phone_id: int) -> List[PhoneReview]:
    """Turn a search.json listing into PhoneReview records (skipping posts without an id)."""
    posts = []
    for child in payload.get('data', {}).get('children', []):
        data = child.get('data', {})
        post_id = data.get('id')
        if not post_id:
            continue
        permalink = data.get('permalink', '')
        posts.append(PhoneReview(
            phone_id=phone_id,
            source_type='reddit',
            external_id=post_id,
            title=data.get('title'),
            url=f"https://reddit.com{permalink}" if permalink else None,
            author=data.get('subreddit'),
            content=data.get('selftext') or None
        ))
    return posts
