"""
YouTube Client - Find review videos for a phone and fetch their transcripts.

Video search uses the YouTube Data API (one search per configured channel,
~100 quota units each). Transcripts come from youtube-transcript-api and
use no API quota. Every failure degrades to "no video" / "no transcript".
"""
from dataclasses import dataclass
from typing import Dict, Optional

from googleapiclient.discovery import build
from youtube_transcript_api import YouTubeTranscriptApi

from src.config import YOUTUBE_API_KEY, YOUTUBE_CHANNELS


@dataclass
class VideoInfo:
    video_id: str
    title: str

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"


class YouTubeClient:
    """Search configured review channels and pull transcripts."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        channels: Optional[Dict[str, str]] = None,
        verbose: bool = False
    ):
        self.api_key = api_key if api_key is not None else YOUTUBE_API_KEY
        self.channels = channels if channels is not None else dict(YOUTUBE_CHANNELS)
        self.verbose = verbose
        self.quota_used = 0
        self._youtube = None

    @property
    def youtube(self):
        if self._youtube is None:
            self._youtube = build('youtube', 'v3', developerKey=self.api_key)
        return self._youtube

    def find_videos_for_phone(self, phone_name: str) -> Dict[str, VideoInfo]:
        """
        Top search hit per channel for a phone.

        Args:
            phone_name: e.g. "Samsung Galaxy S23"

        Returns:
            channel name -> VideoInfo, only for channels with a hit
        """
        videos = {}

        if not self.channels:
            if self.verbose:
                print("[!] No YouTube channels configured")
            return videos

        if not self.api_key:
            if self.verbose:
                print("[!] YouTube API key not configured")
            return videos

        for channel_name, channel_id in self.channels.items():
            video = self.search_channel(channel_id, phone_name)
            if video is not None:
                videos[channel_name] = video

        if self.verbose:
            print(f"[*] Found {len(videos)} videos for {phone_name}")

        return videos

    def search_channel(self, channel_id: str, query: str) -> Optional[VideoInfo]:
        try:
            response = self.youtube.search().list(
                part='snippet',
                channelId=channel_id,
                q=query,
                type='video',
                maxResults=1
            ).execute()
            self.quota_used += 100
        except Exception as e:
            if self.verbose:
                print(f"[-] Error searching channel {channel_id}: {e}")
            return None

        items = response.get('items', [])
        if not items:
            return None

        item = items[0]
        return VideoInfo(video_id=item['id']['videoId'], title=item['snippet']['title'])

    def fetch_transcript(self, video_id: str) -> Optional[str]:
        """Full transcript text, or None when unavailable."""
        try:
            transcript = YouTubeTranscriptApi().fetch(video_id)
        except Exception as e:
            if self.verbose:
                print(f"[-] Error fetching transcript for {video_id}: {e}")
            return None

        text = ' '.join(snippet.text for snippet in transcript.snippets).strip()
        return text or None
