"""
Test feature-based video analysis for a single phone.
"""
import sys
from pathlib import Path
from unittest.mock import Mock

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from src.data_pipeline.phone_analysis import PhoneAnalysisService
from src.data_pipeline.youtube_client import VideoInfo
from src.scoring.score_updater import PhoneScoreUpdater
from src.store.memory_store import InMemoryPhoneStore, InMemoryReviewStore
from src.store.records import Phone, PhoneNotFoundError


TRANSCRIPTS = {
    'cam1': "The camera takes sharp images.",
    'bat1': "Battery life is poor battery.",
}


def make_youtube(videos=None, transcripts=None):
    youtube = Mock()
    youtube.find_videos_for_phone.return_value = videos if videos is not None else {
        'Channel A': VideoInfo('cam1', "Pixel 8a camera review"),
        'Channel B': VideoInfo('bat1', "Pixel 8a battery test"),
    }
    transcripts = TRANSCRIPTS if transcripts is None else transcripts
    youtube.fetch_transcript.side_effect = lambda video_id: transcripts.get(video_id)
    return youtube


def make_service(youtube):
    phones = InMemoryPhoneStore([Phone(id=None, brand="Google", model="Pixel 8a", price=39999)])
    return PhoneAnalysisService(phones, youtube, review_store=InMemoryReviewStore(), delay=0)


def test_analyze_phone_averages_channels():
    youtube = make_youtube()
    service = make_service(youtube)

    result = service.analyze_phone(1)

    youtube.find_videos_for_phone.assert_called_once_with("Google Pixel 8a")
    assert result.channel_feature_scores == {
        'Channel A': {'camera': 100},
        'Channel B': {'battery': 0},
    }
    assert result.channel_scores == {'Channel A': 100, 'Channel B': 0}
    assert result.average_sentiment_score == 50
    assert result.average_feature_scores == {'camera': 100, 'battery': 0}
    assert not result.has_consensus
    assert result.message == "Analyzed 2 video(s) with feature-based sentiment"

    assert service.phone_store.get(1).youtube_sentiment_score == 50
    reviews = service.review_store.for_phone(1, 'youtube')
    assert sorted(r.external_id for r in reviews) == ['bat1', 'cam1']
    assert all(r.content for r in reviews)


def test_no_videos_leaves_phone_untouched():
    service = make_service(make_youtube(videos={}))

    result = service.analyze_phone(1)

    assert result.average_sentiment_score == 50
    assert result.message == "No YouTube videos found for analysis"
    assert result.channel_scores == {}
    assert service.phone_store.get(1).youtube_sentiment_score is None


def test_missing_transcripts_are_recorded_for_retry():
    service = make_service(make_youtube(transcripts={}))

    result = service.analyze_phone(1)

    assert result.average_sentiment_score == 50
    assert result.message == "Transcripts could not be fetched"
    assert service.phone_store.get(1).youtube_sentiment_score is None
    assert len(service.review_store.pending_content('youtube')) == 2


def test_rescore_during_analysis_is_kept():
    phones = InMemoryPhoneStore([Phone(
        id=None, brand="Google", model="Pixel 8a", price=39999,
        camera_info="108MP + 8MP + 2MP Night Mode", camera_score=10
    )])
    youtube = make_youtube()
    fetch = youtube.fetch_transcript.side_effect

    def fetch_while_rescoring(video_id):
        PhoneScoreUpdater(phones).update_phone_by_id(1)
        return fetch(video_id)

    youtube.fetch_transcript.side_effect = fetch_while_rescoring
    service = PhoneAnalysisService(phones, youtube, review_store=InMemoryReviewStore(), delay=0)

    service.analyze_phone(1)

    saved = phones.get(1)
    assert saved.camera_score == 75
    assert saved.youtube_sentiment_score == 50


def test_unknown_phone_raises():
    service = make_service(make_youtube())
    with pytest.raises(PhoneNotFoundError):
        service.analyze_phone(42)


def test_analyze_phones_skips_failures():
    service = make_service(make_youtube())

    results = service.analyze_phones([1, 42])

    assert list(results) == [1]
    assert results[1].to_dict()['average_sentiment_score'] == 50
