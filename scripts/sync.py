"""
Unified sync script.
Rescoring and review syncing from external sources (YouTube, Reddit).

Usage:
    python scripts/sync.py --rescore                  # Recompute derived scores for all phones
    python scripts/sync.py --transcripts --limit=20   # Fetch missing YouTube transcripts
    python scripts/sync.py --reddit                   # Collect Reddit posts for all phones
    python scripts/sync.py --sentiment                # Analyze pending reviews, update aggregates
    python scripts/sync.py --analyze --id=42          # Feature-based video analysis for one phone
    python scripts/sync.py --all                      # Everything except --analyze
"""
import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.config import BATCH_DELAY_SECONDS
from src.data_pipeline.phone_analysis import PhoneAnalysisService
from src.data_pipeline.reddit_client import RedditClient
from src.data_pipeline.review_jobs import ReviewJobs
from src.data_pipeline.youtube_client import YouTubeClient
from src.scoring.score_updater import PhoneScoreUpdater
from src.store.phone_store import PhoneStore, ReviewStore
from src.store.records import PhoneNotFoundError


def rescore_phones():
    """Recompute camera/battery/software/privacy/looks scores."""
    print("\n[*] Rescoring phones...")
    result = PhoneScoreUpdater(PhoneStore(), verbose=True).update_all_phone_scores()
    return result.failed == 0


def build_jobs():
    return ReviewJobs(
        PhoneStore(),
        ReviewStore(),
        youtube_client=YouTubeClient(verbose=True),
        reddit_client=RedditClient(delay=BATCH_DELAY_SECONDS, verbose=True),
        verbose=True
    )


def sync_transcripts(limit=None):
    print("\n[*] Fetching missing transcripts...")
    result = build_jobs().fetch_missing_transcripts(limit=limit)
    return result.failed == 0


def sync_reddit():
    print("\n[*] Fetching Reddit posts...")
    result = build_jobs().fetch_reddit_posts()
    return result.failed == 0


def sync_sentiment():
    """Analyze pending reviews for both sources, then refresh phone aggregates."""
    print("\n[*] Analyzing review sentiment...")
    jobs = build_jobs()
    success = True
    for source_type in ('youtube', 'reddit'):
        if jobs.analyze_missing_sentiments(source_type).failed:
            success = False
        if jobs.update_phone_aggregate_scores(source_type).failed:
            success = False
    return success


def analyze_phone(phone_id):
    print(f"\n[*] Analyzing phone {phone_id}...")
    service = PhoneAnalysisService(
        PhoneStore(),
        YouTubeClient(verbose=True),
        review_store=ReviewStore(),
        verbose=True
    )
    try:
        result = service.analyze_phone(phone_id)
    except PhoneNotFoundError as e:
        print(f"[-] {e}")
        return False
    print(f"[+] {result.message}")
    return True


def main():
    parser = argparse.ArgumentParser(description='Rescore phones and sync review data')
    parser.add_argument('--all', action='store_true', help='Rescore, fetch transcripts and posts, analyze sentiment')
    parser.add_argument('--rescore', action='store_true', help='Recompute derived phone scores')
    parser.add_argument('--transcripts', action='store_true', help='Fetch missing YouTube transcripts')
    parser.add_argument('--limit', type=int, default=None, help='Max transcripts per run (with --transcripts)')
    parser.add_argument('--reddit', action='store_true', help='Collect Reddit posts for all phones')
    parser.add_argument('--sentiment', action='store_true', help='Analyze pending reviews and update aggregates')
    parser.add_argument('--analyze', action='store_true', help='Feature-based video analysis (with --id)')
    parser.add_argument('--id', type=int, default=None, help='Phone ID (with --analyze)')

    args = parser.parse_args()

    # If no args, show help
    if not any(vars(args).values()):
        parser.print_help()
        return

    if args.analyze and args.id is None:
        print("[-] Must specify --id=<phone_id> with --analyze")
        return 1

    print("="*60)
    print("Data Sync")
    print("="*60)

    success = True

    if args.all or args.rescore:
        if not rescore_phones():
            success = False

    if args.all or args.transcripts:
        if not sync_transcripts(limit=args.limit):
            success = False

    if args.all or args.reddit:
        if not sync_reddit():
            success = False

    if args.all or args.sentiment:
        if not sync_sentiment():
            success = False

    if args.analyze:
        if not analyze_phone(args.id):
            success = False

    print("\n" + "="*60)
    if success:
        print("[+] Sync completed successfully!")
    else:
        print("[-] Sync completed with errors")
    print("="*60)

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
