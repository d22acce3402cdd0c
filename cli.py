#!/usr/bin/env python
"""
PhonePick Advisor command line.

Usage:
    python cli.py setup                          # Create tables and indexes
    python cli.py ingest [--file=phones.csv]     # Import and score phones from CSV
    python cli.py sync rescore                   # Recompute derived scores
    python cli.py sync transcripts [--limit=20]  # Fetch missing YouTube transcripts
    python cli.py sync reddit                    # Collect Reddit posts
    python cli.py sync sentiment                 # Analyze reviews, update aggregates
    python cli.py sync analyze --id=42           # Video analysis for one phone
    python cli.py sync all                       # Every sync job except analyze
    python cli.py api [--port=8000] [--no-reload]
"""
import sys
import argparse
import subprocess
from pathlib import Path

project_root = Path(__file__).parent
SCRIPTS_DIR = project_root / 'scripts'

SYNC_JOBS = ('rescore', 'transcripts', 'reddit', 'sentiment', 'analyze', 'all')


def build_parser():
    parser = argparse.ArgumentParser(prog='cli.py', description='PhonePick Advisor operations')
    commands = parser.add_subparsers(dest='command')

    commands.add_parser('setup', help='Create database tables and indexes')

    ingest = commands.add_parser('ingest', help='Import phones from CSV')
    ingest.add_argument('--file', default=None, help='CSV file (defaults to PHONES_CSV)')

    sync = commands.add_parser('sync', help='Rescoring and review sync jobs')
    sync.add_argument('job', choices=SYNC_JOBS)
    sync.add_argument('--limit', type=int, default=None, help='Max transcripts per run (transcripts)')
    sync.add_argument('--id', type=int, default=None, help='Phone ID (analyze)')

    api = commands.add_parser('api', help='Start the API server')
    api.add_argument('--host', default='0.0.0.0')
    api.add_argument('--port', type=int, default=8000)
    api.add_argument('--no-reload', action='store_true', help='Disable auto reload')

    return parser


def script_command(args):
    """argv that runs the script behind a setup / ingest / sync command."""
    if args.command == 'setup':
        script_args = []
    elif args.command == 'ingest':
        script_args = ['--csv']
        if args.file:
            script_args.append(f'--file={args.file}')
    else:
        script_args = [f'--{args.job}']
        if args.limit is not None:
            script_args.append(f'--limit={args.limit}')
        if args.id is not None:
            script_args.append(f'--id={args.id}')

    return [sys.executable, str(SCRIPTS_DIR / f'{args.command}.py')] + script_args


def run_api(args):
    import uvicorn
    uvicorn.run(
        "src.api.main:app",
        host=args.host,
        port=args.port,
        reload=not args.no_reload
    )
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == 'sync' and args.job == 'analyze' and args.id is None:
        parser.error("sync analyze requires --id")

    if args.command == 'api':
        return run_api(args)

    return subprocess.run(script_command(args), cwd=project_root).returncode


if __name__ == '__main__':
    sys.exit(main())
