"""
Test command line routing to the operational scripts.
"""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

import cli


def command_for(*argv):
    return cli.script_command(cli.build_parser().parse_args(list(argv)))


def test_setup_and_ingest_commands():
    assert command_for('setup') == [sys.executable, str(cli.SCRIPTS_DIR / 'setup.py')]
    assert command_for('ingest')[1:] == [str(cli.SCRIPTS_DIR / 'ingest.py'), '--csv']
    assert command_for('ingest', '--file', 'data/phones.csv')[2:] == ['--csv', '--file=data/phones.csv']


def test_sync_jobs_map_to_script_flags():
    assert command_for('sync', 'rescore')[1:] == [str(cli.SCRIPTS_DIR / 'sync.py'), '--rescore']
    assert command_for('sync', 'transcripts', '--limit', '20')[2:] == ['--transcripts', '--limit=20']
    assert command_for('sync', 'analyze', '--id', '42')[2:] == ['--analyze', '--id=42']
    assert command_for('sync', 'all')[2:] == ['--all']


def test_invalid_commands_exit():
    with pytest.raises(SystemExit):
        cli.main(['sync', 'analyze'])
    with pytest.raises(SystemExit):
        cli.main(['sync', 'everything'])
    assert cli.main([]) == 1
