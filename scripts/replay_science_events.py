#!/usr/bin/env python3
"""
Replay recorded science events through one Science Funding session.

Reads a JSON list of {"amount": ..., "subject": ...} events, loads the pending
queue from the state file, credits every event, and writes the queue back.

Usage:
    python scripts/replay_science_events.py events.json
    python scripts/replay_science_events.py events.json --state saves/persistent.sfs --no-funds
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root))

import bittensor as bt
from sciencefunding.session import load_events, run_session
from sciencefunding.utils.config import SETTINGS_PATH, STATE_PATH


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Replay science events through a Science Funding session")
    parser.add_argument("events", help="JSON file holding a list of {amount, subject} events")
    parser.add_argument("--settings", default=SETTINGS_PATH, help="Reward settings file")
    parser.add_argument("--state", default=STATE_PATH, help="Session state file (.json for JSON form)")
    parser.add_argument("--no-funds", action="store_true", help="Run without a funds ledger (non-career game)")
    parser.add_argument("--no-reputation", action="store_true", help="Run without a reputation ledger (sandbox game)")
    parser.add_argument("--rewards-log-dir", default=None, help="Write a rewards log to this directory")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    bt.logging.set_info()

    try:
        events = load_events(args.events)
    except (FileNotFoundError, ValueError) as e:
        print(f"\n❌ ERROR: {e}\n")
        return 1

    print("=" * 70)
    print(f"Replaying {len(events)} science events")
    print("=" * 70)

    result = run_session(
        events,
        settings_path=args.settings,
        state_path=args.state,
        funds_enabled=not args.no_funds,
        reputation_enabled=not args.no_reputation,
        rewards_log_dir=args.rewards_log_dir
    )

    for notification in result.notifications:
        print()
        print(f"[{notification.severity.value.upper()}] {notification.title}")
        print(notification.body)

    print("=" * 70)
    print("Session Results:")
    print("=" * 70)
    print(f"  Funds credited:      {result.funds:.1f}")
    print(f"  Reputation credited: {result.reputation:.1f}")
    print(f"  Reports pending:     {result.pending_reports}")
    print(f"  State saved to:      {result.state_path}")
    print("=" * 70)

    return 0


if __name__ == "__main__":
    sys.exit(main())
