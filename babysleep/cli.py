#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Command line for logging a child's sleep and reading back the derived insights.

Usage:
    babysleep add-child --name Ada --birth-date 2024-03-01
    babysleep start [--type nap|night]
    babysleep stop
    babysleep dashboard
    babysleep history [--days 7]
    babysleep insights

All commands print JSON. Pass --at to evaluate at a fixed instant instead of now.
"""

import argparse
import json
import logging
import sys
from datetime import date, datetime

from babysleep.config.config_manager import ConfigManager
from babysleep.core.exceptions import SleepTrackerError
from babysleep.core.recommendation.llm_client import AnthropicCompletionClient
from babysleep.core.recommendation.recommendation_engine import SleepRecommendationEngine
from babysleep.core.repositories.data_repository import SessionRepository
from babysleep.core.services.sleep_service import SleepService
from babysleep.utils.time_utils import parse_timestamp

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='babysleep',
        description='Track baby sleep sessions and get wake-window and nap insights'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to configuration file (default: config/config.yaml or $BABYSLEEP_CONFIG)'
    )
    parser.add_argument(
        '--data-dir',
        type=str,
        default=None,
        help='Directory holding the CSV session store (overrides storage.data_dir)'
    )
    parser.add_argument(
        '--at',
        type=parse_timestamp,
        default=None,
        help='Evaluate at this ISO 8601 instant instead of the current time'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    add_child = subparsers.add_parser('add-child', help='Create a child profile')
    add_child.add_argument('--name', required=True)
    add_child.add_argument('--birth-date', required=True, type=date.fromisoformat, help='YYYY-MM-DD')

    start = subparsers.add_parser('start', help='Start a sleep session')
    start.add_argument('--child-id', default=None)
    start.add_argument('--type', dest='sleep_type', choices=['nap', 'night'], default=None)

    stop = subparsers.add_parser('stop', help="End a sleep session (the child's open one by default)")
    stop.add_argument('--child-id', default=None)
    stop.add_argument('--session-id', default=None)
    stop.add_argument('--wake-reason', default=None)

    dashboard = subparsers.add_parser('dashboard', help="Today's progress and the next predicted event")
    dashboard.add_argument('--child-id', default=None)

    history = subparsers.add_parser('history', help='Daily totals and wake windows')
    history.add_argument('--child-id', default=None)
    history.add_argument('--days', type=int, default=None)

    insights = subparsers.add_parser('insights', help='Sleep patterns and AI recommendations')
    insights.add_argument('--child-id', default=None)

    return parser.parse_args(argv)


def setup_logging(config, verbose=False):
    level = logging.DEBUG if verbose else getattr(logging, str(config.get('logging.level', 'INFO')).upper(), logging.INFO)
    handlers = [logging.StreamHandler(sys.stderr)]
    log_file = config.get('logging.file')
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def build_service(config, data_dir=None):
    """Wire the store, recommendation engine and service from configuration"""
    analytics = config.section('analytics')
    insights = config.section('insights')

    api_key = config.get_api_key()
    client = None
    if api_key:
        client = AnthropicCompletionClient(
            api_key,
            model=insights.get('model'),
            max_tokens=insights.get('max_tokens'),
            timeout=insights.get('timeout_seconds')
        )
    else:
        logger.info("No API key configured, insights will include statistics only")

    engine = SleepRecommendationEngine(
        config={
            'min_sessions': insights.get('min_sessions'),
            'lookback_days': insights.get('lookback_days'),
            'night_start_hour': analytics.get('night_start_hour'),
            'night_end_hour': analytics.get('night_end_hour'),
        },
        client=client
    )

    repository = SessionRepository(data_dir or config.get('storage.data_dir', 'data'))
    return SleepService(repository, engine, analytics)


def run_command(args, service, now):
    if args.command == 'add-child':
        return service.repository.add_child(args.name, args.birth_date, now)
    if args.command == 'start':
        return service.start_sleep(now, child_id=args.child_id, sleep_type=args.sleep_type)
    if args.command == 'stop':
        return service.end_sleep(now, session_id=args.session_id, child_id=args.child_id,
                                 wake_reason=args.wake_reason)
    if args.command == 'dashboard':
        return service.get_dashboard(now, child_id=args.child_id)
    if args.command == 'history':
        return service.get_history(now, child_id=args.child_id, days=args.days)
    if args.command == 'insights':
        return service.get_insights(now, child_id=args.child_id)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None):
    """Main entry point for the command line."""
    args = parse_args(argv)

    try:
        config = ConfigManager(args.config)
        setup_logging(config, args.verbose)
        service = build_service(config, args.data_dir)

        now = args.at or datetime.now().astimezone()
        result = run_command(args, service, now)

        if result is None:
            print(json.dumps({"message": "No active sleep session"}))
        else:
            print(result.model_dump_json(indent=2))

    except SleepTrackerError as e:
        logger.error(str(e))
        return 1
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
