#!/usr/bin/env python3
"""
Seed the global short URL counter in Redis.

The counter is created with the given starting offset only if it doesn't exist
yet (SET NX). Re-running the command against a live store is safe: an existing
counter is never reset, so shortcodes that were already handed out can't be
allocated again.

CLI usage:
    $ python -m bootstrap.seed_counter \
        --host redis.example --port 6379 --db 0 \
        --user default --password 'bP7f2Qk9LxN4Rz8TgH3mVw6YcJ5pK1sD' \
        --prefix linkshortener:dev \
        --start 100000

    # Only report the current counter value
    $ python -m bootstrap.seed_counter --host localhost --dry-run

Args:
    --host (str): Redis host (required).
    --port (int): Redis port (default: 6379).
    --db (int): Redis DB index (>= 0, default: 0).
    --user (str): Redis ACL username (optional).
    --password (str): Redis ACL password (optional; never printed).
    --prefix (str): Key namespace, e.g. linkshortener:dev (default: no prefix).
    --counter-key (str): Counter key name (default: global:url:id).
    --start (int): Starting offset (> 0, default: 100000).
    --dry-run (flag): If set, only print the current counter value.

Raises:
    ValueError: For invalid or missing inputs.
    linkshortener.dao.exceptions.DataStoreError: If Redis can't be reached.
"""

from __future__ import annotations

import argparse

from linkshortener.constants import Defaults
from linkshortener.dao.redis import ShortURLRedisDAO


def _non_negative_int(name: str, value: str) -> int:
    try:
        iv = int(value)
    except ValueError:
        raise ValueError(f'--{name} must be an integer') from None
    if iv < 0:
        raise ValueError(f'--{name} must be >= 0')
    return iv


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Steps:
        - Parse CLI arguments
        - Connect to Redis through ShortURLRedisDAO
        - Initialize (or preview) the global counter
    """
    parser = argparse.ArgumentParser(
        prog='seed_counter.py',
        description='Initialize the global short URL counter in Redis (idempotent)',
    )
    parser.add_argument('--host', required=True, help='Redis host')
    parser.add_argument('--port', default='6379', help='Redis port (default: 6379)')
    parser.add_argument('--db', default='0', help='Redis DB index (>= 0, default: 0)')
    parser.add_argument('--user', default=None, help='Redis ACL username')
    parser.add_argument('--password', default=None, help='Redis ACL password')
    parser.add_argument('--prefix', default=None, help='Key namespace, e.g. "linkshortener:dev"')
    parser.add_argument('--counter-key', default=Defaults.COUNTER_KEY, help=f'Counter key (default: {Defaults.COUNTER_KEY})')
    parser.add_argument('--start', default=str(Defaults.COUNTER_START), help=f'Starting offset (default: {Defaults.COUNTER_START})')
    parser.add_argument('--dry-run', action='store_true', help='Only print the current counter value')

    args = parser.parse_args(argv)

    host = args.host.strip()
    port = _non_negative_int('port', args.port)
    db = _non_negative_int('db', args.db)
    start = _non_negative_int('start', args.start)
    counter_key = args.counter_key.strip()
    prefix = (args.prefix or '').strip() or None

    if not host:
        raise ValueError('Missing --host')
    if not counter_key:
        raise ValueError('Missing --counter-key')
    if start == 0:
        raise ValueError('--start must be > 0')

    dao = ShortURLRedisDAO(
        redis_host=host,
        redis_port=port,
        redis_db=db,
        redis_username=args.user,
        redis_password=args.password,
        prefix=prefix,
        counter_key=counter_key,
        counter_start=start,
    )
    location = f'{host}:{port}/{db}'
    key = dao.keys.counter_key()

    if args.dry_run:
        current = dao.count()
        state = 'not initialized' if current is None else f'at {current}'
        print(f"Done. Counter '{key}' on {location} is {state} (dry run, nothing written).")
        return

    if dao.initialize(start=start):
        print(f"Done. Created counter '{key}' on {location} at {start}.")
    else:
        print(f"Done. Counter '{key}' on {location} already exists at {dao.count()}; left untouched.")


if __name__ == '__main__':
    main()
