#!/usr/bin/env python3
"""
One-shot prospect cleanup.

Converts every active prospect whose email already belongs to a candidate,
prints the summary and exits 0. Any unhandled error (for example an
unreachable database) exits non-zero; the run can simply be restarted.
"""
import sys
import logging

from app import create_app
from batch import run_batch
from store import open_store

logger = logging.getLogger(__name__)


def main(app=None):
    app = app or create_app()
    try:
        with open_store(app) as store:
            summary = run_batch(store)
    except Exception as e:
        logger.exception(f"Prospect cleanup aborted: {e}")
        return 1

    for line in summary.lines():
        print(line)
    return 0


if __name__ == '__main__':
    sys.exit(main())
