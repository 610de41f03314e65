#!/usr/bin/env python3
"""
Main entry point for the prospect deduplication back office.

- JSON maintenance API (duplicate reports, manual conversion, cleanup runs)
- `flask --app main dedupe run|check|names` commands
- Optional nightly cleanup scheduler (DEDUPE_SCHEDULER_ENABLED=true)
"""

from app import create_app

app = create_app()

if __name__ == '__main__':
    from scheduler import start_background_services

    start_background_services(app)

    app.run(host='0.0.0.0', port=5000)
