import click
from flask import current_app
from flask.cli import AppGroup

from batch import run_batch
from reports import duplicate_report, name_duplicate_report
from store import open_store

dedupe_cli = AppGroup('dedupe', help='Prospect / candidate deduplication maintenance.')


@dedupe_cli.command('run')
def run_command():
    """Convert prospects that already exist as candidates (by email)."""
    with open_store(current_app._get_current_object()) as store:
        summary = run_batch(store)
    for line in summary.lines():
        click.echo(line)


@dedupe_cli.command('check')
def check_command():
    """Report email and phone duplicates without changing anything."""
    with open_store(current_app._get_current_object()) as store:
        report = duplicate_report(store)
    for line in report.lines():
        click.echo(line)


@dedupe_cli.command('names')
@click.option('--sample', type=int, default=None, help='Number of duplicate groups to detail.')
def names_command(sample):
    """Report candidates sharing the same normalized full name."""
    if sample is None:
        sample = current_app.config['DEDUPE']['name_duplicate_sample']
    with open_store(current_app._get_current_object()) as store:
        report = name_duplicate_report(store, sample=sample)
    for line in report.lines():
        click.echo(line)


def register_commands(app):
    app.cli.add_command(dedupe_cli)
