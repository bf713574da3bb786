"""
CLI Commands

Registered on the app, run as `flask --app app <command>`.
"""

import click
import requests
from flask.cli import with_appcontext

from aqviz.extensions import db
from aqviz.services import ImportFileError, import_csv_file, download_csv


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create the air_quality table."""
    db.create_all()
    click.echo('Database tables created')


@click.command('import-csv')
@click.argument('path', type=click.Path(dir_okay=False))
@click.option('--clear', is_flag=True, help='Delete existing rows before loading.')
@click.option('--show-errors', is_flag=True, help='List every skipped line.')
@with_appcontext
def import_csv_command(path, clear, show_errors):
    """Load an EPA daily PM2.5 CSV export into air_quality."""
    try:
        result = import_csv_file(path, clear=clear)
    except ImportFileError as e:
        raise click.ClickException(str(e))

    if show_errors:
        for line, message in result.errors:
            click.echo(f'  line {line}: {message}', err=True)

    click.echo(f'Successfully loaded {result.created} rows ({result.skipped} skipped)')


@click.command('download-csv')
@click.argument('url')
@click.argument('dest', type=click.Path(dir_okay=False))
@click.option('--timeout', default=30, show_default=True, help='Request timeout in seconds.')
def download_csv_command(url, dest, timeout):
    """Download a CSV file, e.g. an EPA daily data export."""
    try:
        written = download_csv(url, dest, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise click.ClickException(f'Download failed: {e}')

    click.echo(f'Saved to {dest} ({written / (1024 * 1024):.1f} MB)')


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(import_csv_command)
    app.cli.add_command(download_csv_command)
