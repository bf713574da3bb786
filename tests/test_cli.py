import requests

from aqviz.models import AirQuality
from aqviz.services import importer

CSV_TEXT = (
    'Date,Site ID,POC,Daily Mean PM2.5 Concentration,Units,Daily AQI Value,Local Site Name,County\n'
    '01/01/2024,060370002,1,10.0,ug/m3 LC,42,Azusa,Los Angeles\n'
    '01/02/2024,060370002,1,bad,ug/m3 LC,,Azusa,Los Angeles\n'
)


def test_init_db(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['init-db'])
    assert result.exit_code == 0
    assert 'Database tables created' in result.output


def test_import_csv_command(app, tmp_path):
    path = tmp_path / 'daily.csv'
    path.write_text(CSV_TEXT)

    runner = app.test_cli_runner()
    result = runner.invoke(args=['import-csv', str(path), '--show-errors'])

    assert result.exit_code == 0, result.output
    assert 'Successfully loaded 1 rows (1 skipped)' in result.output
    assert 'line 3' in result.output
    assert AirQuality.query.count() == 1


def test_import_csv_command_missing_file(app, tmp_path):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['import-csv', str(tmp_path / 'nope.csv')])

    assert result.exit_code != 0
    assert 'File not found' in result.output


def test_download_csv_command_failure(app, tmp_path, monkeypatch):
    def refuse(url, stream=False, timeout=None):
        raise requests.exceptions.ConnectionError('connection refused')

    monkeypatch.setattr(importer.requests, 'get', refuse)

    runner = app.test_cli_runner()
    result = runner.invoke(args=['download-csv', 'https://example.org/daily.csv', str(tmp_path / 'd.csv')])

    assert result.exit_code != 0
    assert 'Download failed' in result.output
