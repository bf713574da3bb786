"""
CSV Import Service

Bulk loads EPA daily PM2.5 exports into the air_quality table.

Two header layouts are understood: the "Download Daily Data" export
(Date, Site ID, Daily Mean PM2.5 Concentration, ...) and the AQS bulk
daily files (Date Local, State Code/County Code/Site Num, Arithmetic Mean, ...).
"""

import csv
import logging
import math
import os
from datetime import datetime

import requests

from aqviz.extensions import db
from aqviz.models import AirQuality
from aqviz.services.aqi import calculate_aqi

logger = logging.getLogger(__name__)

FIELD_ALIASES = {
    'date': ('Date', 'Date Local'),
    'site_id': ('Site ID',),
    'poc': ('POC',),
    'daily_mean_pm25': ('Daily Mean PM2.5 Concentration', 'Arithmetic Mean'),
    'units': ('Units', 'Units of Measure'),
    'daily_aqi_value': ('Daily AQI Value', 'AQI'),
    'site_name': ('Local Site Name',),
    'county': ('County', 'County Name'),
    'site_latitude': ('Site Latitude', 'Latitude'),
    'site_longitude': ('Site Longitude', 'Longitude'),
}

# AQS bulk files split the site identifier into three codes
SITE_CODE_COLUMNS = ('State Code', 'County Code', 'Site Num')

DATE_FORMATS = ('%m/%d/%Y', '%Y-%m-%d')


class ImportFileError(Exception):
    """The file as a whole cannot be imported."""


class ImportRowError(ValueError):
    """A single CSV record is unusable."""


class ImportResult:
    """Counters collected over one import run."""

    def __init__(self):
        self.created = 0
        self.skipped = 0
        self.errors = []

    def skip(self, line, message):
        self.skipped += 1
        self.errors.append((line, message))

    def __repr__(self):
        return f'<ImportResult created:{self.created} skipped:{self.skipped}>'


def _lookup(row, field):
    for column in FIELD_ALIASES[field]:
        value = row.get(column)
        if value is not None and value.strip() != '':
            return value.strip()
    return None


def _has_column(fieldnames, field):
    return any(column in fieldnames for column in FIELD_ALIASES[field])


def missing_columns(fieldnames):
    """Return the required logical fields the header does not provide."""
    fieldnames = fieldnames or []
    missing = [f for f in ('date', 'daily_mean_pm25') if not _has_column(fieldnames, f)]
    if not _has_column(fieldnames, 'site_id') and not all(c in fieldnames for c in SITE_CODE_COLUMNS):
        missing.append('site_id')
    return missing


def _parse_date(value):
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ImportRowError(f'Unrecognised date {value!r}')


def _parse_float(value, field):
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        raise ImportRowError(f'Invalid number {value!r} for {field}')
    # float() accepts nan and inf
    if not math.isfinite(number):
        raise ImportRowError(f'Invalid number {value!r} for {field}')
    return number


def _site_id(row):
    site_id = _lookup(row, 'site_id')
    if site_id:
        return site_id

    codes = [(row.get(c) or '').strip() for c in SITE_CODE_COLUMNS]
    if all(codes):
        try:
            state, county, site = (int(c) for c in codes)
        except ValueError:
            raise ImportRowError(f'Invalid site codes {codes!r}')
        return f'{state:02d}{county:03d}{site:04d}'
    return None


def parse_row(row):
    """Map one CSV record to AirQuality keyword arguments.

    Raises ImportRowError when the date, site or PM2.5 value is missing or
    malformed. A blank AQI is derived from the PM2.5 value.
    """
    raw_date = _lookup(row, 'date')
    if raw_date is None:
        raise ImportRowError('Missing date')

    site_id = _site_id(row)
    if site_id is None:
        raise ImportRowError('Missing site id')

    pm25 = _parse_float(_lookup(row, 'daily_mean_pm25'), 'daily_mean_pm25')
    if pm25 is None:
        raise ImportRowError('Missing PM2.5 value')

    aqi = _parse_float(_lookup(row, 'daily_aqi_value'), 'daily_aqi_value')
    poc = _parse_float(_lookup(row, 'poc'), 'poc')

    return {
        'date': _parse_date(raw_date),
        'site_id': site_id,
        'poc': int(poc) if poc is not None else 1,
        'daily_mean_pm25': pm25,
        'units': _lookup(row, 'units'),
        'daily_aqi_value': int(round(aqi)) if aqi is not None else calculate_aqi(pm25),
        'site_name': _lookup(row, 'site_name'),
        'county': _lookup(row, 'county'),
        'site_latitude': _parse_float(_lookup(row, 'site_latitude'), 'site_latitude'),
        'site_longitude': _parse_float(_lookup(row, 'site_longitude'), 'site_longitude'),
    }


def import_csv(stream, clear=False):
    """
    Import every usable record from a CSV text stream.

    Invalid rows and rows repeating an existing (site, POC, date) are
    skipped and reported; everything else is committed in one transaction.

    Args:
        stream: Open text stream positioned at the header line
        clear: Delete all existing rows first

    Returns:
        ImportResult with created/skipped counts and per-line errors
    """
    reader = csv.DictReader(stream)
    missing = missing_columns(reader.fieldnames)
    if missing:
        raise ImportFileError(f'Missing required columns: {", ".join(missing)}')

    result = ImportResult()

    try:
        if clear:
            deleted = AirQuality.query.delete()
            logger.info('Cleared %d existing rows', deleted)

        seen = {
            tuple(key) for key in
            db.session.query(AirQuality.site_id, AirQuality.poc, AirQuality.date).all()
        }

        # Header is line 1
        for line, row in enumerate(reader, start=2):
            try:
                values = parse_row(row)
            except ImportRowError as e:
                result.skip(line, str(e))
                continue

            key = (values['site_id'], values['poc'], values['date'])
            if key in seen:
                result.skip(line, f'Duplicate reading for site {key[0]} on {key[2].isoformat()}')
                continue

            seen.add(key)
            db.session.add(AirQuality(**values))
            result.created += 1

        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('CSV import failed')
        raise

    logger.info('Imported %d rows (%d skipped)', result.created, result.skipped)
    return result


def import_csv_file(path, clear=False):
    """Open a CSV file and import it."""
    if not os.path.exists(path):
        raise ImportFileError(f'File not found: {path}')

    # utf-8-sig strips the BOM the EPA exports carry
    with open(path, 'r', encoding='utf-8-sig', newline='') as f:
        return import_csv(f, clear=clear)


def download_csv(url, dest, timeout=30):
    """Download a CSV file to disk and return the number of bytes written."""
    dest_dir = os.path.dirname(dest)
    if dest_dir:
        os.makedirs(dest_dir, exist_ok=True)

    logger.info('Downloading %s', url)
    written = 0
    with requests.get(url, stream=True, timeout=timeout) as resp:
        resp.raise_for_status()
        with open(dest, 'wb') as f:
            for chunk in resp.iter_content(chunk_size=64 * 1024):
                if chunk:
                    f.write(chunk)
                    written += len(chunk)

    logger.info('Saved %s (%d bytes)', dest, written)
    return written
