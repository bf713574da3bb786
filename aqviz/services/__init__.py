"""
Services Package

Exports all services for easy importing.
"""

from aqviz.services.aqi import calculate_aqi, aqi_category
from aqviz.services.importer import (
    ImportFileError,
    ImportRowError,
    ImportResult,
    parse_row,
    import_csv,
    import_csv_file,
    download_csv,
)

__all__ = [
    'calculate_aqi',
    'aqi_category',
    'ImportFileError',
    'ImportRowError',
    'ImportResult',
    'parse_row',
    'import_csv',
    'import_csv_file',
    'download_csv',
]
