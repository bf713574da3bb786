"""Smoke-check every chart endpoint against the configured database."""
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import app

ENDPOINTS = [
    '/health',
    '/api/v1/get-template?limit=3',
    '/api/v1/air-quality-data',
    '/api/v1/site-comparison',
    '/api/v1/time-trends',
    '/api/v1/map-data',
]

failed = False
with app.test_client() as client:
    for path in ENDPOINTS:
        r = client.get(path)
        data = r.get_json()
        size = len(data) if isinstance(data, list) else '-'
        print(f'{r.status_code} {path} rows={size}')
        if r.status_code != 200:
            failed = True
            print('   ', data)

sys.exit(1 if failed else 0)
