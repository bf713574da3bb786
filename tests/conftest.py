from datetime import date

import pytest

from aqviz import create_app
from aqviz.config import TestConfig
from aqviz.extensions import db
from aqviz.models import AirQuality


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def _reading(site_id, site_name, day, pm25, aqi, lat=None, lng=None, county='Los Angeles'):
    return AirQuality(
        date=day,
        site_id=site_id,
        poc=1,
        daily_mean_pm25=pm25,
        units='ug/m3 LC',
        daily_aqi_value=aqi,
        site_name=site_name,
        county=county,
        site_latitude=lat,
        site_longitude=lng,
    )


@pytest.fixture()
def seeded(app):
    # Two sites with coordinates, one without
    rows = [
        _reading('060370002', 'Azusa', date(2024, 1, 1), 10.0, 42, 34.1361, -117.9239),
        _reading('060370002', 'Azusa', date(2024, 1, 2), 20.0, 68, 34.1361, -117.9239),
        _reading('060371103', 'Los Angeles-North Main Street', date(2024, 1, 1), 30.0, 89, 34.0664, -118.2267),
        _reading('060371103', 'Los Angeles-North Main Street', date(2024, 1, 2), 40.0, 112, 34.0664, -118.2267),
        _reading('060371103', 'Los Angeles-North Main Street', date(2024, 1, 3), 50.0, 137, 34.0664, -118.2267),
        _reading('060379033', 'Lancaster', date(2024, 1, 3), 4.0, 17),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return rows
