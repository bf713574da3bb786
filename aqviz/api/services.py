"""
API Services

One aggregate query per chart, reshaped into the rows the chart expects.
"""

from sqlalchemy import func

from aqviz.database import query
from aqviz.extensions import db
from aqviz.models import AirQuality
from aqviz.services.aqi import aqi_category


def _round(value, digits=1):
    # PostgreSQL AVG() yields Decimal, SQLite yields float
    if value is None:
        return None
    return round(float(value), digits)


def _isoformat(value):
    return value.isoformat() if hasattr(value, 'isoformat') else value


def get_template_rows(limit):
    """Raw rows straight from the table, dates rendered as ISO strings."""
    rows = query('SELECT * FROM air_quality LIMIT :limit', {'limit': limit})
    return [{key: _isoformat(value) for key, value in row.items()} for row in rows]


def get_latest_readings(limit):
    """Most recent daily readings, newest first."""
    rows = db.session.query(
        AirQuality.date,
        AirQuality.site_name,
        AirQuality.daily_mean_pm25,
        AirQuality.daily_aqi_value
    ).order_by(AirQuality.date.desc(), AirQuality.site_id).limit(limit).all()

    return [{
        'date': r.date.isoformat(),
        'siteName': r.site_name,
        'pm25': r.daily_mean_pm25,
        'aqi': r.daily_aqi_value
    } for r in rows]


def get_site_comparison():
    """Per-site averages, worst average AQI first."""
    avg_aqi = func.avg(AirQuality.daily_aqi_value)
    rows = db.session.query(
        AirQuality.site_id,
        func.max(AirQuality.site_name).label('site_name'),
        func.avg(AirQuality.daily_mean_pm25).label('avg_pm25'),
        avg_aqi.label('avg_aqi'),
        func.max(AirQuality.daily_aqi_value).label('max_aqi'),
        func.count(AirQuality.date.distinct()).label('days')
    ).group_by(AirQuality.site_id).order_by(avg_aqi.desc(), AirQuality.site_id).all()

    return [{
        'siteId': r.site_id,
        'siteName': r.site_name,
        'avgPm25': _round(r.avg_pm25),
        'avgAqi': _round(r.avg_aqi),
        'maxAqi': r.max_aqi,
        'days': r.days
    } for r in rows]


def get_time_trends(start=None, end=None):
    """Daily averages across all sites, oldest first."""
    q = db.session.query(
        AirQuality.date,
        func.avg(AirQuality.daily_mean_pm25).label('avg_pm25'),
        func.avg(AirQuality.daily_aqi_value).label('avg_aqi'),
        func.count(AirQuality.site_id.distinct()).label('sites')
    )
    if start is not None:
        q = q.filter(AirQuality.date >= start)
    if end is not None:
        q = q.filter(AirQuality.date <= end)

    rows = q.group_by(AirQuality.date).order_by(AirQuality.date).all()

    return [{
        'date': r.date.isoformat(),
        'avgPm25': _round(r.avg_pm25),
        'avgAqi': _round(r.avg_aqi),
        'sites': r.sites
    } for r in rows]


def get_map_data():
    """One marker per site that has coordinates."""
    rows = db.session.query(
        AirQuality.site_id,
        func.max(AirQuality.site_name).label('site_name'),
        func.max(AirQuality.county).label('county'),
        func.max(AirQuality.site_latitude).label('lat'),
        func.max(AirQuality.site_longitude).label('lng'),
        func.avg(AirQuality.daily_mean_pm25).label('avg_pm25'),
        func.avg(AirQuality.daily_aqi_value).label('avg_aqi')
    ).filter(
        AirQuality.site_latitude.isnot(None),
        AirQuality.site_longitude.isnot(None)
    ).group_by(AirQuality.site_id).order_by(AirQuality.site_id).all()

    data = []
    for r in rows:
        avg_aqi = _round(r.avg_aqi)
        # AQI categories are defined on whole numbers
        category = aqi_category(int(avg_aqi + 0.5) if avg_aqi is not None else None)
        data.append({
            'siteId': r.site_id,
            'siteName': r.site_name,
            'county': r.county,
            'lat': r.lat,
            'lng': r.lng,
            'avgPm25': _round(r.avg_pm25),
            'avgAqi': avg_aqi,
            'category': category['level'],
            'color': category['color']
        })
    return data
