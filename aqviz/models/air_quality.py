"""
Air Quality Model
"""

from aqviz.extensions import db


class AirQuality(db.Model):
    """One daily PM2.5 measurement for one monitoring site"""
    __tablename__ = 'air_quality'
    __table_args__ = (
        db.UniqueConstraint('site_id', 'poc', 'date', name='uq_air_quality_site_day'),
    )

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False, index=True)
    site_id = db.Column(db.String(20), nullable=False, index=True)
    poc = db.Column(db.Integer, nullable=False, default=1)
    daily_mean_pm25 = db.Column(db.Float, nullable=False)
    units = db.Column(db.String(20))
    daily_aqi_value = db.Column(db.Integer)
    site_name = db.Column(db.String(255))
    county = db.Column(db.String(100))
    site_latitude = db.Column(db.Float)
    site_longitude = db.Column(db.Float)

    def to_dict(self):
        return {
            'id': self.id,
            'date': self.date.isoformat(),
            'site_id': self.site_id,
            'poc': self.poc,
            'daily_mean_pm25': self.daily_mean_pm25,
            'units': self.units,
            'daily_aqi_value': self.daily_aqi_value,
            'site_name': self.site_name,
            'county': self.county,
            'site_latitude': self.site_latitude,
            'site_longitude': self.site_longitude,
        }

    def __repr__(self):
        return f'<AirQuality Site:{self.site_id} Date:{self.date} PM2.5:{self.daily_mean_pm25}>'
