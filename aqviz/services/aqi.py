"""
AQI Calculation Services

EPA-style AQI calculations and category helpers.
"""

import math

# (pm25 low, pm25 high, aqi low, aqi high), 24-hour PM2.5 table
PM25_BREAKPOINTS = [
    (0.0, 12.0, 0, 50),
    (12.1, 35.4, 51, 100),
    (35.5, 55.4, 101, 150),
    (55.5, 150.4, 151, 200),
    (150.5, 250.4, 201, 300),
    (250.5, 350.4, 301, 400),
    (350.5, 500.4, 401, 500)
]

AQI_CATEGORIES = [
    (50, 'Good', '#00e400', 'Air quality is satisfactory'),
    (100, 'Moderate', '#ffff00', 'Air quality is acceptable'),
    (150, 'Unhealthy for Sensitive Groups', '#ff7e00', 'Sensitive individuals should limit outdoor activity'),
    (200, 'Unhealthy', '#ff0000', 'Everyone may experience health effects'),
    (300, 'Very Unhealthy', '#8f3f97', 'Health alert: serious effects possible'),
]

HAZARDOUS = ('Hazardous', '#7e0023', 'Health warning of emergency conditions')


def calculate_aqi(pm25):
    """Calculate AQI from a PM2.5 value using the EPA formula"""
    if pm25 <= 0:
        return 0

    # EPA truncates concentrations to one decimal before the lookup
    pm25 = math.floor(round(pm25 * 10, 6)) / 10

    for bp_lo, bp_hi, aqi_lo, aqi_hi in PM25_BREAKPOINTS:
        if bp_lo <= pm25 <= bp_hi:
            aqi = ((aqi_hi - aqi_lo) / (bp_hi - bp_lo)) * (pm25 - bp_lo) + aqi_lo
            return int(round(aqi))

    return 500


def aqi_category(aqi):
    """Get the EPA category for an AQI value"""
    if aqi is None:
        return {'level': 'No Data', 'color': '#cccccc', 'description': 'No AQI value available'}

    for upper, level, color, description in AQI_CATEGORIES:
        if aqi <= upper:
            return {'level': level, 'color': color, 'description': description}

    level, color, description = HAZARDOUS
    return {'level': level, 'color': color, 'description': description}
