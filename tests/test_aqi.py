from aqviz.services.aqi import calculate_aqi, aqi_category


def test_calculate_aqi_breakpoints():
    assert calculate_aqi(0) == 0
    assert calculate_aqi(12.0) == 50
    assert calculate_aqi(12.1) == 51
    assert calculate_aqi(35.4) == 100
    assert calculate_aqi(35.5) == 101
    assert calculate_aqi(55.4) == 150
    assert calculate_aqi(500.4) == 500


def test_calculate_aqi_truncates_to_one_decimal():
    # 12.05 falls between the first two bands until truncated to 12.0
    assert calculate_aqi(12.05) == 50
    assert calculate_aqi(2.3) == calculate_aqi(2.35)


def test_calculate_aqi_out_of_range():
    assert calculate_aqi(-1.5) == 0
    assert calculate_aqi(750) == 500


def test_aqi_category_levels():
    assert aqi_category(0)['level'] == 'Good'
    assert aqi_category(50)['level'] == 'Good'
    assert aqi_category(51)['level'] == 'Moderate'
    assert aqi_category(100)['level'] == 'Moderate'
    assert aqi_category(150)['level'] == 'Unhealthy for Sensitive Groups'
    assert aqi_category(200)['level'] == 'Unhealthy'
    assert aqi_category(300)['level'] == 'Very Unhealthy'
    assert aqi_category(301)['level'] == 'Hazardous'
    assert aqi_category(301)['color'] == '#7e0023'


def test_aqi_category_without_value():
    category = aqi_category(None)
    assert category['level'] == 'No Data'
    assert 'color' in category
