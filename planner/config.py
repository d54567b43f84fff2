import os

PACKAGE_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')


class Config:
    CALENDARIFIC_KEY = os.environ.get('CALENDARIFIC_KEY')
    CALENDARIFIC_URL = os.environ.get('CALENDARIFIC_URL',
                                      'https://calendarific.com/api/v2/holidays')
    NAGER_COUNTRIES_URL = os.environ.get('NAGER_COUNTRIES_URL',
                                         'https://date.nager.at/api/v3/AvailableCountries')
    HTTP_TIMEOUT = float(os.environ.get('PLANNER_HTTP_TIMEOUT', 10))

    DATA_DIR = os.environ.get('PLANNER_DATA_DIR', PACKAGE_DATA_DIR)
    COUNTRY_TABLE_FILE = 'countryTable.json'
    CULTURAL_HOLIDAYS_FILE = 'cultural-holidays.json'
    CALENDARIFIC_HOLIDAYS_FILE = 'calendarific-holidays.json'

    # calendar_stride | monday_aligned
    WEEK_ALIGNMENT = os.environ.get('PLANNER_WEEK_ALIGNMENT', 'calendar_stride')
    # none | all: what is pre-selected for countries and grades
    DEFAULT_SELECTION = os.environ.get('PLANNER_DEFAULT_SELECTION', 'none').lower()

    LOG_LEVEL = os.environ.get('PLANNER_LOG_LEVEL', 'INFO').upper()

    @classmethod
    def data_path(cls, filename):
        return os.path.join(cls.DATA_DIR, filename)
