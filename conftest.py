import logging

from hypothesis import settings, HealthCheck
from pytest import fixture
from csc import config

# turn off Numba logging
logging.getLogger('numba').setLevel(logging.INFO)


@fixture
def validating():
    """
    Fixture that turns on structural validation for the duration of a test.
    """
    with config.use_validation(True):
        yield


# set up profiles
settings.register_profile('default', deadline=5000)
settings.register_profile('large', settings.get_profile('default'),
                          max_examples=5000, deadline=None)
settings.register_profile('fast', max_examples=50)
settings.register_profile('nojit', settings.get_profile('fast'),
                          deadline=None, suppress_health_check=list(HealthCheck))
settings.load_profile('default')
