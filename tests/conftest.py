"""Shared fixtures: every test starts from pristine process-wide state."""

import pytest
from hypothesis import HealthCheck, settings

from valor.classifiers import (
    clear_registered_entity_types,
    clear_registered_roles,
    clear_registered_statuses,
)
from valor.logging_config import reset_logging
from valor.media import clear_registered_file_extensions, clear_registered_mime_types
from valor.schedule import clear_registered_timezones
from valor.temporal import DEFAULT_LEGAL_AGE, set_legal_age
from valor.units import get_registry

# the autouse reset below only touches registries, safe to share across examples
settings.register_profile(
    "valor",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("valor")


def _clear_registries():
    get_registry().reset()
    clear_registered_file_extensions()
    clear_registered_mime_types()
    clear_registered_statuses()
    clear_registered_roles()
    clear_registered_entity_types()
    clear_registered_timezones()
    set_legal_age(DEFAULT_LEGAL_AGE)


@pytest.fixture(autouse=True)
def _reset_global_state():
    _clear_registries()
    yield
    _clear_registries()
    reset_logging()


@pytest.fixture
def kg():
    """Register the KG unit and return its symbol."""
    get_registry().register(["KG"])
    return "KG"
