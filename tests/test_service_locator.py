import pytest

from retail_gui.services.navigation_service import NavigationService
from retail_gui.services.service_locator import (
    NAVIGATION,
    OPERATION_GUARD,
    SETTINGS,
    ServiceAlreadyRegisteredError,
    ServiceLocator,
    ServiceNotFoundError,
    services,
)


def test_register_and_get():
    services.register(SETTINGS, {"env": "test"})
    assert services.get(SETTINGS)["env"] == "test"


def test_double_register_raises_unless_replacing():
    services.register(NAVIGATION, 1)
    with pytest.raises(ServiceAlreadyRegisteredError):
        services.register(NAVIGATION, 2)
    services.register(NAVIGATION, 3, replace=True)
    assert services.get(NAVIGATION) == 3


def test_get_typed_checks_type():
    services.register(NAVIGATION, NavigationService())
    assert isinstance(services.get_typed(NAVIGATION, NavigationService), NavigationService)
    services.register(OPERATION_GUARD, object())
    with pytest.raises(TypeError, match="expected NavigationService"):
        services.get_typed(OPERATION_GUARD, NavigationService)


def test_missing_key():
    with pytest.raises(ServiceNotFoundError):
        services.get(OPERATION_GUARD)
    assert services.try_get(OPERATION_GUARD) is None
    assert services.try_get(OPERATION_GUARD, 123) == 123


def test_clear_and_local_instance_isolated():
    local = ServiceLocator()
    local.register(SETTINGS, 1)
    assert services.try_get(SETTINGS) is None
    local.clear()
    assert local.try_get(SETTINGS) is None
