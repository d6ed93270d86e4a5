import pytest

from benchstop.config.errors import ConfigurationError


@pytest.mark.parametrize(
    ("factory", "args", "expected"),
    [
        (
            ConfigurationError.invalid_value,
            ("name", 0, "must be positive"),
            "Invalid value for name: 0. must be positive",
        ),
        (
            ConfigurationError.load_failed,
            ("dotenv file", "/bench/.env"),
            "Failed to load dotenv file for /bench/.env",
        ),
    ],
)
def test_configuration_error_factories(factory, args, expected):
    error = factory(*args)
    assert isinstance(error, ConfigurationError)
    assert str(error) == expected
