from unittest.mock import MagicMock

import pytest

from tests.support.postgres import IMAGE, start_postgres


def test_skips_when_the_docker_client_cannot_be_created():
    factory = MagicMock(side_effect=RuntimeError("Error while fetching server API version"))

    with pytest.raises(pytest.skip.Exception, match="postgres container unavailable"):
        start_postgres(factory)


def test_skips_when_the_container_fails_to_start():
    container = MagicMock()
    container.start.side_effect = RuntimeError("pull denied")

    with pytest.raises(pytest.skip.Exception):
        start_postgres(MagicMock(return_value=container))


def test_returns_the_started_container():
    container = MagicMock()
    factory = MagicMock(return_value=container)

    assert start_postgres(factory) is container
    factory.assert_called_once_with(IMAGE, driver="psycopg")
    container.start.assert_called_once_with()
