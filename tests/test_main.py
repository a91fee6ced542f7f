# Copyright (c) arlotito. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for full license information.
import asyncio
from unittest import mock

import pytest

import main


@pytest.fixture(autouse=True)
def no_env(monkeypatch):
    monkeypatch.delenv(main.CONNECTION_STRING_ENV, raising=False)
    monkeypatch.delenv(main.INTERFACE_NAME_ENV, raising=False)


def test_connection_string_from_env_wins(monkeypatch):
    monkeypatch.setenv(main.CONNECTION_STRING_ENV, "from-env")
    assert main.get_connection_string(["from-args"]) == "from-env"


def test_connection_string_from_first_argument():
    assert main.get_connection_string(["from-args", "other"]) == "from-args"
    assert main.get_connection_string([]) is None


def test_missing_connection_string_exits_with_1():
    assert main.main([]) == 1


def test_bad_connection_string_exits_with_1(monkeypatch):
    create = mock.Mock(side_effect=ValueError("bad connection string"))
    monkeypatch.setattr(main.IoTHubDeviceClient, "create_from_connection_string", create)

    assert main.main(["garbage"]) == 1


def test_runs_sample_over_mqtt(monkeypatch):
    device_client = mock.Mock()
    create = mock.Mock(return_value=device_client)
    run = mock.AsyncMock()
    monkeypatch.setattr(main.IoTHubDeviceClient, "create_from_connection_string", create)
    monkeypatch.setattr(main, "run", run)
    monkeypatch.setenv(main.INTERFACE_NAME_ENV, "mySensor")

    assert main.main(["HostName=h;DeviceId=d;SharedAccessKey=k"]) == 0
    create.assert_called_once_with("HostName=h;DeviceId=d;SharedAccessKey=k", websockets=False)
    run.assert_awaited_once_with(device_client, "mySensor")


def test_run_shuts_down_when_console_is_closed(device_client, monkeypatch):
    def closed_input(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed_input)
    asyncio.run(main.run(device_client, "sensor"))

    device_client.connect.assert_awaited_once()
    device_client.shutdown.assert_awaited_once()


def test_run_shuts_down_after_user_presses_enter(device_client, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt="": "")
    asyncio.run(main.run(device_client, "sensor"))

    device_client.shutdown.assert_awaited_once()


def test_run_shuts_down_when_sample_fails(device_client):
    device_client.connect.side_effect = ConnectionError("hub unreachable")

    with pytest.raises(ConnectionError):
        asyncio.run(main.run(device_client, "sensor"))

    device_client.shutdown.assert_awaited_once()
    device_client.get_twin.assert_not_awaited()
