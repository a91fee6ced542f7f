# Copyright (c) arlotito. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for full license information.
from unittest import mock

import pytest


class RecordingClient():
    """Stands in for DigitalTwinClient and records what the interface sends."""

    def __init__(self) -> None:
        self.reports = []
        self.telemetry = []

    async def reportProperties(self, interface_name, reports):
        self.reports.append((interface_name, list(reports)))

    async def sendTelemetry(self, interface_name, name, value):
        self.telemetry.append((interface_name, name, value))


@pytest.fixture
def recording_client():
    return RecordingClient()


@pytest.fixture
def device_client():
    client = mock.MagicMock()
    client.connect = mock.AsyncMock()
    client.shutdown = mock.AsyncMock()
    client.get_twin = mock.AsyncMock(return_value={"desired": {"$version": 1}, "reported": {"$version": 1}})
    client.patch_twin_reported_properties = mock.AsyncMock()
    client.send_message = mock.AsyncMock()
    client.send_method_response = mock.AsyncMock()
    return client
