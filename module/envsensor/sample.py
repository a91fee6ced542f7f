# Copyright (c) arlotito. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for full license information.
import logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.DEBUG)

import random

from envsensor.client import DigitalTwinClient
from envsensor.interface import EnvironmentalSensorInterface

DEFAULT_INTERFACE_NAME = "environmentalSensor"


class DigitalTwinClientSample():
    def __init__(self, digital_twin_client: DigitalTwinClient, interface_name: str = DEFAULT_INTERFACE_NAME) -> None:
        self.digital_twin_client = digital_twin_client
        self.environmental_sensor = EnvironmentalSensorInterface(digital_twin_client, interface_name)

    async def runSample(self):
        await self.digital_twin_client.connect()
        await self.digital_twin_client.registerInterface(self.environmental_sensor)

        logger.info("reporting device state...")
        await self.environmental_sensor.deviceStateProperty(True)

        logger.info("sending telemetry...")
        await self.environmental_sensor.sendTemperature(round(random.uniform(10, 40), 1))
        await self.environmental_sensor.sendHumidity(round(random.uniform(20, 80), 1))
