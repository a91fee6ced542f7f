# Copyright (c) arlotito. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for full license information.
import logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.DEBUG)

import asyncio

from envsensor.models import PropertyUpdate, PropertyReport, PropertyResponse, CommandRequest, CommandResponse

ENVIRONMENTAL_SENSOR_INTERFACE_ID = "urn:csharp_sdk_sample:EnvironmentalSensor:1"

# property, telemetry and command names as seen on the wire
DEVICE_STATE = "state"
CUSTOMER_NAME = "name"
BRIGHTNESS = "brightness"
TEMPERATURE = "temp"
HUMIDITY = "humid"
BLINK_COMMAND_NAME = "blink"
TURN_ON_LIGHT_COMMAND = "turnon"
TURN_OFF_LIGHT_COMMAND = "turnoff"

# seconds the simulated sensor takes to apply a new brightness
BRIGHTNESS_ACTUATION_DELAY = 5


class EnvironmentalSensorInterface():
    def __init__(self, client, interface_name: str, actuation_delay: float = BRIGHTNESS_ACTUATION_DELAY) -> None:
        # 'client' is anything exposing reportProperties() and sendTelemetry()
        # coroutines, i.e. a DigitalTwinClient
        self.client = client
        self.interface_id = ENVIRONMENTAL_SENSOR_INTERFACE_ID
        self.interface_name = interface_name
        self.is_command_enabled = True
        self.is_property_updated_enabled = True
        self.actuation_delay = actuation_delay

        self.property_handlers = {
            CUSTOMER_NAME: self.setCustomerName,
            BRIGHTNESS: self.setBrightness,
        }

    async def reportProperties(self, reports):
        await self.client.reportProperties(self.interface_name, reports)

    async def sendTelemetry(self, name: str, value: str):
        await self.client.sendTelemetry(self.interface_name, name, value)

    # Processes an update of the customer name. The value is accepted as it
    # is and acknowledged right away.
    #
    # Parameters
    # ----------
    # update : PropertyUpdate
    #   the desired value as received from the cloud
    #
    async def setCustomerName(self, update: PropertyUpdate):
        logger.info("Desired customer name = '{}'.".format(update.property_desired))
        logger.info("Reported customer name = '{}'.".format(update.property_reported))
        logger.info("Version is '{}'.".format(update.desired_version))

        await self.reportProperties([PropertyReport(
            update.property_name,
            update.property_desired,
            PropertyResponse(update.desired_version, 200, "Processing Completed"))])
        logger.info("Sent completed status.")

    # Processes an update of the light brightness. Changing the brightness
    # takes a while on the sensor, so the request is acknowledged as pending
    # first and completed once the sensor is done.
    #
    # Parameters
    # ----------
    # update : PropertyUpdate
    #   the desired value as received from the cloud
    #
    async def setBrightness(self, update: PropertyUpdate):
        current = 0

        logger.info("Desired brightness = '{}'.".format(update.property_desired))
        logger.info("Reported brightness = '{}'.".format(update.property_reported))
        logger.info("Version is '{}'.".format(update.desired_version))

        # report pending
        await self.reportProperties([PropertyReport(
            update.property_name,
            str(current),
            PropertyResponse(update.desired_version, 102, "Processing Request"))])
        logger.info("Sent pending status for brightness property.")

        # pretend the sensor is applying the new brightness
        await asyncio.sleep(self.actuation_delay)

        # report completed
        await self.reportProperties([PropertyReport(
            update.property_name,
            update.property_desired,
            PropertyResponse(update.desired_version, 200, "Request completed"))])
        logger.info("Sent completed status for brightness property.")

    async def deviceStateProperty(self, state: bool):
        await self.reportProperties([PropertyReport(DEVICE_STATE, str(state).lower())])

    async def sendTemperature(self, temperature: float):
        await self.sendTelemetry(TEMPERATURE, str(temperature))

    async def sendHumidity(self, humidity: float):
        await self.sendTelemetry(HUMIDITY, str(humidity))

    def onCommandRequest(self, request: CommandRequest) -> CommandResponse:
        logger.info("Command - {} was invoked from the service".format(request.name))
        logger.info("Data - {}".format(request.payload))
        logger.info("Request Id - {}.".format(request.request_id))

        # TODO: route blink/turnon/turnoff to their own handlers and payloads
        return CommandResponse(200, '{"payload": "data"}')

    # Routes a desired property update to the handler for that property.
    # Properties without a handler are logged and dropped.
    #
    # Parameters
    # ----------
    # update : PropertyUpdate
    #
    async def onPropertyUpdated(self, update: PropertyUpdate):
        logger.info("Received updates for property '{}'".format(update.property_name))

        handler = self.property_handlers.get(update.property_name)
        if handler is None:
            logger.info("Property name '{}' is not handled.".format(update.property_name))
            return

        await handler(update)
