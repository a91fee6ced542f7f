# Copyright (c) arlotito. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for full license information.
import logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.DEBUG)

import asyncio
import json
import typing

from azure.iot.device import Message, MethodResponse

from envsensor.models import PropertyUpdate, CommandRequest

INTERFACE_PREFIX = "$iotin:"
COMMAND_SEPARATOR = "*"


class DigitalTwinClient():
    """Digital twin view over an azure-iot-device IoTHubDeviceClient.

    Interfaces registered here receive their desired property updates and
    commands, and report properties and telemetry through this client.
    """

    def __init__(self, device_client) -> None:
        self.device_client = device_client
        self.interfaces = {}

        # last value reported per interface: {"<interfaceName>": {"<property>": "<value>"}}
        self.reported = {}

    async def connect(self):
        logger.info("connecting the device client...")
        await self.device_client.connect()

    async def shutdown(self):
        await self.device_client.shutdown()

    # Registers an interface, hooks the SDK callbacks and applies the desired
    # properties already present in the twin.
    #
    # Parameters
    # ----------
    # interface : EnvironmentalSensorInterface
    #   any object exposing 'interface_name', 'onPropertyUpdated()' and
    #   'onCommandRequest()'
    #
    async def registerInterface(self, interface):
        logger.info("registering interface '{}' ({})".format(interface.interface_name, interface.interface_id))
        self.interfaces[interface.interface_name] = interface
        self.reported.setdefault(interface.interface_name, {})

        self.device_client.on_twin_desired_properties_patch_received = self.extractPropertiesFromTwin
        self.device_client.on_method_request_received = self.handleMethodRequest

        # routes only the section of the interface being registered
        twin = await self.device_client.get_twin()
        self.loadReported(twin, interface.interface_name)
        await self.extractPropertiesFromTwin(twin, interface.interface_name)

    def loadReported(self, twin, interface_name: str):
        section = twin.get("reported", {}).get(INTERFACE_PREFIX + interface_name)
        if not isinstance(section, dict):
            return
        for prop, body in section.items():
            if isinstance(body, dict) and "value" in body:
                self.reported[interface_name][prop] = body["value"]

    # Extracts the desired properties from the twin (full or patch) and routes
    # them to the registered interfaces.
    #
    # Parameters
    # ----------
    # twin : dict
    #   it's the full or patch twin, as received by 'get_twin()' or the
    #   desired properties patch handler
    #   {"$iotin:<interfaceName>": {"<property>": {"value": ...}}, "$version": n}
    # interface_name : str
    #   routes only that interface when set, all registered ones otherwise
    #
    async def extractPropertiesFromTwin(self, twin, interface_name: typing.Optional[str] = None):
        if "desired" in twin:
            logger.debug("FULL TWIN received...")
            root = twin["desired"]
        else:
            logger.debug("TWIN PATCH received...")
            root = twin

        version = root.get("$version", 0)
        updates = []

        for key in root:
            if not key.startswith(INTERFACE_PREFIX):
                continue

            name = key[len(INTERFACE_PREFIX):]
            if interface_name is not None and name != interface_name:
                continue

            interface = self.interfaces.get(name)
            if interface is None:
                logger.debug("no interface registered for '{}'".format(name))
                continue
            if not interface.is_property_updated_enabled or not isinstance(root[key], dict):
                continue

            for prop, body in root[key].items():
                if not isinstance(body, dict) or "value" not in body:
                    logger.debug("PATCH: skipping '{}' on '{}'".format(prop, name))
                    continue

                logger.debug("PATCH: interface: {}, property: {}, value: {}".format(name, prop, body["value"]))
                update = PropertyUpdate(prop, body["value"], self.reported[name].get(prop), version)
                updates.append(interface.onPropertyUpdated(update))

        if len(updates) == 0:
            logger.debug("no properties found in twin")
            return

        await asyncio.gather(*updates)

    async def handleMethodRequest(self, method_request):
        status, payload = self.dispatchCommand(method_request.name, method_request.payload, method_request.request_id)
        method_response = MethodResponse.create_from_method_request(method_request, status, payload)
        await self.device_client.send_method_response(method_response)

    # Maps an IoT Hub method call to a command on a registered interface.
    #
    # Parameters
    # ----------
    # method_name : str
    #   '$iotin:<interfaceName>*<commandName>'
    # payload :
    #   the method payload, '{"commandRequest": {"value": ..., "requestId": ...}}'
    # request_id : str
    #
    # Returns
    # -------
    # tuple
    #   (status, payload) for the method response
    #
    def dispatchCommand(self, method_name: str, payload, request_id: str):
        interface = None
        command_name = method_name
        if method_name.startswith(INTERFACE_PREFIX) and COMMAND_SEPARATOR in method_name:
            name, command_name = method_name[len(INTERFACE_PREFIX):].split(COMMAND_SEPARATOR, 1)
            interface = self.interfaces.get(name)

        if interface is None or not interface.is_command_enabled:
            logger.error("'{}' is not a command of a registered interface".format(method_name))
            return 404, {"error": "unknown command '{}'".format(method_name)}

        if isinstance(payload, dict) and isinstance(payload.get("commandRequest"), dict):
            payload = payload["commandRequest"].get("value")
        if payload is None:
            payload = ""
        elif not isinstance(payload, str):
            payload = json.dumps(payload)

        response = interface.onCommandRequest(CommandRequest(command_name, payload, request_id))
        return response.status, json.loads(response.payload)

    async def reportProperties(self, interface_name: str, reports):
        section = {}
        for report in reports:
            body = {"value": report.value}
            if report.response is not None:
                body["sc"] = report.response.status_code
                body["sd"] = report.response.status_description
                body["sv"] = report.response.respond_version
            section[report.property_name] = body

        patch = {INTERFACE_PREFIX + interface_name: section}
        logger.debug("reporting {}".format(patch))
        await self.device_client.patch_twin_reported_properties(patch)

        cache = self.reported.setdefault(interface_name, {})
        for report in reports:
            cache[report.property_name] = report.value

    async def sendTelemetry(self, interface_name: str, name: str, value: str):
        msg = Message(json.dumps({name: value}))
        msg.content_encoding = "utf-8"
        msg.content_type = "application/json"
        msg.custom_properties["$.ifname"] = interface_name
        interface = self.interfaces.get(interface_name)
        if interface is not None:
            msg.custom_properties["$.ifid"] = interface.interface_id

        logger.debug("sending telemetry {}={}".format(name, value))
        await self.device_client.send_message(msg)
