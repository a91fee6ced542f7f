# Copyright (c) arlotito. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for full license information.
import logging
logging.basicConfig(level=logging.ERROR, format='%(asctime)s.%(msecs)03d - [%(levelname)s] - [%(funcName)s] %(message)s', datefmt='%d-%b-%y %H:%M:%S')
logger = logging.getLogger(__name__)
logger.setLevel(level=logging.INFO)

import asyncio
import os
import sys
from azure.iot.device.aio import IoTHubDeviceClient

from envsensor.client import DigitalTwinClient
from envsensor.sample import DigitalTwinClientSample, DEFAULT_INTERFACE_NAME

# String containing Hostname, Device Id & Device Key in one of the following formats:
#  "HostName=<iothub_host_name>;DeviceId=<device_id>;SharedAccessKey=<device_key>"
#  "HostName=<iothub_host_name>;DeviceId=<device_id>;SharedAccessSignature=SharedAccessSignature sr=<iot_host>/devices/<device_id>&sig=<token>&se=<expiry_time>"
CONNECTION_STRING_ENV = "IOTHUB_DEVICE_CONN_STRING"
INTERFACE_NAME_ENV = "ENVSENSOR_INTERFACE_NAME"

# MQTT over TCP; set to True to tunnel MQTT over websockets
USE_WEBSOCKETS = False


def get_connection_string(args):
    conn_str = os.getenv(CONNECTION_STRING_ENV)
    if not conn_str and len(args) > 0:
        conn_str = args[0]
    return conn_str


async def run(device_client, interface_name: str):
    digital_twin_client = DigitalTwinClient(device_client)
    sample = DigitalTwinClientSample(digital_twin_client, interface_name)
    try:
        await sample.runSample()

        # keeps the process alive until the user presses enter
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, input, "Waiting to receive updates from cloud...\n")
        except EOFError:
            # stdin is closed when running detached, e.g. in a container
            logger.info("no console attached, exiting...")
    finally:
        await digital_twin_client.shutdown()


def main(args) -> int:
    conn_str = get_connection_string(args)
    if not conn_str:
        logger.error("no connection string, set {} or pass it as first argument".format(CONNECTION_STRING_ENV))
        return 1

    try:
        device_client = IoTHubDeviceClient.create_from_connection_string(conn_str, websockets=USE_WEBSOCKETS)
    except ValueError as e:
        logger.error("Failed to create DeviceClient! {}".format(e))
        return 1

    interface_name = os.getenv(INTERFACE_NAME_ENV, DEFAULT_INTERFACE_NAME)
    asyncio.run(run(device_client, interface_name))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
