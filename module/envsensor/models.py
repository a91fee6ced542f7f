# Copyright (c) arlotito. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for full license information.
import typing


class PropertyUpdate():
    """A desired property change received from the cloud for one interface."""

    def __init__(self, property_name: str, property_desired: str,
                 property_reported: typing.Optional[str] = None, desired_version: int = 0) -> None:
        self._property_name = property_name
        self._property_desired = property_desired
        self._property_reported = property_reported
        self._desired_version = desired_version

    @property
    def property_name(self) -> str:
        return self._property_name

    @property
    def property_desired(self) -> str:
        return self._property_desired

    @property
    def property_reported(self) -> typing.Optional[str]:
        return self._property_reported

    @property
    def desired_version(self) -> int:
        return self._desired_version

    def __repr__(self):
        return "PropertyUpdate({!r}, desired={!r}, reported={!r}, version={})".format(
            self._property_name, self._property_desired, self._property_reported, self._desired_version)


class PropertyResponse():
    def __init__(self, respond_version: int, status_code: int, status_description: str) -> None:
        self.respond_version = respond_version
        self.status_code = status_code
        self.status_description = status_description


class PropertyReport():
    """A reported property value, optionally acknowledging a desired version."""

    def __init__(self, property_name: str, value: str,
                 response: typing.Optional[PropertyResponse] = None) -> None:
        self.property_name = property_name
        self.value = value
        self.response = response

    def __repr__(self):
        if self.response is None:
            return "PropertyReport({!r}, {!r})".format(self.property_name, self.value)
        return "PropertyReport({!r}, {!r}, sv={}, sc={}, sd={!r})".format(
            self.property_name, self.value, self.response.respond_version,
            self.response.status_code, self.response.status_description)


class CommandRequest():
    def __init__(self, name: str, payload: str, request_id: str) -> None:
        self.name = name
        self.payload = payload
        self.request_id = request_id


class CommandResponse():
    # payload is a JSON document serialized as a string
    def __init__(self, status: int, payload: str) -> None:
        self.status = status
        self.payload = payload
