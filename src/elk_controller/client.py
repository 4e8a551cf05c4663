"""High-level Elk M1 client.

``ElkClient`` ties the connection, dispatcher and request correlator together
and exposes one method per panel operation. Commands are fire-and-forget:
write failures are published on the ``error`` channel. Requests return the
decoded reply or raise.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import cast

from elk_controller.protocol import commands
from elk_controller.protocol.frame import Frame
from elk_controller.protocol.messages import (
    ArmingStatusReport,
    ElkMessage,
    KeypadAreasReport,
    OutputStatusReport,
    TemperatureReply,
    TextStringDescriptionReport,
    ThermostatReply,
    ZoneDefinitionReport,
    ZonePartitionReport,
    ZoneStatusReport,
    ZoneVoltageReply,
)
from elk_controller.structs import ConnectOptions
from elk_controller.transport.connection_manager import ElkConnection
from elk_controller.transport.dispatcher import ERROR, EventDispatcher, Subscription
from elk_controller.transport.exceptions import ElkConnectionError
from elk_controller.transport.request_correlator import RequestCorrelator
from elk_controller.transport.retry_policy import ReconnectPolicy

logger = logging.getLogger(__name__)


class ElkClient:
    """Elk M1 panel client over an M1XEP Ethernet interface."""

    def __init__(
        self,
        options: ConnectOptions | None = None,
        reconnect_policy: ReconnectPolicy | None = None,
        connection: ElkConnection | None = None,
    ) -> None:
        self.options: ConnectOptions = options or ConnectOptions.from_env()
        self.dispatcher: EventDispatcher = connection.dispatcher if connection else EventDispatcher()
        self.connection: ElkConnection = connection or ElkConnection(
            self.options,
            self.dispatcher,
            reconnect_policy=reconnect_policy,
        )
        self.correlator: RequestCorrelator = RequestCorrelator(self.dispatcher, self.connection.write_frame)

    # Lifecycle and subscriptions

    async def connect(self) -> None:
        await self.connection.connect()

    async def disconnect(self) -> None:
        await self.connection.disconnect()

    def on(self, channel: str, callback: Callable[..., object]) -> Subscription:
        """Subscribe to a type code, ``*`` for every message, or a lifecycle channel."""
        return self.dispatcher.on(channel, callback)

    def once(self, channel: str, callback: Callable[..., object]) -> Subscription:
        return self.dispatcher.once(channel, callback)

    def off(self, subscription: Subscription) -> None:
        self.dispatcher.off(subscription)

    @property
    def is_connected(self) -> bool:
        return self.connection.is_connected

    def _keypad_code(self, keypad_code: int | str | None) -> int | str:
        return self.options.keypad_code if keypad_code is None else keypad_code

    async def _send_command(self, frame: Frame) -> None:
        try:
            await self.connection.write_frame(frame)
        except ElkConnectionError as e:
            logger.error(
                "✗ Command %s not sent: %s",
                frame.type_code,
                e.reason,
                extra={"type_code": frame.type_code, "state": e.state},
            )
            self.dispatcher.emit(ERROR, e)

    # Commands

    async def arm(self, area_id: int, arm_mode: int, keypad_code: int | str | None = None) -> None:
        """Arm an area; ``arm_mode`` is a key of ``lookups.ARM_MODE`` (1 away, 2 stay, ...)."""
        await self._send_command(commands.encode_arm(area_id, arm_mode, self._keypad_code(keypad_code)))

    async def disarm(self, area_id: int, keypad_code: int | str | None = None) -> None:
        await self._send_command(commands.encode_disarm(area_id, self._keypad_code(keypad_code)))

    async def activate_task(self, task_id: int) -> None:
        await self._send_command(commands.encode_activate_task(task_id))

    async def set_output_on(self, output_id: int, seconds: int = 0) -> None:
        await self._send_command(commands.encode_output_on(output_id, seconds))

    async def set_output_off(self, output_id: int) -> None:
        await self._send_command(commands.encode_output_off(output_id))

    async def toggle_output(self, output_id: int) -> None:
        await self._send_command(commands.encode_toggle_output(output_id))

    async def bypass_zone(
        self,
        zone_id: int | None,
        area_id: int,
        keypad_code: int | str | None = None,
    ) -> None:
        await self._send_command(commands.encode_bypass_zone(zone_id, area_id, self._keypad_code(keypad_code)))

    async def speak(self, message: str) -> None:
        """Speak ``message`` word by word through the panel's voice output."""
        for frame in commands.encode_speak(message):
            await self._send_command(frame)

    async def set_thermostat(self, thermostat_id: int, value: int, element: int) -> None:
        await self._send_command(commands.encode_set_thermostat(thermostat_id, value, element))

    # Requests

    async def request_arming_status(self) -> ArmingStatusReport:
        reply = await self.correlator.request(
            "AS",
            commands.encode_request(commands.ARMING_STATUS_REQUEST),
            timeout=self.options.request_timeout,
            command="Arming Status",
        )
        return cast("ArmingStatusReport", reply)

    async def request_areas(self) -> KeypadAreasReport:
        reply = await self.correlator.request(
            "KA",
            commands.encode_request(commands.KEYPAD_AREAS_REQUEST),
            timeout=self.options.request_timeout,
            command="Area request",
        )
        return cast("KeypadAreasReport", reply)

    async def request_output_status(self) -> OutputStatusReport:
        reply = await self.correlator.request(
            "CS",
            commands.encode_request(commands.OUTPUT_STATUS_REQUEST),
            timeout=self.options.request_timeout,
            command="Control Output Status",
        )
        return cast("OutputStatusReport", reply)

    async def request_system_status(self) -> ElkMessage:
        """System trouble status (SS); returned as a generic message."""
        return await self.correlator.request(
            "SS",
            commands.encode_request(commands.SYSTEM_STATUS_REQUEST),
            timeout=self.options.request_timeout,
            command="System Status",
        )

    async def request_text_description(self, item_id: int, description_type: int | str) -> TextStringDescriptionReport:
        """Fetch one description. The panel may answer with the next configured id."""
        reply = await self.correlator.request(
            "SD",
            commands.encode_text_description_request(description_type, item_id),
            timeout=self.options.request_timeout,
            command="Text Description",
        )
        return cast("TextStringDescriptionReport", reply)

    async def request_text_description_all(
        self,
        description_type: int | str,
        timeout: float | None = None,
    ) -> list[TextStringDescriptionReport]:
        return await self.correlator.request_all_descriptions(
            description_type,
            timeout=timeout if timeout is not None else self.options.description_timeout,
        )

    async def request_zone_definitions(self) -> ZoneDefinitionReport:
        reply = await self.correlator.request(
            "ZD",
            commands.encode_request(commands.ZONE_DEFINITION_REQUEST),
            timeout=self.options.request_timeout,
            command="Zone Definition",
        )
        return cast("ZoneDefinitionReport", reply)

    async def request_zone_partitions(self) -> ZonePartitionReport:
        reply = await self.correlator.request(
            "ZP",
            commands.encode_request(commands.ZONE_PARTITION_REQUEST),
            timeout=self.options.request_timeout,
            command="Zone Partition",
        )
        return cast("ZonePartitionReport", reply)

    async def request_zone_status(self) -> ZoneStatusReport:
        reply = await self.correlator.request(
            "ZS",
            commands.encode_request(commands.ZONE_STATUS_REQUEST),
            timeout=self.options.request_timeout,
            command="Zone Status Report",
        )
        return cast("ZoneStatusReport", reply)

    async def request_zone_voltage(self, zone_id: int) -> ZoneVoltageReply:
        reply = await self.correlator.request(
            "ZV",
            commands.encode_zone_voltage_request(zone_id),
            timeout=self.options.request_timeout,
            command="Zone Voltage Report",
        )
        return cast("ZoneVoltageReply", reply)

    async def request_temperatures(self) -> TemperatureReply:
        reply = await self.correlator.request(
            "LW",
            commands.encode_request(commands.TEMPERATURE_REQUEST),
            timeout=self.options.request_timeout,
            command="Temperature Data",
        )
        return cast("TemperatureReply", reply)

    async def request_thermostat(self, thermostat_id: int) -> ThermostatReply:
        reply = await self.correlator.request(
            "TR",
            commands.encode_thermostat_request(thermostat_id),
            timeout=self.options.request_timeout,
            command="Thermostat Data",
        )
        return cast("ThermostatReply", reply)
