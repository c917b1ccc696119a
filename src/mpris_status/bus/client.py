"""D-Bus client for reading the MPRIS Metadata property of a running player."""

import asyncio
from typing import Dict

from dbus_next import BusType, Message, MessageType, Variant
from dbus_next.aio import MessageBus
from dbus_next.errors import AuthError
from loguru import logger

from mpris_status.core.config import BusConfig

PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"
SERVICE_UNKNOWN = "org.freedesktop.DBus.Error.ServiceUnknown"


class BusError(Exception):
    """Fatal failure talking to the session bus."""

    def __init__(self, message: str, error_name: str | None = None):
        super().__init__(message)
        self.error_name = error_name


class PlayerNotRunningError(BusError):
    """The player's well-known name is not owned on the bus."""


def build_metadata_request(config: BusConfig) -> Message:
    """
    Build the Properties.Get call for the player's Metadata property.

    Raises:
        BusError: If the bus name, object path or interface is malformed
    """
    try:
        return Message(
            destination=config.bus_name,
            path=config.object_path,
            interface=PROPERTIES_INTERFACE,
            member="Get",
            signature="ss",
            body=[config.player_interface, config.property_name],
        )
    except (TypeError, ValueError) as e:
        raise BusError(f"Could not build request: {e}") from e


def unpack_reply(reply: Message) -> Dict[str, Variant]:
    """
    Extract the metadata dictionary from a Properties.Get reply.

    Raises:
        PlayerNotRunningError: If the bus reports ServiceUnknown
        BusError: For any other error reply
    """
    if reply.message_type == MessageType.ERROR:
        detail = reply.body[0] if reply.body and isinstance(reply.body[0], str) else reply.error_name
        if reply.error_name == SERVICE_UNKNOWN:
            raise PlayerNotRunningError(detail, error_name=reply.error_name)
        raise BusError(detail, error_name=reply.error_name)

    if not reply.body:
        logger.warning("Reply does not have arguments")
        return {}

    value = reply.body[0]
    if isinstance(value, Variant):
        value = value.value
    if not isinstance(value, dict):
        logger.warning(f"Expected a metadata dictionary, got {type(value).__name__}")
        return {}

    return value


async def _fetch_metadata(config: BusConfig) -> Dict[str, Variant]:
    request = build_metadata_request(config)

    try:
        bus = MessageBus(bus_type=BusType.SESSION)
    except (OSError, ValueError) as e:
        raise BusError(f"Could not connect to the session bus: {e}") from e

    # The constructor already opened the socket
    try:
        await bus.connect()
    except (OSError, ValueError, AuthError) as e:
        bus.disconnect()
        raise BusError(f"Could not connect to the session bus: {e}") from e

    try:
        logger.debug(f"Requesting {config.property_name} from {config.bus_name}")
        reply = await bus.call(request)
        return unpack_reply(reply)
    except OSError as e:
        raise BusError(f"Bus connection failed: {e}") from e
    finally:
        bus.disconnect()


def fetch_metadata(config: BusConfig) -> Dict[str, Variant]:
    """
    Fetch the player's Metadata dictionary with one blocking round trip.

    Args:
        config: Bus addressing for the player

    Returns:
        Mapping of metadata key to variant value

    Raises:
        PlayerNotRunningError: If the player is not on the bus
        BusError: On any other connection or bus failure
    """
    return asyncio.run(_fetch_metadata(config))
