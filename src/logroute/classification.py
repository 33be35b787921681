"""
Classification resolver.

Normalizes the caller's inputs into exactly one MessageType, one Destination
and an optional validated color override. MessageType is the single
classification value used inside the library; the eight is_* switches are a
compatibility surface mapped onto it here.
"""

from __future__ import annotations

from logroute.errors import ConfigurationError, ParameterBindingError
from logroute.records import Destination, HostColor, MessageType


MESSAGE_TYPE_SWITCH_ERROR = "Only one Message Type switch parameter may be set"
DESTINATION_SWITCH_ERROR = "Only one Destination switch parameter may be set"

# Switch keyword → the type it selects, in the order switches are documented.
MESSAGE_TYPE_SWITCHES: dict[str, MessageType] = {
    "is_error": MessageType.ERROR,
    "is_warning": MessageType.WARNING,
    "is_information": MessageType.INFORMATION,
    "is_debug": MessageType.DEBUG,
    "is_verbose": MessageType.VERBOSE,
    "is_success_result": MessageType.SUCCESS,
    "is_failure_result": MessageType.FAILURE,
    "is_partial_failure_result": MessageType.PARTIAL_FAILURE,
}


def resolve_message_type(
    message_type: MessageType | str | None = None,
    *,
    is_error: bool = False,
    is_warning: bool = False,
    is_information: bool = False,
    is_debug: bool = False,
    is_verbose: bool = False,
    is_success_result: bool = False,
    is_failure_result: bool = False,
    is_partial_failure_result: bool = False,
) -> MessageType:
    """
    Reduce an explicit type or a single is_* switch to one MessageType.

    Raises:
        ConfigurationError: two or more switches are set, or the explicit
            type is not a known name.
        ParameterBindingError: an explicit type and a switch are both set.
    """
    switches = {
        "is_error": is_error,
        "is_warning": is_warning,
        "is_information": is_information,
        "is_debug": is_debug,
        "is_verbose": is_verbose,
        "is_success_result": is_success_result,
        "is_failure_result": is_failure_result,
        "is_partial_failure_result": is_partial_failure_result,
    }
    selected = [name for name, on in switches.items() if on]

    if len(selected) > 1:
        raise ConfigurationError(MESSAGE_TYPE_SWITCH_ERROR)

    if message_type is not None:
        if selected:
            raise ParameterBindingError(
                f"Parameter set cannot be resolved: message_type and "
                f"{selected[0]} cannot be used together."
            )
        if isinstance(message_type, MessageType):
            return message_type
        if isinstance(message_type, str):
            return MessageType.from_name(message_type)
        raise ConfigurationError(
            f"message_type must be a MessageType or str, got {type(message_type).__name__}"
        )

    if selected:
        return MESSAGE_TYPE_SWITCHES[selected[0]]
    return MessageType.INFORMATION


def resolve_destination(
    default_write_to_host: bool,
    *,
    write_to_host: bool = False,
    write_to_streams: bool = False,
) -> Destination:
    """Per-call switch wins; otherwise the configured default applies."""
    if write_to_host and write_to_streams:
        raise ConfigurationError(DESTINATION_SWITCH_ERROR)
    if write_to_host:
        return Destination.HOST
    if write_to_streams:
        return Destination.STREAMS
    return Destination.HOST if default_write_to_host else Destination.STREAMS


def resolve_color_override(value: HostColor | str | None) -> HostColor | None:
    """Validate a per-call host color. None means no override."""
    if value is None:
        return None
    return HostColor.from_name(value)
