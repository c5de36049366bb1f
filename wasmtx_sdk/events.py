"""
Event extraction from committed transactions.

Lookups are linear scans in emission order: the first event of a type and
the first attribute with a key win.
"""
from .exceptions import AttributeNotFoundError, EventNotFoundError, MalformedResponseError
from .models import CommitResult, ContractEvent

UINT64_MAX = 2**64 - 1


def find_event(result: CommitResult, event_type: str) -> ContractEvent:
    """
    Return the first deliver-phase event of type ``event_type``.

    Raises:
        EventNotFoundError: If no such event was emitted
    """
    for event in result.deliver_tx.events:
        if event.type == event_type:
            return event
    raise EventNotFoundError(event_type)


def find_attribute(event: ContractEvent, key: str) -> str:
    """
    Return the value of the first attribute named ``key``.

    Raises:
        AttributeNotFoundError: If the event has no such attribute
    """
    for attribute in event.attributes:
        if attribute.key == key:
            return attribute.value
    raise AttributeNotFoundError(event.type, key)


def extract_attribute(result: CommitResult, event_type: str, key: str) -> str:
    return find_attribute(find_event(result, event_type), key)


def parse_uint(value: str, field: str) -> int:
    """
    Parse an unsigned 64-bit decimal integer attribute value.

    Raises:
        MalformedResponseError: If ``value`` is not a plain integer in the uint64 range
    """
    if not value.isascii() or not value.isdigit():
        raise MalformedResponseError(f"{field} is not an unsigned integer: {value!r}")
    number = int(value)
    if number > UINT64_MAX:
        raise MalformedResponseError(f"{field} does not fit in uint64: {value!r}")
    return number
