"""Message aggregation across a single extraction run."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass
class Message:
    """A distinct message text and every place it was found.

    Attributes:
        id: The literal message text, also the deduplication key
        positions: ``path:line:col`` strings in discovery order
    """

    id: str
    positions: list[str] = field(default_factory=list)


class MessageCatalog:
    """Insertion-ordered mapping of message text to :class:`Message`.

    The first sighting of a text creates its entry; later sightings append
    positions. Iteration follows first-seen order.
    """

    def __init__(self) -> None:
        self._messages: dict[str, Message] = {}
        self._call_sites = 0

    def add(self, message_id: str, position: str) -> Message:
        """Record one call-site of ``message_id`` at ``position``."""
        self._call_sites += 1
        message = self._messages.get(message_id)
        if message is None:
            message = Message(id=message_id, positions=[position])
            self._messages[message_id] = message
        else:
            message.positions.append(position)
        return message

    def get(self, message_id: str) -> Message | None:
        return self._messages.get(message_id)

    @property
    def call_sites(self) -> int:
        """Total number of call-sites recorded, duplicates included."""
        return self._call_sites

    def messages(self) -> list[Message]:
        """Return messages in first-seen order."""
        return list(self._messages.values())

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._messages

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages.values())

    def __len__(self) -> int:
        return len(self._messages)
