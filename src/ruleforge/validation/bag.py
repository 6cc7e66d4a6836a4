"""Per-run collection of field error messages."""

import copy


class MessageBag:
    """Ordered, append-only mapping of field name to error messages.

    Messages for a field keep insertion order, so the first message of a
    field comes from the first failing rule declared for it. A field key
    only exists once a message has been added for it.
    """

    def __init__(self, messages: dict[str, list[str]] | None = None):
        self._messages: dict[str, list[str]] = {}
        for field, field_messages in (messages or {}).items():
            for message in field_messages:
                self.add(field, message)

    def add(self, field: str, message: str) -> None:
        """Append a message for a field."""
        self._messages.setdefault(field, []).append(message)

    def has(self, field: str) -> bool:
        """Check if a field has any messages."""
        return bool(self._messages.get(field))

    def first(self, field: str) -> str:
        """Get the first message for a field, or "" if there is none."""
        if self.has(field):
            return self._messages[field][0]
        return ""

    def get(self, field: str) -> list[str]:
        """Get all messages for a field, or [] if there are none."""
        if self.has(field):
            return list(self._messages[field])
        return []

    def all(self) -> dict[str, list[str]]:
        """Get an independent copy of every field's messages."""
        return copy.deepcopy(self._messages)

    def has_errors(self) -> bool:
        """Check if any field has a message."""
        return any(self._messages.values())

    def keys(self) -> list[str]:
        """Fields with messages, in the order they first failed."""
        return list(self._messages)

    def copy(self) -> "MessageBag":
        return MessageBag(self._messages)

    def to_dict(self) -> dict[str, list[str]]:
        return self.all()

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __bool__(self) -> bool:
        return self.has_errors()

    def __contains__(self, field: object) -> bool:
        return isinstance(field, str) and self.has(field)

    def __repr__(self) -> str:
        return f"MessageBag({self._messages!r})"
