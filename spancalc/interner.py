import logging

logger = logging.getLogger(__name__)


class Interner:
    """Append-only two-way table between identifier spellings and small integer handles.

    Handles are allocated in order of first appearance, starting at 0, and stay valid for
    the lifetime of the table.
    """

    def __init__(self) -> None:
        self._handles: dict[str, int] = {}
        self._names: list[str] = []

    def intern(self, name: str) -> int:
        handle = self._handles.get(name)
        if handle is None:
            handle = len(self._names)
            self._handles[name] = handle
            self._names.append(name)
            logger.debug("Interned %r as #%d", name, handle)
        return handle

    def handle_of(self, name: str) -> int | None:
        return self._handles.get(name)

    def lookup(self, handle: int) -> str:
        return self._names[handle]

    def __contains__(self, name: object) -> bool:
        return name in self._handles

    def __len__(self) -> int:
        return len(self._names)
