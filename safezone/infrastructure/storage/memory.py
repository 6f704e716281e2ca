"""Process-local key/value storage."""

from typing import Dict, Mapping, Optional

from safezone.domain.interfaces.storage import IKeyValueStorage


class MemoryStorage(IKeyValueStorage):
    """Dictionary-backed storage; `set_many` swaps in a fully staged copy."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def set_many(self, values: Mapping[str, str]) -> None:
        staged = dict(self._data)
        staged.update(values)
        self._data = staged

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)
