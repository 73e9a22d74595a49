from __future__ import annotations
from typing import Dict, Any

class Registry:
    """Maps a case-insensitive strategy name to the class implementing it."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._map: Dict[str, Any] = {}

    def register(self, name: str):
        def deco(obj):
            key = name.lower()
            if key in self._map:
                raise ValueError(f"Duplicate {self.kind} name: {name}")
            self._map[key] = obj
            return obj
        return deco

    def get(self, name: str) -> Any:
        obj = self._map.get(name.lower())
        if obj is None:
            raise KeyError(f"Unknown {self.kind} strategy: {name} (available: {', '.join(self.available())})")
        return obj

    def build(self, name: str, **params: Any) -> Any:
        return self.get(name)(**params)

    def available(self):
        return sorted(self._map.keys())

SCORING = Registry("scoring")
SELECTION = Registry("selection")
