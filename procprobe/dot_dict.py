"""
Dictionary-like object with attribute access and dotted-path lookup.

Used to expose configuration sections as attributes:

    cfg = DotDict(check={"timeout": 5.0})
    cfg.check.timeout        # 5.0
    cfg.get("check.timeout") # 5.0
"""

from typing import Any


class DotDictPathNotFoundError(KeyError):
    """Raised when a dotted path does not resolve."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"path not found: {path}")


class DotDict:
    """Nested mapping with attribute-style access."""

    # Keys that would shadow methods
    _RESERVED_KEYS = frozenset({"set", "get", "has", "dict", "keys", "items"})

    def __init__(self, **kwargs: Any) -> None:
        self.set(**kwargs)

    def set(self, **kwargs: Any) -> "DotDict":
        """Set key-value pairs, converting nested dicts. Returns self."""
        for key, val in kwargs.items():
            key = str(key)
            if key in self._RESERVED_KEYS:
                raise ValueError(
                    f"Key '{key}' is reserved and cannot be used (would shadow method)"
                )
            if isinstance(val, dict):
                val = DotDict(**val)
            elif isinstance(val, list):
                val = [DotDict(**v) if isinstance(v, dict) else v for v in val]
            setattr(self, key, val)
        return self

    def get(self, path: str, default: Any = None) -> Any:
        """Look up a dotted path ("check.timeout"), returning default if absent."""
        try:
            return self._resolve(path)
        except DotDictPathNotFoundError:
            return default

    def has(self, path: str) -> bool:
        try:
            self._resolve(path)
        except DotDictPathNotFoundError:
            return False
        return True

    def _public(self) -> dict[str, Any]:
        # Underscore attributes hold object state, not data
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    def _resolve(self, path: str) -> Any:
        node: Any = self
        for part in path.split("."):
            if not isinstance(node, DotDict) or part not in node._public():
                raise DotDictPathNotFoundError(path)
            node = node.__dict__[part]
        return node

    def dict(self) -> dict[str, Any]:
        """Recursively convert to plain dicts and lists."""
        result: dict[str, Any] = {}
        for key, val in self._public().items():
            if isinstance(val, DotDict):
                result[key] = val.dict()
            elif isinstance(val, list):
                result[key] = [v.dict() if isinstance(v, DotDict) else v for v in val]
            else:
                result[key] = val
        return result

    def keys(self) -> list[str]:
        return list(self._public().keys())

    def items(self) -> list[tuple[str, Any]]:
        return list(self._public().items())

    def __getitem__(self, key: str) -> Any:
        try:
            return self._public()[key]
        except KeyError:
            raise DotDictPathNotFoundError(key) from None

    def __contains__(self, key: object) -> bool:
        return key in self._public()

    def __len__(self) -> int:
        return len(self._public())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DotDict):
            return self.dict() == other.dict()
        if isinstance(other, dict):
            return self.dict() == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.dict()!r})"
