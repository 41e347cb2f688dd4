"""Ordered, uniquely-named property collections."""

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict


class Property(BaseModel):
    """A single name/value pair handed to the security plugins."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class PropertyCollection:
    """Ordered sequence of properties with unique names.

    Setting a name that is already present replaces the value in place, so the
    listing order is always the order in which names were first added.
    """

    def __init__(self, items: Iterable[tuple[str, str]] | None = None):
        self._properties: list[Property] = []
        self._index: dict[str, int] = {}
        for name, value in items or []:
            self.upsert(name, value)

    def upsert(self, name: str, value: str) -> None:
        """Add a property, or overwrite the value of an existing one.

        Args:
            name: Property name
            value: Property value
        """
        prop = Property(name=name, value=value)
        position = self._index.get(name)
        if position is None:
            self._index[name] = len(self._properties)
            self._properties.append(prop)
        else:
            self._properties[position] = prop

    def merge(self, other: "PropertyCollection") -> None:
        """Upsert every property of `other`, in its order."""
        for prop in other:
            self.upsert(prop.name, prop.value)

    def find(self, name: str) -> str | None:
        """Return the value stored under `name`, or None if absent."""
        position = self._index.get(name)
        if position is None:
            return None
        return self._properties[position].value

    def names(self) -> list[str]:
        return [prop.name for prop in self._properties]

    def as_list(self) -> list[tuple[str, str]]:
        return [(prop.name, prop.value) for prop in self._properties]

    def as_dict(self) -> dict[str, str]:
        return dict(self.as_list())

    def __iter__(self) -> Iterator[Property]:
        return iter(list(self._properties))

    def __len__(self) -> int:
        return len(self._properties)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyCollection):
            return NotImplemented
        return self.as_list() == other.as_list()

    def __repr__(self) -> str:
        return f"PropertyCollection({self.as_list()!r})"
