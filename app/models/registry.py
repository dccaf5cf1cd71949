"""
ElementRegistry - maps element type names to factories.

The connectivity model never names concrete variants; anything that
needs to build an element from a type name (file loading, the add
command, the CLI) goes through a registry instance it was given.
"""

from typing import Callable, Optional

from .element import Capacitor, Element, Resistor, Wire
from .errors import DuplicateTypeError, UnknownTypeError

ElementFactory = Callable[..., Element]


class ElementRegistry:
    """Caller-owned table of element factories."""

    def __init__(self):
        self._factories: dict[str, ElementFactory] = {}

    def register(self, type_name: str, factory: ElementFactory) -> None:
        """
        Register a factory for a type name.

        The factory is called as ``factory(element_id, terminals, label, properties)``.

        Raises:
            DuplicateTypeError: If the type name is already registered.
        """
        if type_name in self._factories:
            raise DuplicateTypeError(type_name)
        self._factories[type_name] = factory

    def get(self, type_name: str) -> Optional[ElementFactory]:
        return self._factories.get(type_name)

    def get_types(self) -> list[str]:
        """Return registered type names in registration order."""
        return list(self._factories)

    def create(self, type_name: str, element_id: Optional[str], terminals: list,
               label=None, properties=None) -> Element:
        """
        Build an element of the given type.

        Raises:
            UnknownTypeError: If no factory is registered for the type.
        """
        factory = self._factories.get(type_name)
        if factory is None:
            raise UnknownTypeError(type_name)
        return factory(element_id, terminals, label, properties)

    def __contains__(self, type_name) -> bool:
        return type_name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


def build_default_registry() -> ElementRegistry:
    """Return a fresh registry with the built-in element types."""
    registry = ElementRegistry()
    for cls in (Resistor, Capacitor, Wire):
        registry.register(cls.element_type, cls)
    return registry
