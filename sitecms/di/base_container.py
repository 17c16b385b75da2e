# Standard library imports
from typing import Any, Callable, Dict, Type, TypeVar, Union

TypeVarType = TypeVar('TypeVarType')

Key = Union[Type, str]


class BaseContainer:
    """Base dependency injection container with core functionality"""

    def __init__(self) -> None:
        self.instances: Dict[Key, Any] = {}
        self.factories: Dict[Key, Callable[[], Any]] = {}

    def register_singleton(self, interface: Union[Type[TypeVarType], str], instance: TypeVarType) -> None:
        """Register a singleton instance (supports both types and string keys)"""
        self.instances[interface] = instance

    def register_factory(self, interface: Union[Type[TypeVarType], str], factory: Callable[[], TypeVarType]) -> None:
        """Register a factory called on every lookup"""
        self.factories[interface] = factory

    def has(self, interface: Key) -> bool:
        return interface in self.instances or interface in self.factories

    def get(self, interface: Union[Type[TypeVarType], str]) -> TypeVarType:
        """Get an instance of the requested type or string key"""
        if interface in self.instances:
            return self.instances[interface]
        if interface in self.factories:
            return self.factories[interface]()
        name = interface.__name__ if isinstance(interface, type) else interface
        raise LookupError(f"No registration found for {name}")

    def clear(self) -> None:
        self.instances.clear()
        self.factories.clear()
