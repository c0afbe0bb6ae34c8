"""Interface dependency ordering.

Interfaces may implement other interfaces. A fragment for an interface can
only be written once the fragments of all its super-interfaces exist, since
its own field list excludes everything those fragments already select.
"""

import logging
from collections import deque
from typing import Iterable, Iterator

from .errors import DependencyCycleError, ResolutionOrderError, UnresolvedTypeError
from .ir import IRInterface, IRObjectType, IRSchema

log = logging.getLogger(__name__)


class ResolvedFieldSet:
    """Field names each emitted type selects itself, keyed by type name.

    Owned by a single generation run. Each type is recorded exactly once,
    after its fragment is rendered.
    """

    def __init__(self):
        self._fields: dict[str, tuple[str, ...]] = {}

    def record(self, type_name: str, field_names: Iterable[str]):
        """Store the fields a type selects directly."""
        if type_name in self._fields:
            raise ResolutionOrderError(type_name, "Type already resolved")
        self._fields[type_name] = tuple(field_names)

    def lookup(self, type_name: str) -> tuple[str, ...]:
        """Return the fields recorded for a type.

        Raises:
            ResolutionOrderError: If the type has not been recorded yet
        """
        try:
            return self._fields[type_name]
        except KeyError:
            raise ResolutionOrderError(
                type_name, "Type looked up before it was resolved"
            ) from None

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._fields

    def __len__(self) -> int:
        return len(self._fields)


class InterfaceResolver:
    """Yields interfaces so that super-interfaces always come first."""

    def __init__(self, schema: IRSchema):
        self.schema = schema

    def iter_ordered(
        self,
        interfaces: Iterable[IRInterface],
        resolved: ResolvedFieldSet,
    ) -> Iterator[IRInterface]:
        """Yield each interface once all its super-interfaces are resolved.

        The caller must record every yielded interface in ``resolved`` before
        asking for the next one; readiness is checked against that set.

        Pending interfaces are kept in a FIFO worklist. An interface that is
        not ready goes to the back of the queue. When more consecutive
        interfaces are requeued than remain outstanding, a whole pass made no
        progress and the remaining interfaces form a cycle.

        Raises:
            UnresolvedTypeError: If a super-interface is not a known interface
            DependencyCycleError: If no valid order exists
        """
        pending = deque(interfaces)
        for interface in pending:
            self.check_references(interface)

        retries = 0
        while pending:
            interface = pending.popleft()
            if all(name in resolved for name in interface.interfaces):
                retries = 0
                yield interface
                continue

            pending.append(interface)
            retries += 1
            log.debug("Deferring interface %s (attempt %d)", interface.name, retries)
            if retries > len(pending):
                raise DependencyCycleError(i.name for i in pending)

    def check_references(self, definition: IRInterface | IRObjectType):
        """Ensure every implemented interface name refers to an interface."""
        kind = "interface" if isinstance(definition, IRInterface) else "type"
        for name in definition.interfaces:
            if name in self.schema.interfaces:
                continue
            found = self.schema.get_type_by_name(name)
            reason = "not an interface" if found is not None else ""
            raise UnresolvedTypeError(name, f"{kind} {definition.name}", reason)
