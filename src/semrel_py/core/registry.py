"""Registry of recognized commit types.

The registry is built from the ordered ``types`` configuration and answers
two questions: how a commit type is treated (section, visibility, severity)
and in which order visible sections appear in the changelog.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from semrel_py.config.models import Severity, TypeConfig

# Severity used when a configured type does not declare one.
DEFAULT_SEVERITIES: dict[str, Severity] = {
    "feat": Severity.FEATURE,
    "fix": Severity.FIX,
    "perf": Severity.PERFORMANCE,
    "revert": Severity.FIX,
    "deps": Severity.FIX,
}


@dataclass(frozen=True)
class TypeDescriptor:
    """How one commit type is treated."""

    type: str
    section: str | None
    hidden: bool
    severity: Severity

    @property
    def is_visible(self) -> bool:
        return not self.hidden and self.section is not None


class TypeRegistry:
    """Ordered lookup of :class:`TypeDescriptor` by type tag."""

    def __init__(self, descriptors: Iterable[TypeDescriptor]) -> None:
        self._descriptors: dict[str, TypeDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.type in self._descriptors:
                raise ValueError(f"Duplicate commit type: {descriptor.type!r}")
            self._descriptors[descriptor.type] = descriptor

    @classmethod
    def from_config(cls, types: Iterable[TypeConfig]) -> TypeRegistry:
        return cls(_descriptor_from_config(entry) for entry in types)

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    def is_known(self, type_tag: str) -> bool:
        return type_tag.lower() in self._descriptors

    def resolve(self, type_tag: str) -> TypeDescriptor:
        """Return the descriptor for ``type_tag``.

        Unknown tags resolve to a hidden descriptor with severity ``none``.
        """
        key = type_tag.lower()
        descriptor = self._descriptors.get(key)
        if descriptor is None:
            return TypeDescriptor(type=key, section=None, hidden=True, severity=Severity.NONE)
        return descriptor

    def ordered_visible_sections(self) -> list[str]:
        """Section labels of visible types, in declaration order.

        Types sharing a label contribute to one section, placed where the
        first of them was declared.
        """
        sections: dict[str, None] = {}
        for descriptor in self._descriptors.values():
            if descriptor.is_visible:
                sections.setdefault(descriptor.section, None)  # type: ignore[arg-type]
        return list(sections)


def _descriptor_from_config(entry: TypeConfig) -> TypeDescriptor:
    hidden = entry.hidden or not entry.section
    if hidden:
        severity = Severity.NONE
    elif entry.severity is not None:
        severity = entry.severity
    else:
        severity = DEFAULT_SEVERITIES.get(entry.type, Severity.NONE)
    return TypeDescriptor(
        type=entry.type,
        section=entry.section or None,
        hidden=hidden,
        severity=severity,
    )
