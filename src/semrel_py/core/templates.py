"""``{{placeholder}}`` substitution for URL and message templates."""

from __future__ import annotations

import re
from collections.abc import Mapping

from semrel_py.exceptions import TemplateSubstitutionError

PLACEHOLDER_PATTERN: re.Pattern[str] = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def placeholders(template: str) -> list[str]:
    """Names referenced by ``template``, in order of first appearance."""
    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(template)))


def substitute(template: str, values: Mapping[str, str | None]) -> str:
    """Replace every ``{{name}}`` in ``template`` with ``values[name]``.

    Raises:
        TemplateSubstitutionError: If a referenced placeholder has no value or an empty one
    """
    for name in placeholders(template):
        if not values.get(name):
            raise TemplateSubstitutionError(template, name)
    return PLACEHOLDER_PATTERN.sub(lambda m: str(values[m.group(1)]), template)
