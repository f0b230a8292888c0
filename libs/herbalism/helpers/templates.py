"""Effect description templates.

Recipe descriptions may embed placeholders:

- `{n}`, `{n*X}`, `{n+X}`: potency, i.e. how many times the effect was
  paired (times X, plus X).
- `{name:opt1|opt2|opt3}`: a choice between fixed options.
- `{name}`: a free-text choice.

The player resolves every choice placeholder before brewing; potency is
filled in from the effect count.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from herbalism.errors import DataIntegrityError

if TYPE_CHECKING:
    from herbalism.brewing.pairing import PairedEffect

_PLACEHOLDER = re.compile(r"\{([^}]+)\}")
_POTENCY = re.compile(r"^n(?:[*+].*)?$")
_POTENCY_PLAIN = re.compile(r"\{n\}")
_POTENCY_TIMES = re.compile(r"\{n\*(\d+)\}")
_POTENCY_PLUS = re.compile(r"\{n\+(\d+)\}")


@dataclass(frozen=True)
class TemplateVariable:
    """A choice the player must make. `options` is None for free text."""

    name: str
    options: tuple[str, ...] | None = None


def _parse_placeholder(content: str) -> TemplateVariable:
    name, sep, options_str = content.partition(":")
    name = name.strip()
    if not name:
        raise DataIntegrityError(f"Template placeholder '{{{content}}}' has no name")
    if not sep:
        return TemplateVariable(name=name)
    options = tuple(option.strip() for option in options_str.split("|"))
    if not all(options):
        raise DataIntegrityError(
            f"Template placeholder '{{{content}}}' has an empty option"
        )
    return TemplateVariable(name=name, options=options)


def parse_template_variables(template: str) -> list[TemplateVariable]:
    """Return the distinct choice placeholders in order of first appearance.

    Potency tokens are not choices and are skipped.
    Raises DataIntegrityError for a nameless placeholder or an empty option.
    """
    variables: list[TemplateVariable] = []
    seen: set[str] = set()
    for match in _PLACEHOLDER.finditer(template):
        content = match.group(1)
        if _POTENCY.match(content):
            continue
        variable = _parse_placeholder(content)
        if variable.name in seen:
            continue
        seen.add(variable.name)
        variables.append(variable)
    return variables


def collect_required_choices(effects: Iterable["PairedEffect"]) -> list[TemplateVariable]:
    """Union of the choices needed by every effect's description.

    A placeholder shared by two effects is a single choice. If it is
    declared with different option lists, the recipe data is inconsistent
    and DataIntegrityError is raised.
    """
    required: dict[str, TemplateVariable] = {}
    for effect in effects:
        if not effect.recipe.description:
            continue
        for variable in parse_template_variables(effect.recipe.description):
            existing = required.get(variable.name)
            if existing is None:
                required[variable.name] = variable
            elif existing.options != variable.options:
                raise DataIntegrityError(
                    f"Choice '{variable.name}' is declared with conflicting options: "
                    f"{existing.options} vs {variable.options}"
                )
    return list(required.values())


def is_choice_made(variable: TemplateVariable, choices: Mapping[str, str]) -> bool:
    """A choice is made when it has a non-empty value (one of the options, if any)."""
    value = choices.get(variable.name, "")
    if not value or not value.strip():
        return False
    if variable.options is not None:
        return value in variable.options
    return True


def all_choices_made(
    required: Iterable[TemplateVariable], choices: Mapping[str, str]
) -> bool:
    """Check that every required choice has a valid value."""
    return all(is_choice_made(variable, choices) for variable in required)


def fill_template(text: str, potency: int, choices: Mapping[str, str]) -> str:
    """Substitute potency tokens and chosen values into a template.

    Placeholders without a chosen value are left as-is.
    """
    result = _POTENCY_PLAIN.sub(str(potency), text)
    result = _POTENCY_TIMES.sub(lambda m: str(potency * int(m.group(1))), result)
    result = _POTENCY_PLUS.sub(lambda m: str(potency + int(m.group(1))), result)

    for variable, value in choices.items():
        pattern = re.compile(r"\{\s*" + re.escape(variable) + r"\s*(?::[^}]*)?\}")
        result = pattern.sub(lambda _m, v=value: v, result)

    return result


def compute_description(
    effects: Iterable["PairedEffect"], choices: Mapping[str, str]
) -> str:
    """Final description of a brewed item: every effect's text, space-joined.

    Effects without a template fall back to their name, with '(×N)' when
    stacked.
    """
    descriptions: list[str] = []
    for effect in effects:
        if effect.recipe.description:
            descriptions.append(fill_template(effect.recipe.description, effect.count, choices))
        else:
            potency = f" (×{effect.count})" if effect.count > 1 else ""
            descriptions.append(f"{effect.recipe.name}{potency}")
    return " ".join(descriptions)
