"""Element pool — the elemental tags available from a herb selection.

Pools are always derived from the current selection and the assigned
pairs; nothing here keeps state between calls.
"""

from collections.abc import Iterable, Mapping

from herbalism.models.catalogue import Herb

ElementPool = dict[str, int]
ElementPair = tuple[str, str]


def build_element_pool(selections: Iterable[tuple[Herb, int]]) -> ElementPool:
    """Count every elemental tag over (herb, instance_count) selections.

    Each instance contributes its whole tag multiset, so a herb tagged
    [fire, fire] adds 2 fire per instance.
    """
    pool: ElementPool = {}
    for herb, instances in selections:
        if instances <= 0:
            continue
        for element in herb.elements:
            pool[element] = pool.get(element, 0) + instances
    return pool


def total_elements(pool: Mapping[str, int]) -> int:
    """Total number of element occurrences in a pool."""
    return sum(pool.values())


def remaining_elements(pool: Mapping[str, int], pairs: Iterable[ElementPair]) -> ElementPool:
    """The pool minus every assigned pair. Zero entries are dropped."""
    remaining = dict(pool)
    for first, second in pairs:
        remaining[first] = remaining.get(first, 0) - 1
        remaining[second] = remaining.get(second, 0) - 1
    return {element: count for element, count in remaining.items() if count > 0}


def can_assign_pair(remaining: Mapping[str, int], first: str, second: str) -> bool:
    """Check both elements are still available (two of it for a same-element pair)."""
    if first == second:
        return remaining.get(first, 0) >= 2
    return remaining.get(first, 0) >= 1 and remaining.get(second, 0) >= 1


def assign_pair(
    remaining: ElementPool, pairs: list[ElementPair], first: str, second: str
) -> bool:
    """Take one of each element from `remaining` and record the pair.

    Returns False and changes nothing if the pool cannot cover the pair.
    Entries that reach zero are removed from `remaining`.
    """
    first, second = first.lower(), second.lower()
    if not can_assign_pair(remaining, first, second):
        return False
    for element in (first, second):
        remaining[element] -= 1
        if remaining[element] == 0:
            del remaining[element]
    pairs.append((first, second))
    return True


def required_elements(
    recipe_counts: Iterable[tuple[Iterable[str], int]], batch_count: int = 1
) -> ElementPool:
    """Elements needed for (recipe elements, count) selections over a batch.

    required(element) = sum of count * batch_count over every recipe
    slot holding that element.
    """
    required: ElementPool = {}
    for elements, count in recipe_counts:
        for element in elements:
            required[element] = required.get(element, 0) + count * batch_count
    return required


def instance_counts(
    selections: Iterable[tuple[Herb, int]], elements: Iterable[str]
) -> dict[str, int]:
    """How many selected herb instances carry each element.

    A herb counts once per instance however many times it carries the
    element, since one instance cannot be split across brews.
    """
    wanted = list(elements)
    counts = {element: 0 for element in wanted}
    for herb, instances in selections:
        if instances <= 0:
            continue
        for element in wanted:
            if element in herb.elements:
                counts[element] += instances
    return counts
