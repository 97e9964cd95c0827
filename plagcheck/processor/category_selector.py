from collections.abc import Sequence

from plagcheck.storage.category import ALL_CATEGORIES, sanitize_category

DEFAULT_CROSS_CHECK_CATEGORIES: tuple[str, ...] = ("coursework", "diploma")


def categories_to_search(
    category: str | None,
    cross_check: Sequence[str] = DEFAULT_CROSS_CHECK_CATEGORIES,
) -> list[str] | None:
    """Partitions a check should read; ``None`` means every partition.

    Categories of the cross-check group are searched together because their
    papers overlap in content. Empty input and ``all`` search everything.
    """
    if not category or not category.strip() or category.strip().casefold() == ALL_CATEGORIES:
        return None
    name = sanitize_category(category)
    group = [sanitize_category(c) for c in cross_check]
    if name in group:
        return list(dict.fromkeys(group))
    return [name]
