"""Rule-based coaching tips."""

from nosugar.services.stats import FULL_PERCENT, WARNING_PERCENT

HALFWAY_PERCENT = 50

COMMON_ITEMS: tuple[str, ...] = (
    "Soda 12oz ≈ 39g",
    "Sweetened yogurt (cup) ≈ 15–20g",
    "Chocolate bar ≈ 24–30g",
    "Sports drink 20oz ≈ 34g",
)


def coach_tip(consumed: int, limit: int) -> str:
    """Return a suggestion based on how much of today's limit is used."""
    percent = consumed / limit * 100 if limit > 0 else FULL_PERCENT
    if percent < HALFWAY_PERCENT:
        return "Nice pacing. Keep drinks sugar-free and save room for dinner."
    if percent < WARNING_PERCENT:
        return "You're over halfway. Swap dessert for fruit or yogurt."
    if percent < FULL_PERCENT:
        return (
            "Close to your budget. Choose a savory snack or go for a short walk "
            "before eating."
        )
    return (
        "You're past today's estimate. Hydrate and prioritize fiber/protein at "
        "your next meal."
    )
