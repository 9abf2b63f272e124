"""Radar chart series: a review's score block against the corpus averages."""

from escapelog.scoring.aggregation import SCORE_CATEGORIES, score_values

FULL_MARK = 10

RADAR_AXES = {
    "fun": ("Fun", "How enjoyable and engaging it was to play"),
    "completion": ("Completion", "Device and system reliability, puzzle design and difficulty balance"),
    "immersion": ("Immersion", "Story coherence, natural acting and staging"),
    "price": ("Value", "Satisfaction and volume relative to the price"),
    "design": ("Design", "Interior, props and visual staging of the space"),
}


def radar_series(scores, averages) -> list[dict]:
    """One row per score category, in fixed axis order."""
    current = score_values(scores)
    averages = averages or {}

    rows = []
    for category in SCORE_CATEGORIES:
        label, description = RADAR_AXES[category]
        rows.append(
            {
                "category": category,
                "label": label,
                "description": description,
                "current": current.get(category) or 0,
                "average": averages.get(category) or 0,
                "full_mark": FULL_MARK,
            }
        )
    return rows


def device_lock_split(device_ratio: int) -> tuple[int, int]:
    """Split a device ratio into (device, lock) shares out of 10."""
    return device_ratio, FULL_MARK - device_ratio
