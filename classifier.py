from typing import Dict, List, Sequence

from models import CategoryEnum, University

def classify_universities(universities: Sequence[University]) -> Dict[str, List[University]]:
    """
    Group universities into dream/target/safe buckets.

    Catalog entries carry a precomputed category, so this only buckets
    them; catalog order is preserved inside each bucket.

    Args:
        universities: Catalog entries to group

    Returns:
        Dict with keys: dream, target, safe
    """
    classified = {category.value: [] for category in CategoryEnum}

    for uni in universities:
        classified[uni.category.value].append(uni)

    return classified
