import re
from dataclasses import dataclass, asdict
from typing import List, Dict, Optional

NAME_WEIGHT = 0.6
ADDRESS_WEIGHT = 0.3
PHONE_BONUS = 0.2
EXACT_NAME_BONUS = 0.1
MIN_MATCH_SCORE = 0.5


def levenshtein_distance(s1: str, s2: str) -> int:
    """Classic edit distance with a rolling row."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, 1):
        current = [i]
        for j, c2 in enumerate(s2, 1):
            if c1 == c2:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j - 1], current[j - 1], previous[j]) + 1)
        previous = current
    return previous[-1]


def similarity(s1: str, s2: str) -> float:
    """Case-insensitive normalized edit similarity in [0, 1]."""
    longest = max(len(s1), len(s2))
    if longest == 0:
        return 1.0
    distance = levenshtein_distance(s1.lower(), s2.lower())
    return (longest - distance) / longest


def _digits(phone: Optional[str]) -> str:
    return re.sub(r'\D', '', phone or '')


@dataclass
class StoreMatch:
    business_id: str
    rating: Optional[float]
    review_count: Optional[int]
    url: Optional[str]
    match_score: float

    def to_dict(self):
        return asdict(self)


class StoreMatcher:
    def __init__(self, store_name: str, store_address: str, store_phone: Optional[str] = None):
        self.store_name = store_name or ''
        self.store_address = store_address or ''
        self.store_phone = store_phone

    def score(self, business: Dict) -> float:
        """Weighted score of a single candidate; bonuses can push it above 1.0"""
        name = business.get('name') or ''
        location = business.get('location') or {}
        business_address = ' '.join(location.get('display_address') or [])

        score = similarity(self.store_name, name) * NAME_WEIGHT
        score += similarity(self.store_address.lower(), business_address.lower()) * ADDRESS_WEIGHT

        store_digits = _digits(self.store_phone)
        if store_digits and store_digits == _digits(business.get('phone')):
            score += PHONE_BONUS

        if self.store_name.lower() == name.lower():
            score += EXACT_NAME_BONUS

        return score

    def find_best_match(self, businesses: List[Dict]) -> Optional[StoreMatch]:
        best_match = None
        best_score = 0.0

        # Strict comparison keeps the first candidate on ties
        for business in businesses:
            score = self.score(business)
            if score > best_score:
                best_score = score
                best_match = business

        if best_match is None or best_score < MIN_MATCH_SCORE:
            return None

        return StoreMatch(
            business_id=best_match.get('id'),
            rating=best_match.get('rating'),
            review_count=best_match.get('review_count'),
            url=best_match.get('url'),
            match_score=best_score,
        )
