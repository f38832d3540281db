from typing import List

from spotmap.models import Spot


class Ranker:
    def rank(self, spots: List[Spot], query: str) -> List[Spot]:
        lower_query = query.lower()

        def sort_key(spot: Spot):
            name = spot.name.lower()
            # 1. Prefix matches first
            starts = 0 if name.startswith(lower_query) else 1
            # 2. Then alphabetical, case-insensitive
            return (starts, name)

        # sorted() is stable: spots with identical names keep their input order
        return sorted(spots, key=sort_key)


ranker = Ranker()
