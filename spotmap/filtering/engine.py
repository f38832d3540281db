from typing import Iterable, List

from spotmap.models import Criterion, Spot
from spotmap.ranking.ranker import ranker


class FilterEngine:
    """
    Stateless spot filtering: text match -> ranking -> criteria match.
    Every call builds a new list; the input catalog is never modified.
    """

    def compute(
        self,
        catalog: Iterable[Spot],
        query: str,
        selected_criteria: Iterable[Criterion] = (),
    ) -> List[Spot]:
        filtered = self._dedup(catalog)

        # 1. Text filter + ranking (only when there is a query)
        if query.strip() != "":
            filtered = self.match_text(filtered, query)
            filtered = ranker.rank(filtered, query)

        # 2. Criteria filter (AND), keeps the current order
        selected = list(selected_criteria)
        if selected:
            filtered = self.match_criteria(filtered, selected)

        return filtered

    def match_text(self, spots: Iterable[Spot], query: str) -> List[Spot]:
        lower_query = query.lower()
        return [spot for spot in spots if lower_query in spot.name.lower()]

    def match_criteria(
        self, spots: Iterable[Spot], selected_criteria: Iterable[Criterion]
    ) -> List[Spot]:
        selected_ids = [c.id for c in selected_criteria]
        results = []
        for spot in spots:
            spot_ids = {c.id for c in spot.criteria}
            if all(cid in spot_ids for cid in selected_ids):
                results.append(spot)
        return results

    def _dedup(self, spots: Iterable[Spot]) -> List[Spot]:
        seen_ids = set()
        unique = []
        for spot in spots:
            if spot.id in seen_ids:
                continue
            seen_ids.add(spot.id)
            unique.append(spot)
        return unique


filter_engine = FilterEngine()
