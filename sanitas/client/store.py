"""Application Store — state shared between views (search query, results, selected patient).

Invariants:
    - Views never hold a reference to AppStore itself, only to make_use_store(store)
    - The default search type is "Carnet" (first option of the search selector)
"""

from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

S = TypeVar("S")


@dataclass(frozen=True)
class SearchQuery:
    query: str = ""
    type: str = "Carnet"


@dataclass
class AppStore:
    search_query: SearchQuery = field(default_factory=SearchQuery)
    patients: list[Any] = field(default_factory=list)
    selected_patient_id: int | None = None

    def set_search_query(self, query: str, type: str) -> None:
        self.search_query = SearchQuery(query=query, type=type)

    def set_patients(self, patients: list[Any]) -> None:
        self.patients = list(patients)

    def set_selected_patient_id(self, patient_id: int | None) -> None:
        self.selected_patient_id = patient_id


UseStore = Callable[[Callable[[AppStore], S]], S]


def make_use_store(store: AppStore) -> UseStore:
    """State-access function injected into views: use_store(lambda s: s.patients)."""
    def use_store(selector):
        return selector(store)
    return use_store
