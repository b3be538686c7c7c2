"""Privilege ranks and the catalog that orders them."""

from collections.abc import Iterable, Mapping, Sequence
from enum import StrEnum

from dacguard.domain.exceptions import UnknownPrivilege


class Privilege(StrEnum):
    """Default privilege ranks, lowest first."""

    READ = "READ"
    WRITE = "WRITE"
    GRANT = "GRANT"


DEFAULT_PRIVILEGES: tuple[str, ...] = tuple(p.value for p in Privilege)

DEFAULT_PRIVILEGE_LABELS: dict[str, str] = {
    Privilege.READ.value: "Read",
    Privilege.WRITE.value: "Write",
    Privilege.GRANT.value: "Manage",
}


class PrivilegeCatalog:
    """Ordered set of privilege ranks.

    Holding a rank implies holding every rank listed before it. The last
    rank is the management rank: a principal holding it holds everything,
    and only such a principal counts as a manager of a resource.
    """

    def __init__(
        self,
        ranks: Sequence[str] = DEFAULT_PRIVILEGES,
        labels: Mapping[str, str] | None = None,
    ) -> None:
        ranks = tuple(str(r) for r in ranks)
        if not ranks:
            raise ValueError("Privilege catalog needs at least one rank")
        if len(set(ranks)) != len(ranks):
            raise ValueError(f"Duplicate privilege ranks: {list(ranks)}")
        if labels is None:
            labels = {r: DEFAULT_PRIVILEGE_LABELS[r] for r in ranks if r in DEFAULT_PRIVILEGE_LABELS}
        extra = set(labels) - set(ranks)
        if extra:
            raise ValueError(f"Labels given for unknown privileges: {sorted(extra)}")
        self._ranks = ranks
        self._index = {rank: i for i, rank in enumerate(ranks)}
        self._labels = {rank: labels.get(rank, rank.capitalize()) for rank in ranks}
        self._full = frozenset(ranks)

    @property
    def ranks(self) -> tuple[str, ...]:
        """Ranks from lowest to highest."""
        return self._ranks

    @property
    def manage_rank(self) -> str:
        return self._ranks[-1]

    def labels(self) -> dict[str, str]:
        """Display label per rank, in catalog order."""
        return dict(self._labels)

    def rank_of(self, privilege: str) -> int:
        try:
            return self._index[privilege]
        except KeyError:
            raise UnknownPrivilege(privilege) from None

    def cascade(self, privileges: Iterable[str]) -> frozenset[str]:
        """Smallest superset that includes every rank implied by a held rank."""
        top = -1
        for privilege in privileges:
            top = max(top, self.rank_of(str(privilege)))
        return frozenset(self._ranks[: top + 1])

    def is_full(self, privileges: Iterable[str]) -> bool:
        return frozenset(str(p) for p in privileges) == self._full

    def implied_by(self, privilege: str) -> tuple[str, ...]:
        """Lower ranks forced on by holding ``privilege``."""
        return self._ranks[: self.rank_of(privilege)]

    def sort(self, privileges: Iterable[str]) -> list[str]:
        """Privileges in catalog order; ranks outside the catalog go last."""
        last = len(self._ranks)
        return sorted(privileges, key=lambda p: (self._index.get(p, last), p))
