"""Hero id to display name lookup."""
import json
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

HeroSource = Union[Mapping[int, str], Iterable[dict], None]


def fallback_hero_name(hero_id: int) -> str:
    """Display name used when a hero id is missing from the lookup."""
    return f"Hero {hero_id}"


class HeroDirectory:
    """Immutable heroId -> localized name mapping.

    Accepts either a plain ``{hero_id: name}`` mapping or the list returned
    by OpenDota ``GET /heroes`` (``id`` plus ``localized_name``/``name``).
    """

    def __init__(self, heroes: HeroSource = None):
        names: dict[int, str] = {}
        if isinstance(heroes, Mapping):
            for hero_id, name in heroes.items():
                if name:
                    names[int(hero_id)] = str(name)
        elif heroes is not None:
            for hero in heroes:
                hero_id = hero.get("id", hero.get("hero_id"))
                name = hero.get("localized_name") or hero.get("name")
                if hero_id is None or not name:
                    continue
                names[int(hero_id)] = str(name)
        self._names = MappingProxyType(names)

    @classmethod
    def from_json_file(cls, path: Path) -> "HeroDirectory":
        """Load a cached /heroes payload from disk."""
        if not path.exists():
            return cls()
        with open(path) as f:
            return cls(json.load(f))

    @property
    def names(self) -> Mapping[int, str]:
        return self._names

    def name_for(self, hero_id: Optional[int]) -> str:
        if hero_id is None:
            return fallback_hero_name(0)
        return self._names.get(int(hero_id), fallback_hero_name(hero_id))

    def __contains__(self, hero_id: object) -> bool:
        return hero_id in self._names

    def __len__(self) -> int:
        return len(self._names)
