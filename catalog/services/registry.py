from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CategorySpec:
    name: str
    group: str
    id_field: str
    path: str
    label: str
    type_tag: str

    @property
    def route(self) -> str:
        return f"/api/vehicles/{self.group}/{self.name}"


CATEGORIES: dict[str, CategorySpec] = {
    spec.name: spec
    for spec in (
        CategorySpec("aircraft", "aviation", "aircraftid", "vehicles/aviation/aircraft.json", "Aircraft", "aircraft"),
        CategorySpec("helicopters", "aviation", "helicopterid", "vehicles/aviation/helicopters.json", "Helicopter", "helicopter"),
        CategorySpec("tanks", "ground", "tankid", "vehicles/ground/tanks.json", "Tank", "tank"),
        CategorySpec("bluewater", "naval", "shipid", "vehicles/naval/bluewater.json", "Bluewater ship", "bluewater"),
        CategorySpec("coastal", "naval", "shipid", "vehicles/naval/coastal.json", "Coastal ship", "coastal"),
    )
}

GROUPS: dict[str, tuple[str, ...]] = {}
for _spec in CATEGORIES.values():
    GROUPS[_spec.group] = GROUPS.get(_spec.group, ()) + (_spec.name,)


def get_category(name: str) -> CategorySpec:
    if name not in CATEGORIES:
        raise KeyError(f"Unknown category {name}")
    return CATEGORIES[name]


def categories_in_group(group: str) -> list[CategorySpec]:
    if group not in GROUPS:
        raise KeyError(f"Unknown group {group}")
    return [CATEGORIES[name] for name in GROUPS[group]]
