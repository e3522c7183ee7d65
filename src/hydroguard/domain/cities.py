"""Built-in city profiles and the base reservoir/river tables.

Every profile is a frozen value passed explicitly into
`hydroguard.domain.simulation.simulate_city`; nothing here is mutated by a
simulation run. Reservoir and river names in the base tables are placeholders
that each profile overlays with local names.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from hydroguard.domain.hydrology import Reservoir, River
from hydroguard.errors import InvalidConfiguration, require_non_negative

__all__ = [
    "LocationLevel",
    "CityProfile",
    "BASE_RESERVOIRS",
    "BASE_RIVERS",
    "build_profile",
    "CITIES",
    "get_city",
    "list_cities",
]


class LocationLevel(str, Enum):
    DISTRICT = "District"
    CITY = "City"
    STATE = "State"
    COUNTRY = "Country"


BASE_RESERVOIRS: Tuple[Reservoir, ...] = (
    Reservoir("res-1", "Primary Reservoir", 3645, 2850, 1200, 500, river_id="riv-1"),
    Reservoir("res-2", "Secondary Reservoir", 3300, 2500, 800, 200, river_id="riv-2"),
    Reservoir("res-3", "Main Catchment", 3231, 3000, 9500, 8000, river_id="riv-3"),
    Reservoir("res-4", "Auxiliary Lake", 1081, 400, 150, 0, river_id="riv-1"),
    Reservoir("res-5", "Downstream Tank", 1465, 1100, 600, 600, river_id="riv-2"),
)

BASE_RIVERS: Tuple[River, ...] = (
    River("riv-1", "Primary River", 60000, 15000,
          ("Airport Runway Extension", "Encroachments near Delta")),
    River("riv-2", "Secondary River", 22000, 18000,
          ("Narrow river mouth", "Urban waste dumping")),
    River("riv-3", "Canal Network", 125000, 45000, ("Industrial blockages",)),
)


@dataclass(frozen=True)
class CityProfile:
    """Static configuration for one monitored area."""
    id: str
    name: str
    level: LocationLevel
    rainfall_threshold_mm_hr: float
    operational_limit_mm_hr: float
    impervious_surface_percentage: float
    catchment_area_sq_km: float
    population_density: str = ""
    external_map_url: str | None = None
    reservoirs: Tuple[Reservoir, ...] = BASE_RESERVOIRS
    rivers: Tuple[River, ...] = BASE_RIVERS
    districts: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        require_non_negative("rainfall_threshold_mm_hr", self.rainfall_threshold_mm_hr)
        require_non_negative("operational_limit_mm_hr", self.operational_limit_mm_hr)
        require_non_negative("impervious_surface_percentage", self.impervious_surface_percentage)
        require_non_negative("catchment_area_sq_km", self.catchment_area_sq_km)
        river_ids = {r.id for r in self.rivers}
        for res in self.reservoirs:
            if res.river_id not in river_ids:
                raise InvalidConfiguration(
                    f"{self.id}: reservoir {res.id} drains into unknown river {res.river_id}")

    def summary(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level.value,
            "rainfallThresholdPerHour": self.rainfall_threshold_mm_hr,
            "operationalLimitPerHour": self.operational_limit_mm_hr,
            "imperviousSurfacePercentage": self.impervious_surface_percentage,
            "catchmentAreaSqKm": self.catchment_area_sq_km,
            "populationDensity": self.population_density,
            "externalMapUrl": self.external_map_url,
        }


def build_profile(
    reservoir_names: Sequence[str] = (),
    river_names: Sequence[str] = (),
    **fields,
) -> CityProfile:
    """Create a profile from the base tables with local names overlaid."""
    reservoirs = tuple(
        replace(r, name=reservoir_names[idx]) if idx < len(reservoir_names) else r
        for idx, r in enumerate(BASE_RESERVOIRS)
    )
    rivers = tuple(
        replace(r, name=river_names[idx]) if idx < len(river_names) else r
        for idx, r in enumerate(BASE_RIVERS)
    )
    return CityProfile(reservoirs=reservoirs, rivers=rivers, **fields)


CITIES: Dict[str, CityProfile] = {p.id: p for p in (
    build_profile(
        id="india", name="India (National View)", level=LocationLevel.COUNTRY,
        rainfall_threshold_mm_hr=100, operational_limit_mm_hr=60,
        impervious_surface_percentage=45, catchment_area_sq_km=5000,
        population_density="431 / sq km",
        external_map_url="https://www.openstreetmap.org/#map=5/22.97/79.65",
        districts=("NORTH INDIA", "DECCAN PLATEAU", "COASTAL PLAINS"),
        reservoir_names=("Indira Sagar", "Nagarjuna Sagar", "Hirakud", "Tehri", "Bhakra"),
        river_names=("Ganga", "Godavari"),
    ),
    build_profile(
        id="tn", name="Tamil Nadu, India", level=LocationLevel.STATE,
        rainfall_threshold_mm_hr=85, operational_limit_mm_hr=50,
        impervious_surface_percentage=55, catchment_area_sq_km=1500,
        population_density="555 / sq km",
        external_map_url="https://www.openstreetmap.org/#map=7/11.127/78.656",
        districts=("KANCHIPURAM", "COIMBATORE", "MADURAI"),
        reservoir_names=("Mettur Dam", "Bhavanisagar", "Vaigai", "Aliyar", "Papanasam"),
        river_names=("Kaveri River", "Palar River"),
    ),
    build_profile(
        id="chennai", name="Chennai, India", level=LocationLevel.CITY,
        rainfall_threshold_mm_hr=79, operational_limit_mm_hr=32,
        impervious_surface_percentage=64, catchment_area_sq_km=426,
        population_density="26,553 / sq km",
        external_map_url="https://www.openstreetmap.in/flood-map/chennai.html#12/13.04/80.2",
        districts=("CHENNAI CENTRAL", "TAMBARAM", "OMR IT CORRIDOR"),
        reservoir_names=("Chembarambakkam", "Red Hills", "Poondi", "Cholavaram", "Veeranam"),
        river_names=("Cooum River", "Adyar River"),
    ),
    build_profile(
        id="mumbai", name="Mumbai, India", level=LocationLevel.CITY,
        rainfall_threshold_mm_hr=55, operational_limit_mm_hr=25,
        impervious_surface_percentage=85, catchment_area_sq_km=603,
        population_density="32,303 / sq km",
        external_map_url="https://www.openstreetmap.org/#map=11/19.0800/72.8800",
        districts=("BANDRA WEST", "NAVI MUMBAI", "COLABA"),
        reservoir_names=("Tulsi Lake", "Vihar Lake", "Powai Lake", "Modak Sagar", "Tansa"),
        river_names=("Mithi River", "Dahisar River"),
    ),
    build_profile(
        id="tnagar", name="T. Nagar (Chennai Central)", level=LocationLevel.DISTRICT,
        rainfall_threshold_mm_hr=40, operational_limit_mm_hr=20,
        impervious_surface_percentage=92, catchment_area_sq_km=12,
        population_density="45,000 / sq km",
        external_map_url="https://www.openstreetmap.org/#map=15/13.0405/80.2337",
        districts=("PANAGAL PARK", "MAMBALAM", "G.N. CHETTY"),
        reservoir_names=("Local Tank 1", "Local Tank 2", "Temple Tank",
                         "Drainage Sump A", "Drainage Sump B"),
        river_names=("Mambalam Canal", "Adyar Tributary"),
    ),
    build_profile(
        id="bengaluru", name="Bengaluru, India", level=LocationLevel.CITY,
        rainfall_threshold_mm_hr=60, operational_limit_mm_hr=40,
        impervious_surface_percentage=78, catchment_area_sq_km=741,
        population_density="19,000 / sq km",
        districts=("INDIRANAGAR", "ELECTRONIC CITY", "WHITEFIELD"),
        reservoir_names=("Bellandur Lake", "Ulsoor Lake", "Sankey Tank", "Hebbal Lake", "Agara Lake"),
        river_names=("Vrishabhavathi", "Arkavathi"),
    ),
    build_profile(
        id="nyc", name="New York City, USA", level=LocationLevel.CITY,
        rainfall_threshold_mm_hr=45, operational_limit_mm_hr=35,
        impervious_surface_percentage=72, catchment_area_sq_km=783,
        population_density="11,313 / sq km",
        districts=("MANHATTAN", "BROOKLYN", "QUEENS"),
        reservoir_names=("Central Park Res", "Jerome Park", "Silver Lake", "Hillview", "Kensico"),
        river_names=("Hudson River", "East River"),
    ),
)}


def get_city(city_id: str) -> CityProfile:
    try:
        return CITIES[city_id]
    except KeyError:
        raise InvalidConfiguration(f"Unknown city profile '{city_id}'") from None


def list_cities() -> List[CityProfile]:
    return list(CITIES.values())
