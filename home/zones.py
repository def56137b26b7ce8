"""
Zonal education hierarchy for Sri Lanka.

Province -> District -> Zonal Education Division. The order of the data below
is the order shown to users (it is not alphabetical). Names are compared as
exact strings everywhere in the project.
"""
from types import MappingProxyType


def _freeze(data):
    return MappingProxyType({
        province: MappingProxyType({
            district: tuple(zones) for district, zones in districts.items()
        })
        for province, districts in data.items()
    })


ZONAL_EDUCATION_DATA = _freeze({
    "Western": {
        "Colombo": ["Colombo", "Homagama", "Piliyandala", "Sri Jayawardenepura"],
        "Gampaha": ["Gampaha", "Kelaniya", "Minuwangoda", "Negombo"],
        "Kalutara": ["Horana", "Kalutara", "Matugama"],
    },
    "Central": {
        "Kandy": ["Denuwara", "Gampola", "Kandy", "Katugastota", "Teldeniya", "Waththegama"],
        "Matale": ["Galewela", "Matale", "Naula", "Wilgamuwa"],
        "Nuwara Eliya": ["Hanguranketha", "Hatton", "Kotmale", "Nuwara Eliya", "Walapane"],
    },
    "Southern": {
        "Galle": ["Ambalangoda", "Elpitiya", "Galle", "Udugama"],
        "Hambantota": ["Hambantota", "Tangalle", "Walasmulla"],
        "Matara": ["Akuressa", "Matara", "Morawaka", "Mulatiyana (Hakmana)"],
    },
    "Northern": {
        "Jaffna": ["Islands", "Jaffna", "Thenmarachchi", "Vadamarachchi", "Valikamam"],
        "Kilinochchi": ["Kilinochchi"],
        "Mannar": ["Madhu", "Mannar"],
        "Mullaitivu": ["Mullaitivu", "Thunukkai"],
        "Vavuniya": ["Vavuniya", "Vavuniya North"],
    },
    "Eastern": {
        "Ampara": ["Akkaraipattu", "Ampara", "Dehiattakandiya", "Kalmunai", "Mahaoya", "Sammanthurai", "Thirukkovil"],
        "Batticaloa": ["Batticaloa", "Batticaloa Central", "Batticaloa West", "Kalkudah", "Paddirippu"],
        "Trincomalee": ["Kantalai", "Kinniya", "Mutur", "Trincomalee", "Trincomalee North"],
    },
    "North Western": {
        "Kurunegala": ["Giriulla", "Ibbagamuwa", "Kuliyapitiya", "Kurunegala", "Maho", "Nikaweratiya"],
        "Puttalam": ["Chilaw", "Puttalam"],
    },
    "North Central": {
        "Anuradhapura": ["Anuradhapura", "Galenbindunuwewa", "Kebithigollewa", "Kekirawa", "Tambuttegama"],
        "Polonnaruwa": ["Dimbulagala", "Hingurakgoda", "Polonnaruwa"],
    },
    "Uva": {
        "Badulla": ["Badulla", "Bandarawela", "Viyaluwa", "Mahiyanganaya", "Passara", "Welimada"],
        "Monaragala": ["Bibile", "Monaragala", "Wellawaya"],
    },
    "Sabaragamuwa": {
        "Kegalle": ["Dehiowita", "Kegalle", "Mawanella"],
        "Ratnapura": ["Balangoda", "Embilipitiya", "Nivitigala", "Ratnapura"],
    },
})


def list_provinces():
    """All provinces, in the order the hierarchy declares them."""
    return list(ZONAL_EDUCATION_DATA.keys())


def list_districts(province):
    """
    Districts of a province.
    Returns an empty list when the province is empty or unknown.
    """
    if not province or not isinstance(province, str):
        return []
    return list(ZONAL_EDUCATION_DATA.get(province, {}).keys())


def list_zones(province, district):
    """
    Zonal education divisions of a district.
    Returns an empty list when either argument is empty or unknown.
    """
    if not province or not district:
        return []
    if not isinstance(province, str) or not isinstance(district, str):
        return []
    return list(ZONAL_EDUCATION_DATA.get(province, {}).get(district, ()))


def is_valid_location(province, district, zone=None):
    """Check that a province/district (and optionally zone) exists in the hierarchy."""
    if district not in list_districts(province):
        return False
    if zone is None:
        return True
    return zone in list_zones(province, district)


# Helpers for Django form fields

def province_choices():
    return [(p, p) for p in list_provinces()]


def district_choices(province):
    return [(d, d) for d in list_districts(province)]


def zone_choices(province, district):
    return [(z, z) for z in list_zones(province, district)]
