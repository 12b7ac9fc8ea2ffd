# Reference densities for common fill materials — typical published values,
# cured/settled where that applies. Use supplier data sheets for real jobs.

# Densities (g/cm³)
DENSITIES = {
    "water": 1.00,
    "concrete": 2.40,
    "mortar": 2.10,
    "plaster_of_paris": 1.00,
    "epoxy_resin": 1.15,
    "polyurethane_resin": 1.10,
    "silicone_rubber": 1.10,
    "polyurethane_foam_rigid": 0.032,
    "expanding_foam_spray": 0.025,
    "dry_sand": 1.60,
    "gravel": 1.68,
    "pla": 1.24,
    "abs": 1.04,
    "paraffin_wax": 0.90,
    "aluminum": 2.70,
    "lead": 11.34,
}

LABELS = {
    "water": "Water",
    "concrete": "Concrete (normal weight)",
    "mortar": "Cement mortar",
    "plaster_of_paris": "Plaster of Paris (set)",
    "epoxy_resin": "Epoxy casting resin",
    "polyurethane_resin": "Polyurethane casting resin",
    "silicone_rubber": "Silicone mold rubber",
    "polyurethane_foam_rigid": "Rigid PU foam (2 lb/ft³)",
    "expanding_foam_spray": "Canned expanding foam",
    "dry_sand": "Dry sand (loose)",
    "gravel": "Gravel",
    "pla": "PLA (solid print)",
    "abs": "ABS (solid print)",
    "paraffin_wax": "Paraffin wax",
    "aluminum": "Cast aluminum",
    "lead": "Lead",
}


def normalize_material(material: str) -> str:
    """Map user spellings ('Epoxy Resin', 'epoxy-resin') to a table key."""
    return material.strip().lower().replace(" ", "_").replace("-", "_")


def density_for(material: str) -> float:
    """Look up density (g/cm³) for a material key, or raise ValueError."""
    key = normalize_material(material)
    if key not in DENSITIES:
        raise ValueError(
            f"Unknown material: {material}. "
            f"Available: {list(DENSITIES.keys())}"
        )
    return DENSITIES[key]
