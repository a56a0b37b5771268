from pathlib import Path

HERE = Path(__file__).parent.resolve()
ROOT_DIR = HERE.parent.parent
OUTPUT_DIR = ROOT_DIR / "output"

OUTPUT_DEFAULT = OUTPUT_DIR / "compared_cards.json"
REPORT_DEFAULT = OUTPUT_DIR / "DeltaFeatures.txt"

# Two integer residue positions within this distance are the same position
POS_RANGE = 1

CONTROLS_STATE_CHANGE_OF = "controls-state-change-of"

REPORT_COLUMNS = [
    "Source",
    "Type",
    "Target",
    "Source-modifs",
    "Source-locs",
    "Gained-modifs",
    "Lost-modifs",
    "Gained-locs",
    "Lost-locs",
    "Mediators",
]

ACTIVE_LABEL = "residue modification, active"
INACTIVE_LABEL = "residue modification, inactive"
