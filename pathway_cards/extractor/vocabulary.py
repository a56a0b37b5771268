"""Mapping of raw BioPAX modification terms to canonical modification names."""

UNRECOGNIZED_PREFIX = "Unrecognized: "

# Checked in order, the first substring found in the lowercased term wins
MODIFICATION_TERMS = [
    ("phospho", "Phosphorylation"),
    ("acetyl", "Acetylation"),
    ("farnesyl", "Farnesylation"),
    ("glyco", "Glycosylation"),
    ("hydroxy", "Hydroxylation"),
    ("methyl", "Methylation"),
    ("ribosyl", "Ribosylation"),
    ("sumoyl", "Sumoylation"),
    ("ubiq", "Ubiquitination"),
]


def map_modification_term(raw_term: str) -> str:
    """Get the canonical modification name for a raw ontology term.

    >>> map_modification_term("O-phospho-L-serine")
    'Phosphorylation'
    >>> map_modification_term("Palmitoylated residue")
    'Unrecognized: palmitoylated residue'
    """
    term = raw_term.lower()
    for substring, canonical in MODIFICATION_TERMS:
        if substring in term:
            return canonical
    return UNRECOGNIZED_PREFIX + term


def is_recognized(canonical_term: str) -> bool:
    return not canonical_term.startswith(UNRECOGNIZED_PREFIX)
