import logging
from typing import Any, List, Optional, Set

import pybiopax.biopax as bp

from pathway_cards.cards.models import (
    PROTEIN_FAMILY,
    ComplexParticipant,
    Feature,
    Participant,
    ProteinFamily,
    SimpleParticipant,
)
from pathway_cards.extractor.search import ElementReader
from pathway_cards.extractor.vocabulary import is_recognized, map_modification_term
from pathway_cards.resources.constants import ACTIVE_LABEL, INACTIVE_LABEL
from pathway_cards.util import SeenItems

logger = logging.getLogger(__name__)


def get_xref_id(xreferrable: Any, db_name: str) -> Optional[str]:
    """Find the id of the first xref from the given database.

    Simple physical entities fall back to the xrefs of their entity
    reference.
    """
    for xref in xreferrable.xref or []:
        if xref.db is not None and xref.db.lower() == db_name and xref.id is not None:
            return xref.id

    if isinstance(xreferrable, bp.SimplePhysicalEntity) and \
            xreferrable.entity_reference is not None:
        return get_xref_id(xreferrable.entity_reference, db_name)
    return None


def get_hgnc_symbol(xreferrable: Any) -> Optional[str]:
    return get_xref_id(xreferrable, "hgnc symbol")


def get_pubchem_id(xreferrable: Any) -> Optional[str]:
    return get_xref_id(xreferrable, "pubchem")


def get_uniprot_name(named: Any) -> Optional[str]:
    for name in named.name or []:
        if name.endswith("_HUMAN"):
            return "Uniprot:" + name
    return None


def get_grounding_id(element: Any) -> Optional[str]:
    if isinstance(element, (bp.Protein, bp.ProteinReference)):
        uniprot_name = get_uniprot_name(element)
        if uniprot_name is not None:
            return uniprot_name
    elif isinstance(element, (bp.SmallMolecule, bp.SmallMoleculeReference)):
        pubchem_id = get_pubchem_id(element)
        if pubchem_id is not None:
            return pubchem_id
    return get_hgnc_symbol(element)


def pick_a_name(named: Any) -> Optional[str]:
    if named.display_name:
        return named.display_name
    if named.standard_name:
        return named.standard_name
    return named.name[0] if named.name else None


def get_grounding_id_or_name(element: Any) -> Optional[str]:
    grounding_id = get_grounding_id(element)
    if grounding_id is None:
        grounding_id = pick_a_name(element)
    return grounding_id


def sequence_location_to_string(location: Any) -> str:
    """'@181' for a site, '@181-190' for an interval, '' if unknown."""
    if isinstance(location, bp.SequenceSite):
        position = _position(location)
        if position > 0:
            return f"@{position}"
    elif isinstance(location, bp.SequenceInterval):
        begin = location.sequence_interval_begin
        end = location.sequence_interval_end
        if begin is not None and end is not None:
            b, e = _position(begin), _position(end)
            if b > 0 and e > 0:
                return f"@{b}-{e}"
    return ""


def _position(site: Any) -> int:
    if site.sequence_position is None:
        return 0
    return int(site.sequence_position)


def _first_term(vocabulary: Any) -> Optional[str]:
    if vocabulary is None or not vocabulary.term:
        return None
    return vocabulary.term[0]


def modification_to_string(feature: Any, seen: Optional[SeenItems] = None
                           ) -> Optional[str]:
    """Canonical modification name followed by its location, if any."""
    term = _first_term(feature.modification_type)
    if term is None:
        return None
    mapped = map_modification_term(term)
    if not is_recognized(mapped) and seen is not None:
        seen.look(term)
    return mapped + sequence_location_to_string(feature.feature_location)


def read_modification_names(pe: Any) -> Set[str]:
    """Raw modification terms of a physical entity's features."""
    names = set()
    for feature in pe.feature or []:
        if isinstance(feature, bp.ModificationFeature) and \
                feature.modification_type is not None:
            names.update(feature.modification_type.term or [])
    return names


def read_differential_activity(pe1: Any, pe2: Any) -> int:
    """Activity change from pe1 to pe2 read from the activity labels.

    Returns 1 if pe2 became active, -1 if it became inactive and 0 when the
    labels do not tell.
    """
    feat1 = read_modification_names(pe1)
    feat2 = read_modification_names(pe2)
    active1, active2 = ACTIVE_LABEL in feat1, ACTIVE_LABEL in feat2
    inactive1, inactive2 = INACTIVE_LABEL in feat1, INACTIVE_LABEL in feat2

    if active2 and not active1:
        return 1
    if inactive2 and not inactive1:
        return -1
    if inactive1 and not inactive2:
        return 1
    if active1 and not active2:
        return -1
    return 0


def _to_features(entity_features: Any) -> List[Feature]:
    features = []
    for ef in entity_features or []:
        if isinstance(ef, bp.ModificationFeature):
            term = _first_term(ef.modification_type)
            if term is None:
                continue
            position = sequence_location_to_string(ef.feature_location)
            features.append(Feature(feature_type="modification",
                                    modification_type=map_modification_term(term),
                                    position=position or None))
        elif isinstance(ef, bp.BindingFeature):
            binds_to = ef.binds_to
            if binds_to is None:
                continue
            partner = getattr(binds_to, "entity_feature_of", None)
            bound_to = get_grounding_id_or_name(partner) if partner is not None else None
            if bound_to is not None:
                features.append(Feature(feature_type="binding", bound_to=bound_to))
    return features


def read_features(pe: Any) -> List[Feature]:
    return _to_features(pe.feature)


def read_negative_features(pe: Any) -> List[Feature]:
    return _to_features(pe.not_feature)


def _entity_type(pe: Any) -> str:
    if isinstance(pe, bp.Protein):
        return "protein"
    if isinstance(pe, bp.SmallMolecule):
        return "chemical"
    if isinstance(pe, bp.Rna):
        return "RNA"
    if isinstance(pe, bp.Dna):
        return "DNA"
    return "Unclassified"


def convert_to_participant(pe: Any) -> Participant:
    """Describe a physical entity as an index card participant."""
    if pe.member_physical_entity:
        return ProteinFamily(
            entity_type=PROTEIN_FAMILY,
            entity_text=pick_a_name(pe),
            family_members=[convert_to_participant(member)
                            for member in pe.member_physical_entity],
        )

    if isinstance(pe, bp.Complex):
        if pe.component:
            return ComplexParticipant([convert_to_participant(member)
                                       for member in pe.component])
        return ProteinFamily(entity_type=PROTEIN_FAMILY,
                             entity_text=pick_a_name(pe))

    uniprot_name = get_uniprot_name(pe)
    return SimpleParticipant(
        entity_type=_entity_type(pe),
        entity_text=pick_a_name(pe),
        identifier=uniprot_name if uniprot_name is not None else get_hgnc_symbol(pe),
        features=read_features(pe) or None,
        not_features=read_negative_features(pe) or None,
    )


class BiopaxElementReader(ElementReader):
    """Reads matched pybiopax elements for the miners."""

    def __init__(self, seen: Optional[SeenItems] = None) -> None:
        self.seen = seen

    def grounding_ids(self, entity_reference: Any) -> Set[str]:
        grounding_id = get_grounding_id_or_name(entity_reference)
        return {grounding_id} if grounding_id is not None else set()

    def modifications(self, simple_pe: Any, complex_pe: Any) -> Set[str]:
        mods = set()
        for pe in _chain(simple_pe, complex_pe):
            for feature in pe.feature or []:
                if isinstance(feature, bp.ModificationFeature):
                    mod = modification_to_string(feature, self.seen)
                    if mod is not None:
                        mods.add(mod)
        return mods

    def cellular_locations(self, simple_pe: Any, complex_pe: Any) -> Set[str]:
        locations = set()
        for pe in _chain(simple_pe, complex_pe):
            term = _first_term(pe.cellular_location)
            if term is not None:
                locations.add(term)
        return locations

    def control_sign(self, control: Any) -> int:
        control_type = control.control_type
        if control_type is not None and control_type.upper().startswith("INHIBITION"):
            return -1
        return 1

    def is_labeled_inactive(self, simple_pe: Any, complex_pe: Any) -> bool:
        names = set()
        for pe in _chain(simple_pe, complex_pe):
            names |= read_modification_names(pe)
        return INACTIVE_LABEL in names and ACTIVE_LABEL not in names

    def element_id(self, element: Any) -> str:
        return element.uid


def _chain(simple_pe: Any, complex_pe: Any) -> List[Any]:
    pes = [pe for pe in (simple_pe, complex_pe) if pe is not None]
    if len(pes) == 2 and pes[0] is pes[1]:
        return pes[:1]
    return pes
