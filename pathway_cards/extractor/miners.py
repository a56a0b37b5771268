import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from pathway_cards.errors import UnknownPatternError
from pathway_cards.extractor.search import (
    Blacklist,
    ElementReader,
    Match,
    PatternSpec,
)

logger = logging.getLogger(__name__)

PairTable = Dict[str, Dict[str, Set[str]]]


def _pair_table() -> PairTable:
    return defaultdict(lambda: defaultdict(set))


class DeltaTables:
    """Aggregated state changes per (source id, target id) pair."""

    TABLES = [
        "gain_mods",
        "loss_mods",
        "gain_comps",
        "loss_comps",
        "source_mods",
        "source_comps",
        "mediators",
    ]

    def __init__(self) -> None:
        for table in self.TABLES:
            setattr(self, table, _pair_table())

    def collect(self, source: str, target: str, values: Iterable[str],
                table: str) -> None:
        getattr(self, table)[source][target].update(values)

    def get(self, table: str, source: str, target: str) -> Set[str]:
        pair_table = getattr(self, table)
        if source in pair_table and target in pair_table[source]:
            return set(pair_table[source][target])
        return set()

    def pairs(self) -> List[Tuple[str, str]]:
        """Pairs with any gained or lost modification or location."""
        pairs = set()
        for table in ["gain_mods", "loss_mods", "gain_comps", "loss_comps"]:
            for source, targets in getattr(self, table).items():
                pairs.update((source, target) for target in targets)
        return sorted(pairs)

    def as_dict(self) -> Dict[Tuple[str, str], Dict[str, Set[str]]]:
        return {
            (source, target): {
                "gained_modifications": self.get("gain_mods", source, target),
                "lost_modifications": self.get("loss_mods", source, target),
                "gained_locations": self.get("gain_comps", source, target),
                "lost_locations": self.get("loss_comps", source, target),
                "source_modifications": self.get("source_mods", source, target),
                "source_locations": self.get("source_comps", source, target),
                "mediators": self.get("mediators", source, target),
            }
            for source, target in self.pairs()
        }


class AbstractMiner:
    """Collects the state changes a controller causes on its target.

    Subclasses pick the pattern and may rename the graph roles they read.
    """
    pattern_name: str = None
    uses_blacklist = False

    source_label = "controller ER"
    target_label = "changed ER"
    source_simple_pe_label = "controller simple PE"
    source_complex_pe_label = "controller PE"
    input_simple_pe_label = "input simple PE"
    input_complex_pe_label = "input PE"
    output_simple_pe_label = "output simple PE"
    output_complex_pe_label = "output PE"
    mediator_labels = ["Control", "Conversion"]
    control_labels = ["Control"]

    def __init__(self, reader: ElementReader,
                 blacklist: Optional[Blacklist] = None) -> None:
        self.reader = reader
        self.blacklist = blacklist

    def get_pattern(self) -> PatternSpec:
        return PatternSpec(self.pattern_name,
                           self.blacklist if self.uses_blacklist else None)

    def collect_results(self, matches: Dict[Any, List[Match]],
                        tables: DeltaTables) -> None:
        n_matches = 0
        for match_list in matches.values():
            for match in match_list:
                self.collect_match(match, tables)
                n_matches += 1
        logger.info(f"{self.pattern_name}: processed {n_matches} matches.")

    def collect_match(self, match: Match, tables: DeltaTables) -> None:
        sources = self.get_identifiers(match, self.source_label)
        targets = self.get_identifiers(match, self.target_label)
        if not sources or not targets:
            return

        modif = self.get_delta_modifications(match)
        comps = self.get_delta_compartments(match)

        # Negative controls and inactive controllers turn gains into losses
        sign = self.sign(match)
        if self.labeled_inactive(match):
            sign *= -1

        gained_mods, lost_mods = modif if sign != -1 else modif[::-1]
        gained_comps, lost_comps = comps if sign != -1 else comps[::-1]
        has_delta = any(modif) or any(comps)

        for source in sorted(sources):
            for target in sorted(targets):
                if gained_mods:
                    tables.collect(source, target, gained_mods, "gain_mods")
                if lost_mods:
                    tables.collect(source, target, lost_mods, "loss_mods")
                if gained_comps:
                    tables.collect(source, target, gained_comps, "gain_comps")
                if lost_comps:
                    tables.collect(source, target, lost_comps, "loss_comps")

                if has_delta:
                    tables.collect(source, target, self.get_mediator_ids(match),
                                   "mediators")
                    tables.collect(source, target,
                                   self.reader.modifications(*self._source_pes(match)),
                                   "source_mods")
                    tables.collect(source, target,
                                   self.reader.cellular_locations(*self._source_pes(match)),
                                   "source_comps")

    def get_identifiers(self, match: Match, label: str) -> Set[str]:
        element = match.get(label)
        if element is None:
            return set()
        return self.reader.grounding_ids(element)

    def get_delta_modifications(self, match: Match) -> List[Set[str]]:
        """Modifications gained and lost by the target, in that order."""
        before = self.reader.modifications(*self._input_pes(match))
        after = self.reader.modifications(*self._output_pes(match))
        return [after - before, before - after]

    def get_delta_compartments(self, match: Match) -> List[Set[str]]:
        """Cellular locations gained and lost by the target, in that order."""
        before = self.reader.cellular_locations(*self._input_pes(match))
        after = self.reader.cellular_locations(*self._output_pes(match))
        return [after - before, before - after]

    def sign(self, match: Match) -> int:
        sign = 1
        for control in match.get_all(self.control_labels):
            sign *= self.reader.control_sign(control)
        return sign

    def labeled_inactive(self, match: Match) -> bool:
        return self.reader.is_labeled_inactive(*self._source_pes(match))

    def get_mediator_ids(self, match: Match) -> Set[str]:
        return {self.reader.element_id(mediator)
                for mediator in match.get_all(self.mediator_labels)}

    def _source_pes(self, match: Match) -> Tuple[Any, Any]:
        return (match.get(self.source_simple_pe_label),
                match.get(self.source_complex_pe_label))

    def _input_pes(self, match: Match) -> Tuple[Any, Any]:
        return (match.get(self.input_simple_pe_label),
                match.get(self.input_complex_pe_label))

    def _output_pes(self, match: Match) -> Tuple[Any, Any]:
        return (match.get(self.output_simple_pe_label),
                match.get(self.output_complex_pe_label))


class ControlsStateChangeMiner(AbstractMiner):
    pattern_name = "controls-state-change"


class ControlsStateChangeButIsParticipantMiner(AbstractMiner):
    """The controller also takes part in the conversion it controls."""
    pattern_name = "controls-state-change-but-is-participant"
    mediator_labels = ["Conversion"]
    control_labels = []


class ControlsStateChangeThroughSmallMoleculeMiner(AbstractMiner):
    """The controller produces a small molecule that controls the change."""
    pattern_name = "controls-state-change-through-controller-small-molecule"
    uses_blacklist = True

    source_label = "upper controller ER"
    source_simple_pe_label = "upper controller simple PE"
    source_complex_pe_label = "upper controller PE"
    mediator_labels = ["upper Control", "upper Conversion", "Control", "Conversion"]
    control_labels = ["upper Control", "Control"]


MINER_CLASSES = {
    miner_class.pattern_name: miner_class
    for miner_class in [
        ControlsStateChangeMiner,
        ControlsStateChangeButIsParticipantMiner,
        ControlsStateChangeThroughSmallMoleculeMiner,
    ]
}


def get_miner_class(pattern_name: str):
    miner_class = MINER_CLASSES.get(pattern_name)
    if miner_class is None:
        raise UnknownPatternError(f"Unknown pattern: {pattern_name}",
                                  {"known": ", ".join(sorted(MINER_CLASSES))})
    return miner_class
