import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

import pandas as pd

from pathway_cards.configs import MinerConfig
from pathway_cards.extractor.miners import (
    MINER_CLASSES,
    AbstractMiner,
    DeltaTables,
    get_miner_class,
)
from pathway_cards.extractor.search import (
    Blacklist,
    ElementReader,
    PatternSearcher,
    load_blacklist,
)
from pathway_cards.resources.constants import (
    CONTROLS_STATE_CHANGE_OF,
    REPORT_COLUMNS,
    REPORT_DEFAULT,
)

logger = logging.getLogger(__name__)


class ModificationCardMiner:
    def __init__(self,
                 searcher: PatternSearcher,
                 reader: ElementReader,
                 blacklist: Optional[Blacklist] = None,
                 miners: Optional[Sequence[str]] = None) -> None:
        """
        Mines a pathway model for the state changes controllers cause.

        Args:
            searcher (PatternSearcher): Finds the pattern matches in the model.
            reader (ElementReader): Reads ids, modifications and locations
                from the matched elements.
            blacklist (Blacklist, optional): Ubiquitous small molecules, used
                by the patterns going through controller small molecules.
            miners (List[str], optional): Pattern names to mine. All known
                patterns by default.
        """
        self.searcher = searcher
        self.reader = reader
        self.blacklist = blacklist
        pattern_names = list(miners) if miners else list(MINER_CLASSES)
        self.miners: List[AbstractMiner] = [
            get_miner_class(name)(reader, blacklist) for name in pattern_names
        ]
        self.tables = DeltaTables()
        self.report_file: Optional[str] = None

    @classmethod
    def from_config(cls, config: MinerConfig, searcher: PatternSearcher,
                    reader: ElementReader) -> "ModificationCardMiner":
        blacklist = None
        if config.blacklist_file:
            blacklist = load_blacklist(config.blacklist_file)
        miner = cls(searcher, reader, blacklist=blacklist, miners=config.miners)
        miner.report_file = config.report_file
        return miner

    def set_blacklist(self, blacklist: Blacklist) -> None:
        self.blacklist = blacklist
        for miner in self.miners:
            miner.blacklist = blacklist

    def mine_and_collect(self, model: Any) -> DeltaTables:
        for miner in self.miners:
            logger.info(f"Searching model for {miner.pattern_name}...")
            matches = self.searcher.search(model, miner.get_pattern())
            miner.collect_results(matches, self.tables)
        logger.info(f"Collected state changes for {len(self.tables.pairs())} "
                    f"source-target pairs.")
        return self.tables

    def results_frame(self) -> pd.DataFrame:
        """The collected state changes, one row per source-target pair."""
        rows = []
        for source, target in self.tables.pairs():
            rows.append([
                source,
                CONTROLS_STATE_CHANGE_OF,
                target,
                self._cell("source_mods", source, target),
                self._cell("source_comps", source, target),
                self._cell("gain_mods", source, target),
                self._cell("loss_mods", source, target),
                self._cell("gain_comps", source, target),
                self._cell("loss_comps", source, target),
                self._cell("mediators", source, target),
            ])
        return pd.DataFrame(rows, columns=REPORT_COLUMNS)

    def write_results(self, file_path: Optional[Union[str, Path]] = None) -> None:
        file_path = file_path or self.report_file or REPORT_DEFAULT
        output_path = Path(file_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df = self.results_frame()
        df.to_csv(output_path, sep="\t", index=False)
        logger.info(f"Wrote {len(df)} rows to {output_path}")

    def _cell(self, table: str, source: str, target: str) -> str:
        return " ".join(sorted(self.tables.get(table, source, target)))
