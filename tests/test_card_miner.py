import pandas as pd

from pathway_cards.configs import BaseConfig, MinerConfig
from pathway_cards.extractor.card_miner import ModificationCardMiner
from pathway_cards.extractor.search import Blacklist, Match, PatternSearcher, load_blacklist
from pathway_cards.resources.constants import REPORT_COLUMNS

from test_miners import Element, FakeReader


class FakeSearcher(PatternSearcher):
    def __init__(self, matches_by_pattern):
        self.matches_by_pattern = matches_by_pattern
        self.patterns = []

    def search(self, model, pattern):
        self.patterns.append(pattern)
        return {"model": self.matches_by_pattern.get(pattern.name, [])}


def state_change_match():
    return Match({
        "controller ER": Element("er1", ids=("MAPK1",)),
        "changed ER": Element("er2", ids=("ELK1",)),
        "controller simple PE": Element("pe1", mods=("Phosphorylation@185",)),
        "input simple PE": Element("pe2", locs=("cytosol",)),
        "output simple PE": Element("pe3", mods=("Phosphorylation@383",
                                                 "Phosphorylation@389"),
                                    locs=("nucleus",)),
        "Control": Element("control1"),
        "Conversion": Element("conversion1"),
    })


def test_mine_and_write_results(tmp_path):
    searcher = FakeSearcher({"controls-state-change": [state_change_match()]})
    blacklist = Blacklist({"ATP": (100, "")})
    miner = ModificationCardMiner(searcher, FakeReader(), blacklist=blacklist)
    miner.mine_and_collect(model=object())

    assert [p.name for p in searcher.patterns] == [
        "controls-state-change",
        "controls-state-change-but-is-participant",
        "controls-state-change-through-controller-small-molecule",
    ]
    assert searcher.patterns[2].blacklist is blacklist

    df = miner.results_frame()
    assert list(df.columns) == REPORT_COLUMNS
    row = df.iloc[0]
    assert row["Source"] == "MAPK1"
    assert row["Type"] == "controls-state-change-of"
    assert row["Target"] == "ELK1"
    assert row["Source-modifs"] == "Phosphorylation@185"
    assert row["Gained-modifs"] == "Phosphorylation@383 Phosphorylation@389"
    assert row["Lost-modifs"] == ""
    assert row["Gained-locs"] == "nucleus"
    assert row["Lost-locs"] == "cytosol"
    assert row["Mediators"] == "control1 conversion1"

    report = tmp_path / "DeltaFeatures.txt"
    miner.write_results(report)
    lines = report.read_text().splitlines()
    assert lines[0] == "\t".join(REPORT_COLUMNS)
    assert len(lines) == 2
    assert lines[1].split("\t")[:3] == ["MAPK1", "controls-state-change-of", "ELK1"]

    read_back = pd.read_csv(report, sep="\t", keep_default_na=False)
    assert read_back.loc[0, "Mediators"] == "control1 conversion1"


def test_selected_miners_only():
    searcher = FakeSearcher({})
    miner = ModificationCardMiner(searcher, FakeReader(),
                                  miners=["controls-state-change-but-is-participant"])
    miner.mine_and_collect(model=None)
    assert [p.name for p in searcher.patterns] == [
        "controls-state-change-but-is-participant"]
    assert miner.results_frame().empty


def test_set_blacklist():
    miner = ModificationCardMiner(FakeSearcher({}), FakeReader())
    blacklist = Blacklist({"ATP": (1, "I")})
    miner.set_blacklist(blacklist)
    assert all(m.blacklist is blacklist for m in miner.miners)


def test_load_blacklist(tmp_path):
    blacklist_file = tmp_path / "blacklist.txt"
    blacklist_file.write_text(
        "http://pathwaycommons.org/pc2/SmallMoleculeReference_ATP\t120\t\n"
        "http://pathwaycommons.org/pc2/SmallMoleculeReference_H2O\t250\tI\n"
        "\n"
    )
    blacklist = load_blacklist(blacklist_file)
    assert len(blacklist) == 2
    assert "http://pathwaycommons.org/pc2/SmallMoleculeReference_H2O" in blacklist
    assert blacklist.get_score(
        "http://pathwaycommons.org/pc2/SmallMoleculeReference_H2O") == 250
    assert blacklist.get_context(
        "http://pathwaycommons.org/pc2/SmallMoleculeReference_ATP") == ""


def test_from_config(tmp_path):
    blacklist_file = tmp_path / "blacklist.txt"
    blacklist_file.write_text("ATP\t120\t\n")
    report = tmp_path / "out" / "report.txt"
    config = MinerConfig(BaseConfig({
        "blacklist_file": blacklist_file.as_posix(),
        "miners": ["controls-state-change"],
        "report_file": report.as_posix(),
    }))
    searcher = FakeSearcher({"controls-state-change": [state_change_match()]})
    miner = ModificationCardMiner.from_config(config, searcher, FakeReader())

    assert "ATP" in miner.blacklist
    assert [m.pattern_name for m in miner.miners] == ["controls-state-change"]

    miner.mine_and_collect(model=None)
    miner.write_results()
    assert report.read_text().splitlines()[1].startswith("MAPK1\t")
