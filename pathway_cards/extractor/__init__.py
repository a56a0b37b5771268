from pathway_cards.extractor.card_miner import ModificationCardMiner
from pathway_cards.extractor.miners import (
    MINER_CLASSES,
    AbstractMiner,
    ControlsStateChangeButIsParticipantMiner,
    ControlsStateChangeMiner,
    ControlsStateChangeThroughSmallMoleculeMiner,
    DeltaTables,
)
from pathway_cards.extractor.search import (
    Blacklist,
    ElementReader,
    Match,
    PatternSearcher,
    PatternSpec,
    load_blacklist,
)
from pathway_cards.extractor.vocabulary import map_modification_term
