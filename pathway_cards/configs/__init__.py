from pathway_cards.configs.config import (
    BaseConfig,
    ProcessorConfig,
    ComparatorConfig,
    MinerConfig,
)
