from typing import Any, Mapping

from pathway_cards.resources.constants import OUTPUT_DEFAULT, REPORT_DEFAULT


class BaseConfig:
    def __init__(self, kwargs: Mapping[str, Any]) -> None:
        self.model_cards_file = kwargs.get("model_cards_file", None)
        self.inference_cards_file = kwargs.get("inference_cards_file", None)
        self.indra_statements = kwargs.get("indra_statements", False)
        self.output_file = kwargs.get("output_file", None) or OUTPUT_DEFAULT.as_posix()
        self.report_file = kwargs.get("report_file", None) or REPORT_DEFAULT.as_posix()
        self.blacklist_file = kwargs.get("blacklist_file", None)
        self.miners = kwargs.get("miners", None)
        self.show_progress = kwargs.get("show_progress", False)
        self.match_filter = kwargs.get("match_filter", "strict_pb")


class ProcessorConfig:
    def __init__(self, base_config: BaseConfig) -> None:
        self.base_config = base_config


class ComparatorConfig(ProcessorConfig):
    def __init__(self, base_config: BaseConfig) -> None:
        super().__init__(base_config)

        self.show_progress = base_config.show_progress
        self.match_filter = base_config.match_filter


class MinerConfig(ProcessorConfig):
    def __init__(self, base_config: BaseConfig) -> None:
        super().__init__(base_config)

        self.blacklist_file = base_config.blacklist_file
        self.miners = base_config.miners
        self.report_file = base_config.report_file
