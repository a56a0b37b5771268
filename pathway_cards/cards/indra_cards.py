import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from indra.assemblers.index_card import IndexCardAssembler
from indra.statements import Statement, stmts_from_json

from pathway_cards.cards.io import parse_cards
from pathway_cards.cards.models import Card

logger = logging.getLogger(__name__)


def cards_from_indra_statements(stmts: List[Statement],
                                pmc_override: Optional[str] = "unknown"
                                ) -> List[Card]:
    """
    Assemble INDRA statements into index cards.

    Args:
        stmts (List[Statement]): INDRA statements, e.g. machine reading output.
        pmc_override (str, optional): PMC id to put on every card. Set to None
            to let INDRA look the id up from the evidence (requires network
            access).

    Returns:
        List[Card]: One card per statement type INDRA can assemble;
        unsupported statement types are dropped.
    """
    if not stmts:
        logger.warning("No statements provided for card assembly.")
        return []

    assembler = IndexCardAssembler(stmts, pmc_override=pmc_override)
    assembler.make_model()
    cards = parse_cards([indra_card_to_json(index_card.card)
                         for index_card in assembler.cards])
    logger.info(f"Assembled {len(cards)} cards from {len(stmts)} statements.")
    return cards


def indra_card_to_json(indra_card: Dict[str, Any]) -> Dict[str, Any]:
    """Rewrite an INDRA index card into the card layout used here.

    INDRA keeps the interaction under ``interaction`` and the residue of
    modifications and features under ``location``; these become
    ``extracted_information`` and ``position``.
    """
    card_json = copy.deepcopy(indra_card)
    if "interaction" in card_json and "extracted_information" not in card_json:
        card_json["extracted_information"] = card_json.pop("interaction")
    _rename_locations(card_json.get("extracted_information"))
    return card_json


def _rename_locations(value: Any) -> None:
    if isinstance(value, list):
        for item in value:
            _rename_locations(item)
    elif isinstance(value, dict):
        is_feature = "feature_type" in value or "modification_type" in value
        if is_feature and "location" in value and "position" not in value:
            value["position"] = value.pop("location")
        for item in value.values():
            _rename_locations(item)


def load_indra_statement_cards(file_path: Union[str, Path],
                               pmc_override: Optional[str] = "unknown"
                               ) -> List[Card]:
    """Load INDRA statements from a JSON file and assemble them into cards."""
    with open(file_path, encoding="utf-8") as f:
        stmts = stmts_from_json(json.load(f))
    return cards_from_indra_statements(stmts, pmc_override=pmc_override)
