import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from pathway_cards.cards.models import Card
from pathway_cards.errors import MalformedCardError

logger = logging.getLogger(__name__)


def parse_card(card_json: Dict[str, Any], index: Optional[int] = None) -> Card:
    """Validate a single index card JSON object."""
    if not isinstance(card_json, dict):
        raise MalformedCardError("Index card is not a JSON object",
                                 {"index": index,
                                  "type": type(card_json).__name__})
    try:
        return Card.model_validate(card_json)
    except ValidationError as e:
        raise MalformedCardError(
            "Invalid index card",
            {"index": index, "errors": e.error_count(),
             "first_error": e.errors()[0]["loc"]}
        ) from e


def parse_cards(cards_json: Union[List[Dict[str, Any]], Dict[str, Any]]
                ) -> List[Card]:
    """Validate a list of index cards. A single card is accepted too."""
    if isinstance(cards_json, dict):
        cards_json = [cards_json]
    return [parse_card(card_json, i) for i, card_json in enumerate(cards_json)]


def load_cards(file_path: Union[str, Path]) -> List[Card]:
    """Load index cards from a JSON file."""
    with open(file_path, encoding="utf-8") as f:
        cards_json = json.load(f)
    cards = parse_cards(cards_json)
    logger.info(f"Loaded {len(cards)} cards from {file_path}")
    return cards


def dump_cards(cards: Sequence[Card], file_path: Union[str, Path]) -> None:
    """Write index cards, including any match annotations, as a JSON array."""
    output_path = Path(file_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump([card.to_json_dict() for card in cards], f, indent=1)
    logger.info(f"Wrote {len(cards)} cards to {output_path}")
