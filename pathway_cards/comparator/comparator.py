import logging
from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm

from pathway_cards.cards.models import Card, CardMatch
from pathway_cards.comparator.identifiers import (
    build_id_index,
    participant_a,
    participant_b,
)
from pathway_cards.comparator.matching import (
    MATCH_FILTERS,
    MatchFilter,
    find_matching_cards,
    get_pb_query_ids,
    strict_pb_match,
)
from pathway_cards.comparator.modifications import compare_modifications
from pathway_cards.configs import ComparatorConfig

logger = logging.getLogger(__name__)

IdIndex = Dict[str, List[Card]]


class CardComparator:
    def __init__(self, config: Optional[ComparatorConfig] = None,
                 match_filter: Optional[MatchFilter] = strict_pb_match) -> None:
        """
        Compares inference cards against model cards.

        Args:
            config (ComparatorConfig, optional): Progress and match filter
                settings. A configured match filter name takes precedence
                over the match_filter argument.
            match_filter (callable, optional): Extra check a candidate model
                card must pass (default: same participant B identifier).
        """
        self.config = config
        self.show_progress = bool(config and config.show_progress)
        if config is not None and config.match_filter is not None:
            if config.match_filter not in MATCH_FILTERS:
                raise ValueError(f"Unknown match filter: {config.match_filter}")
            match_filter = MATCH_FILTERS[config.match_filter]
        self.match_filter = match_filter

    @staticmethod
    def build_indices(model_cards: Sequence[Card]) -> Tuple[IdIndex, IdIndex]:
        """Index model cards by participant A and by participant B.

        Only the participant B index is used for matching; the participant A
        index is kept for filtering candidates by their controller.
        """
        pa_index = build_id_index(model_cards, participant_a)
        pb_index = build_id_index(model_cards, participant_b)
        return pa_index, pb_index

    def compare_cards(self, model_cards: Sequence[Card],
                      inference_cards: Sequence[Card]) -> List[Card]:
        """
        Compare each inference card with the matching model cards.

        Args:
            model_cards (List[Card]): Cards from the curated model.
            inference_cards (List[Card]): Cards to annotate.

        Returns:
            List[Card]: The inference cards in input order. Cards with
            modifications and at least one candidate are copies carrying a
            ``match`` list, all others are returned as they are.
        """
        _, pb_index = self.build_indices(model_cards)
        logger.info(f"Indexed {len(model_cards)} model cards under "
                    f"{len(pb_index)} participant B identifiers.")

        cards_iter = inference_cards
        if self.show_progress:
            cards_iter = tqdm(inference_cards, desc="Comparing cards")

        updated_cards = []
        for inference_card in cards_iter:
            query_ids = get_pb_query_ids(inference_card)
            matching_cards = find_matching_cards(query_ids, inference_card,
                                                 pb_index, self.match_filter)
            updated_cards.append(
                self.find_model_relation(inference_card, matching_cards))

        logger.info(f"Compared {len(updated_cards)} inference cards: "
                    f"{dict(summarize_matches(updated_cards))}")
        return updated_cards

    @staticmethod
    def find_model_relation(inference_card: Card,
                            matching_cards: Sequence[Card]) -> Card:
        """Attach the modification comparison with each candidate.

        Candidates without modifications are skipped. The inference card is
        not modified; a copy is returned when there is anything to attach.
        """
        if not inference_card.has_modification() or not matching_cards:
            return inference_card

        modifications = inference_card.modifications
        matches = [
            CardMatch(type=compare_modifications(modifications, card.modifications),
                      card=card)
            for card in matching_cards if card.has_modification()
        ]
        return inference_card.model_copy(update={"match": matches})


def compare_cards(model_cards: Sequence[Card],
                  inference_cards: Sequence[Card],
                  match_filter: Optional[MatchFilter] = strict_pb_match
                  ) -> List[Card]:
    """Compare inference cards with model cards using default settings."""
    comparator = CardComparator(match_filter=match_filter)
    return comparator.compare_cards(model_cards, inference_cards)


def summarize_matches(cards: Sequence[Card]) -> Counter:
    """Count the match types attached to the given cards."""
    counts = Counter()
    for card in cards:
        for card_match in card.match or []:
            counts[card_match.type.value] += 1
    return counts
