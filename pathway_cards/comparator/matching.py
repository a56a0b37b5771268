from typing import Callable, Dict, Iterable, List, Optional

from pathway_cards.cards.models import Card, ComplexParticipant, Participant

MatchFilter = Callable[[Card, Card], bool]


def direct_identifier(participant: Optional[Participant]) -> Optional[str]:
    """The participant's own identifier, without looking into members."""
    if participant is None or isinstance(participant, ComplexParticipant):
        return None
    return participant.identifier


def get_pb_query_ids(card: Card) -> List[str]:
    """Identifiers of participant B to look up model cards with.

    Complexes and protein family members are not considered yet, only the
    identifier of participant B itself.
    """
    pb_id = direct_identifier(card.participant_b)
    return [pb_id] if pb_id is not None else []


def strict_pb_match(inference_card: Card, model_card: Card) -> bool:
    """Check that both cards have the same participant B identifier."""
    inference_id = direct_identifier(inference_card.participant_b)
    return (inference_id is not None and
            direct_identifier(model_card.participant_b) == inference_id)


MATCH_FILTERS: Dict[str, Optional[MatchFilter]] = {
    "strict_pb": strict_pb_match,
    "none": None,
}


def find_matching_cards(query_ids: Iterable[str],
                        inference_card: Card,
                        id_index: Dict[str, List[Card]],
                        match_filter: Optional[MatchFilter] = None
                        ) -> List[Card]:
    """Find the indexed cards matching an inference card.

    A candidate must have the same interaction type as the inference card
    and pass the match filter. Without a filter, cards are matched by
    interaction type only. A candidate reachable through more than one query
    id is returned once per id.
    """
    if match_filter is None:
        match_filter = lambda inference, model: True

    matching_cards = []
    for query_id in query_ids:
        for card in id_index.get(query_id, []):
            if (inference_card.interaction_type == card.interaction_type and
                    match_filter(inference_card, card)):
                matching_cards.append(card)
    return matching_cards
