from typing import Callable, Dict, Iterable, List, Optional

from pathway_cards.cards.models import Card, Participant

ParticipantSelector = Callable[[Card], Optional[Participant]]


def participant_a(card: Card) -> Optional[Participant]:
    return card.participant_a


def participant_b(card: Card) -> Optional[Participant]:
    return card.participant_b


def extract_all_ids(participant: Optional[Participant]) -> List[str]:
    """Extract recursively all identifiers of a participant.

    Complexes contribute the identifiers of their members, protein families
    those of their family members and simple participants their own
    identifier, if any. Participant structures must be acyclic.
    """
    if participant is None:
        return []
    return participant.all_ids()


def update_id_index(id_index: Dict[str, List[Card]],
                    participant: Optional[Participant],
                    card: Card) -> None:
    """Add a card to the index under every identifier of the participant."""
    for identifier in extract_all_ids(participant):
        cards = id_index.setdefault(identifier, [])
        if not any(indexed is card for indexed in cards):
            cards.append(card)


def build_id_index(cards: Iterable[Card],
                   participant_selector: ParticipantSelector
                   ) -> Dict[str, List[Card]]:
    """Index cards by the identifiers of the selected participant.

    Parameters
    ----------
    cards :
        The cards to index.
    participant_selector :
        Returns the participant of a card to take identifiers from, e.g.
        :func:`participant_a` or :func:`participant_b`.

    Returns
    -------
    :
        A dict from identifier to the cards having that identifier. Cards
        without any identifier do not appear in the index.
    """
    id_index: Dict[str, List[Card]] = {}
    for card in cards:
        update_id_index(id_index, participant_selector(card), card)
    return id_index
