from pathway_cards.cards.models import (
    Card,
    CardMatch,
    ComplexParticipant,
    ExtractedInformation,
    Feature,
    MatchType,
    Modification,
    Participant,
    ProteinFamily,
    SimpleParticipant,
)
from pathway_cards.cards.io import dump_cards, load_cards, parse_card, parse_cards
