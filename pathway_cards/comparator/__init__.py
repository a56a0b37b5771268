from pathway_cards.comparator.comparator import (
    CardComparator,
    compare_cards,
    summarize_matches,
)
from pathway_cards.comparator.identifiers import build_id_index, extract_all_ids
from pathway_cards.comparator.matching import (
    find_matching_cards,
    get_pb_query_ids,
    strict_pb_match,
)
from pathway_cards.comparator.modifications import (
    compare,
    compare_modifications,
    is_equal_position,
)
