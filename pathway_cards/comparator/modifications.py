import re
from typing import Callable, List, Optional, Sequence, TypeVar

from pathway_cards.cards.models import MatchType, Modification
from pathway_cards.resources.constants import POS_RANGE

T = TypeVar("T")

EqualityFn = Callable[[Modification, Modification], bool]

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_position(position: Optional[str]) -> Optional[int]:
    """Parse the leading integer of a position string.

    Returns None if the position is missing or does not start with an
    integer, e.g. ``"@181"`` or ``"N-terminus"``. Trailing text is ignored so
    an interval such as ``"181-190"`` parses as 181.
    """
    if position is None:
        return None
    match = _LEADING_INT.match(str(position))
    if match is None:
        return None
    return int(match.group(1))


def _same_type(modification_a: Modification,
               modification_b: Modification) -> bool:
    return (modification_a.modification_type.lower() ==
            modification_b.modification_type.lower())


def is_equal_position(modification_a: Modification,
                      modification_b: Modification) -> bool:
    """Check whether two modifications are at the same position.

    Integer positions are equal if they are at most ``POS_RANGE`` residues
    apart. If either position is not an integer the raw values are compared
    as strings (two missing positions are equal).
    """
    pos_a = parse_position(modification_a.position)
    pos_b = parse_position(modification_b.position)

    if pos_a is None or pos_b is None:
        return modification_a.position == modification_b.position

    return abs(pos_a - pos_b) <= POS_RANGE


def strong_equality(modification_a: Modification,
                    modification_b: Modification) -> bool:
    """Same modification type at the same position."""
    return (is_equal_position(modification_a, modification_b) and
            _same_type(modification_a, modification_b))


def weak_equality(modification_a: Modification,
                  modification_b: Modification) -> bool:
    """Same modification type where at least one position is unknown."""
    return (_same_type(modification_a, modification_b) and
            (modification_a.position is None or
             modification_b.position is None))


def weak_difference(modification_a: Modification,
                    modification_b: Modification) -> bool:
    """Check whether modification A differs from modification B.

    This is directional: a positioned A differs from a position-less B, but
    a position-less A does not differ from a positioned B.
    """
    if not _same_type(modification_a, modification_b):
        return True
    if modification_a.position is not None and modification_b.position is None:
        return True
    if (modification_a.position is not None and
            modification_b.position is not None and
            not is_equal_position(modification_a, modification_b)):
        return True
    return False


def intersect(set_a: Sequence[T], set_b: Sequence[T],
              equality_fn: Optional[Callable[[T, T], bool]] = None) -> List[T]:
    """Elements of set A equal to at least one element of set B."""
    if equality_fn is None:
        equality_fn = lambda a, b: a == b

    return [a for a in set_a if any(equality_fn(a, b) for b in set_b)]


def difference(set_a: Sequence[T], set_b: Sequence[T],
               diff_fn: Optional[Callable[[T, T], bool]] = None) -> List[T]:
    """Elements of set A that differ from every element of set B."""
    if diff_fn is None:
        diff_fn = lambda a, b: a != b

    return [a for a in set_a if all(diff_fn(a, b) for b in set_b)]


def compare(inference_set: Sequence[T],
            model_set: Sequence[T],
            strong_equality_fn: Callable[[T, T], bool],
            weak_equality_fn: Optional[Callable[[T, T], bool]] = None,
            diff_fn: Optional[Callable[[T, T], bool]] = None) -> MatchType:
    """Classify the relationship of an inference set to a model set.

    Parameters
    ----------
    inference_set :
        Elements on the inference side.
    model_set :
        Elements on the model side.
    strong_equality_fn :
        Equality used to decide on an exact match.
    weak_equality_fn :
        Equality used, together with the strong equality, to decide whether
        the sets overlap at all. Defaults to the strong equality.
    diff_fn :
        Directional difference used for the subset and superset checks.

    Returns
    -------
    :
        The first of DISTINCT, EXACT, SUBSET, SUPERSET that applies, else
        INTERSECT.
    """
    weak_equality_fn = weak_equality_fn or strong_equality_fn

    # A strongly equal pair always counts as a weak overlap
    def overlaps(a, b):
        return weak_equality_fn(a, b) or strong_equality_fn(a, b)

    strong_intersection = intersect(inference_set, model_set, strong_equality_fn)
    weak_intersection = intersect(inference_set, model_set, overlaps)
    inference_diff_model = difference(inference_set, model_set, diff_fn)
    model_diff_inference = difference(model_set, inference_set, diff_fn)

    if not weak_intersection:
        return MatchType.DISTINCT

    if len(inference_set) == len(model_set):
        if len(strong_intersection) == len(inference_set):
            return MatchType.EXACT
        elif not inference_diff_model:
            return MatchType.SUBSET
        elif not model_diff_inference:
            return MatchType.SUPERSET

    if len(inference_set) < len(model_set) and not inference_diff_model:
        return MatchType.SUBSET

    if len(inference_set) > len(model_set) and not model_diff_inference:
        return MatchType.SUPERSET

    return MatchType.INTERSECT


def compare_modifications(inference_set: Sequence[Modification],
                          model_set: Sequence[Modification]) -> MatchType:
    """Compare two modification lists with the position-tolerant predicates."""
    return compare(inference_set, model_set,
                   strong_equality, weak_equality, weak_difference)
