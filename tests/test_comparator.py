from pathway_cards.cards.models import Card, MatchType
from pathway_cards.comparator import (
    CardComparator,
    build_id_index,
    compare_cards,
    find_matching_cards,
    get_pb_query_ids,
    strict_pb_match,
    summarize_matches,
)
from pathway_cards.comparator.identifiers import participant_b
from pathway_cards.configs import BaseConfig, ComparatorConfig


def make_card(pa_id, pb, modifications=None, interaction_type="adds_modification"):
    if isinstance(pb, str) or pb is None:
        pb = {"entity_type": "protein", "entity_text": "B", "identifier": pb}
    info = {
        "participant_a": {"entity_type": "protein", "entity_text": "A",
                          "identifier": pa_id},
        "participant_b": pb,
        "interaction_type": interaction_type,
    }
    if modifications is not None:
        info["modifications"] = [
            {"modification_type": mod_type, "position": position}
            for mod_type, position in modifications
        ]
    return Card.model_validate({"pmc_id": "PMC1", "extracted_information": info})


def test_get_pb_query_ids():
    assert get_pb_query_ids(make_card("A", "B")) == ["B"]
    assert get_pb_query_ids(make_card("A", None)) == []
    complex_pb = [{"entity_type": "protein", "identifier": "B1"}]
    assert get_pb_query_ids(make_card("A", complex_pb)) == []


def test_strict_pb_match():
    assert strict_pb_match(make_card("A", "B"), make_card("C", "B"))
    assert not strict_pb_match(make_card("A", "B"), make_card("C", "b"))
    assert not strict_pb_match(make_card("A", None), make_card("C", None))


def test_find_matching_cards_checks_interaction_type():
    model1 = make_card("A", "B")
    model2 = make_card("A", "B", interaction_type="removes_modification")
    index = build_id_index([model1, model2], participant_b)
    inference = make_card("X", "B")

    found = find_matching_cards(get_pb_query_ids(inference), inference, index,
                                strict_pb_match)
    assert found == [model1]


def test_find_matching_cards_without_filter():
    model = make_card("A", [{"entity_type": "protein", "identifier": "B"}])
    index = build_id_index([model], participant_b)
    inference = make_card("X", "B")

    # The complex on the model side only matches when no filter is used
    assert find_matching_cards(["B"], inference, index) == [model]
    assert find_matching_cards(["B"], inference, index, strict_pb_match) == []
    assert find_matching_cards(["Z"], inference, index) == []


def test_compare_cards_annotates_matches():
    model_exact = make_card("A", "B", [("Phosphorylation", "182")])
    model_superset = make_card("A2", "B", [("Phosphorylation", "181"),
                                           ("Acetylation", None)])
    model_other = make_card("A", "C", [("Phosphorylation", "181")])
    inference = make_card("X", "B", [("Phosphorylation", "181")])

    results = compare_cards([model_exact, model_superset, model_other], [inference])
    assert len(results) == 1
    matches = results[0].match
    assert [m.type for m in matches] == [MatchType.EXACT, MatchType.SUBSET]
    assert matches[0].card is model_exact
    assert matches[1].card is model_superset


def test_compare_cards_does_not_modify_inputs():
    model = make_card("A", "B", [("Phosphorylation", "181")])
    inference = make_card("X", "B", [("Phosphorylation", "181")])

    results = compare_cards([model], [inference])
    assert inference.match is None
    assert results[0] is not inference
    assert results[0].match[0].type == MatchType.EXACT


def test_card_without_modifications_is_unchanged():
    model = make_card("A", "B", [("Phosphorylation", "181")])
    inference = make_card("X", "B")

    results = compare_cards([model], [inference])
    assert results[0] is inference
    assert "match" not in results[0].to_json_dict()


def test_candidates_without_modifications_are_skipped():
    model = make_card("A", "B")
    inference = make_card("X", "B", [("Phosphorylation", "181")])

    results = compare_cards([model], [inference])
    assert results[0].match == []


def test_no_candidates_no_match_field():
    model = make_card("A", "C", [("Phosphorylation", "181")])
    inference = make_card("X", "B", [("Phosphorylation", "181")])

    results = compare_cards([model], [inference])
    assert results[0].match is None


def test_output_order_matches_input():
    model = make_card("A", "B", [("Phosphorylation", "181")])
    inference_cards = [
        make_card("X", "C", [("Phosphorylation", "181")]),
        make_card("X", "B", [("Phosphorylation", "181")]),
        make_card("X", "B"),
    ]
    results = compare_cards([model], inference_cards)
    assert [r.participant_b.identifier for r in results] == ["C", "B", "B"]
    assert [bool(r.match) for r in results] == [False, True, False]


def test_comparator_config_match_filter_and_summary():
    model = make_card("A", [{"entity_type": "protein", "identifier": "B"}],
                      [("Phosphorylation", "181")])
    inference = make_card("X", "B", [("Phosphorylation", None)])
    config = ComparatorConfig(BaseConfig({"match_filter": "none"}))
    comparator = CardComparator(config)

    results = comparator.compare_cards([model], [inference])
    assert len(results[0].match) == 1
    assert results[0].match[0].type == MatchType.SUBSET
    assert summarize_matches(results) == {"subset": 1}

    # The default filter needs participant B itself to carry the identifier
    assert compare_cards([model], [inference])[0].match is None


def test_build_indices_keeps_both_participants():
    model = make_card("A", "B")
    pa_index, pb_index = CardComparator.build_indices([model])
    assert list(pa_index) == ["A"]
    assert list(pb_index) == ["B"]


def test_annotated_card_serialization():
    model = make_card("A", "B", [("Phosphorylation", "181")])
    inference = make_card("X", "B", [("Phosphorylation", "181")])

    card_json = compare_cards([model], [inference])[0].to_json_dict()
    assert card_json["pmc_id"] == "PMC1"
    assert card_json["match"][0]["type"] == "exact"
    assert card_json["match"][0]["card"]["extracted_information"][
        "participant_a"]["identifier"] == "A"
