import json

import pytest

from pathway_cards.cards import dump_cards, load_cards, parse_card, parse_cards
from pathway_cards.cards.models import ComplexParticipant, ProteinFamily
from pathway_cards.errors import MalformedCardError

CARD_JSON = {
    "pmc_id": "PMC3717945",
    "submitter": "pathway_commons",
    "extracted_information": {
        "participant_a": {
            "entity_type": "protein",
            "entity_text": "MTOR",
            "identifier": "Uniprot:MTOR_HUMAN",
        },
        "participant_b": {
            "entity_type": "protein",
            "entity_text": "AKT1",
            "identifier": "Uniprot:AKT1_HUMAN",
            "features": [{"feature_type": "modification",
                          "modification_type": "Phosphorylation",
                          "position": "@308"}],
        },
        "interaction_type": "adds_modification",
        "modifications": [
            {"feature_type": "modification_feature",
             "modification_type": "Phosphorylation",
             "position": 473,
             "aa_code": "S"},
        ],
    },
}


def test_parse_card_keeps_extra_fields():
    card = parse_card(CARD_JSON)
    assert card.interaction_type == "adds_modification"
    assert card.modifications[0].position == "473"
    assert card.participant_b.features[0].position == "@308"

    card_json = card.to_json_dict()
    assert card_json["submitter"] == "pathway_commons"
    assert card_json["extracted_information"]["modifications"][0]["aa_code"] == "S"


def test_complex_and_family_serialize_back():
    cards = parse_cards({
        "extracted_information": {
            "participant_a": [{"entity_type": "protein", "identifier": "P1"},
                              {"entity_type": "chemical", "identifier": "CID1"}],
            "participant_b": {"entity_type": "protein_family",
                              "entity_text": "RAS",
                              "family_members": [{"entity_type": "protein",
                                                  "identifier": "P2"}]},
        }
    })
    card = cards[0]
    assert isinstance(card.participant_a, ComplexParticipant)
    assert isinstance(card.participant_b, ProteinFamily)

    info = card.to_json_dict()["extracted_information"]
    assert isinstance(info["participant_a"], list)
    assert info["participant_a"][1]["identifier"] == "CID1"
    assert info["participant_b"]["family_members"][0]["identifier"] == "P2"


def test_missing_extracted_information():
    with pytest.raises(MalformedCardError) as e:
        parse_cards([CARD_JSON, {"pmc_id": "PMC1"}])
    assert e.value.details["index"] == 1


def test_modification_without_type():
    bad = json.loads(json.dumps(CARD_JSON))
    bad["extracted_information"]["modifications"] = [{"position": "5"}]
    with pytest.raises(MalformedCardError):
        parse_card(bad)


def test_card_must_be_an_object():
    with pytest.raises(MalformedCardError):
        parse_cards(["not a card"])


def test_load_and_dump(tmp_path):
    cards_file = tmp_path / "cards.json"
    cards_file.write_text(json.dumps([CARD_JSON]))

    cards = load_cards(cards_file)
    assert len(cards) == 1

    out_file = tmp_path / "out" / "cards.json"
    dump_cards(cards, out_file)
    dumped = json.loads(out_file.read_text())
    assert dumped[0]["pmc_id"] == "PMC3717945"
    assert "match" not in dumped[0]


def test_binding_feature_with_participant_partner():
    card = parse_card({
        "extracted_information": {
            "participant_a": {
                "entity_type": "protein",
                "identifier": "Uniprot:MAPK1_HUMAN",
                "features": [{
                    "feature_type": "binding_feature",
                    "bound_to": {"entity_type": "protein",
                                 "entity_text": ["MAP2K1"],
                                 "identifier": "Uniprot:MP2K1_HUMAN"},
                }],
            },
            "participant_b": {"entity_type": "protein", "identifier": "ELK1"},
            "interaction_type": "adds_modification",
        }
    })
    bound_to = card.participant_a.features[0].bound_to
    assert bound_to.identifier == "Uniprot:MP2K1_HUMAN"

    named = parse_card({
        "extracted_information": {
            "participant_a": {"features": [{"feature_type": "binding",
                                            "bound_to": "MAP2K1"}]},
        }
    })
    assert named.participant_a.features[0].bound_to == "MAP2K1"


def test_explicit_nulls_are_kept():
    card = parse_card({
        "extracted_information": {
            "participant_a": {"entity_type": "protein", "identifier": None},
            "participant_b": {"entity_type": "protein", "identifier": "ELK1"},
            "modifications": [{"modification_type": "Phosphorylation",
                               "position": None}],
        }
    })
    info = card.to_json_dict()["extracted_information"]
    assert info["participant_a"] == {"entity_type": "protein", "identifier": None}
    assert info["modifications"] == [{"modification_type": "Phosphorylation",
                                      "position": None}]
    assert "interaction_type" not in info
    assert "match" not in card.to_json_dict()
