from enum import Enum
from typing import Annotated, Any, Iterator, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    RootModel,
    Tag,
    field_validator,
)

PROTEIN_FAMILY = "protein_family"


def _position_as_string(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class MatchType(str, Enum):
    """Relationship between the modifications of two cards."""
    EXACT = "exact"
    SUBSET = "subset"
    SUPERSET = "superset"
    INTERSECT = "intersects"
    DISTINCT = "distinct"


class Modification(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "description": "A post-translational modification, optionally at a residue position."
        },
    )

    modification_type: str = Field(
        ...,
        description="The type of modification, e.g. 'Phosphorylation'. Compared case-insensitively."
    )
    position: Optional[str] = Field(
        None,
        description="Residue position, e.g. '181'. May be a free-form token such as an interval."
    )

    @field_validator("position", mode="before")
    @classmethod
    def _coerce_position(cls, value: Any) -> Any:
        return _position_as_string(value)


class Feature(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "description": "A modification or binding feature of a simple participant."
        },
    )

    feature_type: Optional[str] = Field(
        None,
        description="Either 'modification' or 'binding'."
    )
    modification_type: Optional[str] = None
    position: Optional[str] = None
    bound_to: Optional[Union[str, "Participant"]] = Field(
        None,
        description="The binding partner, as a grounding id or name or as a participant."
    )

    @field_validator("position", mode="before")
    @classmethod
    def _coerce_position(cls, value: Any) -> Any:
        return _position_as_string(value)


class SimpleParticipant(BaseModel):
    model_config = ConfigDict(extra="allow")

    entity_type: Optional[str] = Field(
        None,
        description="One of 'protein', 'chemical', 'RNA', 'DNA' or 'Unclassified'."
    )
    entity_text: Optional[Union[str, List[str]]] = Field(
        None,
        description="Display name of the entity."
    )
    identifier: Optional[str] = Field(
        None,
        description="Grounding id, e.g. 'Uniprot:AKT1_HUMAN', an HGNC symbol or a PubChem id."
    )
    features: Optional[List[Feature]] = None
    not_features: Optional[List[Feature]] = None

    def all_ids(self) -> List[str]:
        return [self.identifier] if self.identifier is not None else []


class ProteinFamily(BaseModel):
    model_config = ConfigDict(extra="allow")

    entity_type: str = PROTEIN_FAMILY
    entity_text: Optional[Union[str, List[str]]] = None
    identifier: Optional[str] = None
    family_members: Optional[List["Participant"]] = None

    def all_ids(self) -> List[str]:
        # A family without a member list is read like a simple participant
        if self.family_members is None:
            return [self.identifier] if self.identifier is not None else []
        return _unique_ids(self.family_members)


class ComplexParticipant(RootModel):
    """A complex, serialized as the plain JSON array of its members."""

    root: List["Participant"]

    def __iter__(self) -> Iterator["Participant"]:
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    @property
    def members(self) -> List["Participant"]:
        return self.root

    def all_ids(self) -> List[str]:
        return _unique_ids(self.root)


def _participant_kind(value: Any) -> str:
    if isinstance(value, (list, tuple, ComplexParticipant)):
        return "complex"
    if isinstance(value, dict):
        entity_type = value.get("entity_type")
    else:
        entity_type = getattr(value, "entity_type", None)
    return "family" if entity_type == PROTEIN_FAMILY else "simple"


Participant = Annotated[
    Union[
        Annotated[ComplexParticipant, Tag("complex")],
        Annotated[ProteinFamily, Tag("family")],
        Annotated[SimpleParticipant, Tag("simple")],
    ],
    Discriminator(_participant_kind),
]


def _unique_ids(participants) -> List[str]:
    ids = []
    for participant in participants:
        for identifier in participant.all_ids():
            if identifier not in ids:
                ids.append(identifier)
    return ids


Feature.model_rebuild()
SimpleParticipant.model_rebuild()
ProteinFamily.model_rebuild()
ComplexParticipant.model_rebuild()


class ExtractedInformation(BaseModel):
    model_config = ConfigDict(extra="allow")

    participant_a: Optional[Participant] = None
    participant_b: Optional[Participant] = None
    interaction_type: Optional[str] = Field(
        None,
        description="Interaction tag, e.g. 'adds_modification' or 'increases_activity'."
    )
    modifications: Optional[List[Modification]] = None


class Card(BaseModel):
    """An index card describing one molecular interaction.

    Top-level keys other than ``extracted_information`` (``pmc_id``,
    ``submitter``, ``meta`` and so on) are kept as they are. ``match`` is
    only ever set on the copies returned by the comparator.
    """
    model_config = ConfigDict(extra="allow")

    extracted_information: ExtractedInformation
    match: Optional[List["CardMatch"]] = None

    @property
    def participant_a(self) -> Optional[Participant]:
        return self.extracted_information.participant_a

    @property
    def participant_b(self) -> Optional[Participant]:
        return self.extracted_information.participant_b

    @property
    def interaction_type(self) -> Optional[str]:
        return self.extracted_information.interaction_type

    @property
    def modifications(self) -> Optional[List[Modification]]:
        return self.extracted_information.modifications

    def has_modification(self) -> bool:
        return bool(self.modifications)

    def to_json_dict(self) -> dict:
        """The card as it was read, plus ``match`` once it is annotated.

        Explicit nulls are kept; fields missing from the input stay missing.
        """
        return self.model_dump(mode="json", exclude_unset=True)


class CardMatch(BaseModel):
    type: MatchType
    card: Card


Card.model_rebuild()
