"""
Applicant and lineage data models.

Free-text facts entered by the user about themselves and about the Italian
ancestor the claim descends from. The core only reads these; the session
owns and mutates them.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional


class RelationshipDegree(str, Enum):
    """How many generations separate the applicant from the Italian ancestor."""
    GRANDPARENT = "grandparent"
    GREAT_GRANDPARENT = "great-grandparent"
    GREAT_GREAT_GRANDPARENT = "great-great-grandparent"
    GREAT_GREAT_GREAT_GRANDPARENT = "great-great-great-grandparent"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        names = {
            "grandparent": "Grandparent",
            "great-grandparent": "Great-grandparent",
            "great-great-grandparent": "Great-great-grandparent",
            "great-great-great-grandparent": "Great-great-great-grandparent",
            "other": "Other",
        }
        return names.get(self.value, self.value)

    @classmethod
    def parse(cls, value) -> "RelationshipDegree":
        """Coerce user input into a degree, falling back to the form default."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return DEFAULT_RELATIONSHIP


DEFAULT_RELATIONSHIP = RelationshipDegree.GREAT_GRANDPARENT


@dataclass
class ApplicantProfile:
    """The person requesting the pre-screening."""
    full_name: str = ""
    email: str = ""
    phone: Optional[str] = None
    country: str = ""
    city: str = ""

    def to_dict(self) -> dict:
        """Serialize to the export format."""
        return {
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone or "",
            "country": self.country,
            "city": self.city,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ApplicantProfile":
        """Deserialize from a form payload or YAML section."""
        return cls(
            full_name=_text(data.get("fullName")),
            email=_text(data.get("email")),
            phone=_text(data.get("phone")) or None,
            country=_text(data.get("country")),
            city=_text(data.get("city")),
        )


@dataclass
class LineageFacts:
    """What the applicant knows about the Italian ancestor and the line of descent."""

    # ── Ancestor ──
    ancestor_name: str = ""
    ancestor_birth_year: Optional[str] = None     # free text, e.g. "1895" or "c. 1890"
    ancestor_birth_place: Optional[str] = None
    relationship_degree: RelationshipDegree = DEFAULT_RELATIONSHIP

    # ── Risk factors ──
    any_female_ancestor_before_cutoff_date: bool = False
    any_naturalization_in_line: bool = False
    naturalization_preceded_descendant_birth: bool = False

    def to_dict(self) -> dict:
        """Serialize to the export format."""
        return {
            "ancestorName": self.ancestor_name,
            "ancestorBirthYear": self.ancestor_birth_year or "",
            "ancestorBirthPlace": self.ancestor_birth_place or "",
            "relationshipDegree": self.relationship_degree.value,
            "anyFemaleAncestorBeforeCutoffDate": self.any_female_ancestor_before_cutoff_date,
            "anyNaturalizationInLine": self.any_naturalization_in_line,
            "naturalizationPrecededDescendantBirth": self.naturalization_preceded_descendant_birth,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LineageFacts":
        """Deserialize from a form payload or YAML section."""
        return cls(
            ancestor_name=_text(data.get("ancestorName")),
            ancestor_birth_year=_text(data.get("ancestorBirthYear")) or None,
            ancestor_birth_place=_text(data.get("ancestorBirthPlace")) or None,
            relationship_degree=RelationshipDegree.parse(
                data.get("relationshipDegree", DEFAULT_RELATIONSHIP)
            ),
            any_female_ancestor_before_cutoff_date=parse_flag(
                data.get("anyFemaleAncestorBeforeCutoffDate"), "anyFemaleAncestorBeforeCutoffDate",
            ),
            any_naturalization_in_line=parse_flag(
                data.get("anyNaturalizationInLine"), "anyNaturalizationInLine",
            ),
            naturalization_preceded_descendant_birth=parse_flag(
                data.get("naturalizationPrecededDescendantBirth"),
                "naturalizationPrecededDescendantBirth",
            ),
        )


def field_names(model) -> set[str]:
    """Python attribute names of a model dataclass (for update validation)."""
    return {f.name for f in fields(model)}


RISK_FLAG_FIELDS = (
    "any_female_ancestor_before_cutoff_date",
    "any_naturalization_in_line",
    "naturalization_preceded_descendant_birth",
)

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0", ""}


def parse_flag(value, name: str = "value") -> bool:
    """
    Coerce a checkbox value into a bool.

    Accepts real booleans, None (unchecked), 0/1 and the usual true/false
    strings ("true"/"false", "yes"/"no", "on"/"off", "1"/"0").

    Raises:
        ValueError: For anything else, e.g. "maybe" or 2.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"{name} must be true or false, got {value!r}")


def _text(value) -> str:
    # YAML gives ints for years; forms give strings
    if value is None:
        return ""
    return str(value).strip()
