"""
Eligibility Scorer.

Turns (applicant, lineage, documents) into a 0-100 completeness/risk score,
a label from a threshold ladder, and an ordered list of flags.

The model is purely additive: every rule below contributes its delta at most
once, the sum is clamped into [0, 100], and the label is looked up from the
clamped score. Document rules only look at which distinct categories are
present, never at counts or order.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from ..models.applicant import ApplicantProfile, LineageFacts
from ..models.document import ClassifiedDocument, DocumentCategory
from ..models.evaluation import (
    EvaluationResult,
    MAX_SCORE,
    MIN_SCORE,
    SCORE_BANDS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringInputs:
    """Read-only snapshot of everything the rules look at."""
    applicant: ApplicantProfile
    lineage: LineageFacts
    categories: frozenset[DocumentCategory]
    all_pdf_or_image: bool

    def has(self, *categories: DocumentCategory) -> bool:
        """True if any of the given categories is present."""
        return any(c in self.categories for c in categories)

    @property
    def has_naturalization_proof(self) -> bool:
        return any(c.is_naturalization_proof for c in self.categories)


@dataclass(frozen=True)
class ScoreRule:
    name: str
    delta: int
    applies: Callable[[ScoringInputs], bool]


@dataclass(frozen=True)
class FlagRule:
    message: str
    applies: Callable[[ScoringInputs], bool]


SCORE_RULES: tuple[ScoreRule, ...] = (
    # ── Applicant completeness ──
    ScoreRule("applicant_full_name", 5, lambda s: bool(s.applicant.full_name)),
    ScoreRule("applicant_email", 5, lambda s: bool(s.applicant.email)),
    ScoreRule("applicant_country", 3, lambda s: bool(s.applicant.country)),
    ScoreRule("applicant_city", 3, lambda s: bool(s.applicant.city)),

    # ── Lineage essentials ──
    ScoreRule("ancestor_name", 10, lambda s: bool(s.lineage.ancestor_name)),
    ScoreRule("ancestor_birth_year", 6, lambda s: bool(s.lineage.ancestor_birth_year)),
    ScoreRule("relationship_degree", 6, lambda s: bool(s.lineage.relationship_degree)),

    # ── Document presence ──
    ScoreRule("birth_certificate", 10, lambda s: s.has(DocumentCategory.BIRTH_CERTIFICATE)),
    ScoreRule("marriage_certificate", 8, lambda s: s.has(DocumentCategory.MARRIAGE_CERTIFICATE)),
    ScoreRule("death_certificate", 6, lambda s: s.has(DocumentCategory.DEATH_CERTIFICATE)),
    ScoreRule("naturalization_proof", 12, lambda s: s.has_naturalization_proof),
    ScoreRule("hague_apostille", 8, lambda s: s.has(DocumentCategory.HAGUE_APOSTILLE)),
    ScoreRule("sworn_translation", 6, lambda s: s.has(DocumentCategory.SWORN_TRANSLATION)),

    # ── File format sanity (vacuously true with no documents) ──
    ScoreRule("pdf_or_image_only", 6, lambda s: s.all_pdf_or_image),

    # ── Risk adjustments ──
    ScoreRule("naturalization_in_line", -8, lambda s: s.lineage.any_naturalization_in_line),
    # Near-disqualifying: the line was broken before citizenship passed down
    ScoreRule(
        "naturalized_before_descendant_birth", -25,
        lambda s: s.lineage.naturalization_preceded_descendant_birth,
    ),
    # Not a disqualifier, but forces the judicial route
    ScoreRule(
        "female_ancestor_before_1948", -8,
        lambda s: s.lineage.any_female_ancestor_before_cutoff_date,
    ),
)


FLAG_RULES: tuple[FlagRule, ...] = (
    FlagRule(
        "missing birth certificate",
        lambda s: not s.has(DocumentCategory.BIRTH_CERTIFICATE),
    ),
    FlagRule(
        "missing marriage certificate for some generation",
        lambda s: not s.has(DocumentCategory.MARRIAGE_CERTIFICATE),
    ),
    FlagRule(
        "missing proof of (non-)naturalization of the Italian ancestor",
        lambda s: not s.has_naturalization_proof,
    ),
    FlagRule(
        "naturalization before descendant's birth — disqualifying",
        lambda s: s.lineage.naturalization_preceded_descendant_birth,
    ),
    FlagRule(
        "pre-1948 maternal line — requires judicial route",
        lambda s: s.lineage.any_female_ancestor_before_cutoff_date,
    ),
)


# ════════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ════════════════════════════════════════════════════════════════════════════


def evaluate(
    applicant: ApplicantProfile,
    lineage: LineageFacts,
    documents: Sequence[ClassifiedDocument],
) -> EvaluationResult:
    """
    Score an applicant's dossier.

    Pure and total: missing or empty fields contribute nothing, and calling
    it again with the same inputs gives the same result.

    Args:
        applicant: Applicant profile (read only).
        lineage: Lineage facts (read only).
        documents: Classified documents; only distinct categories matter
            for presence rules, every filename matters for format sanity.

    Returns:
        EvaluationResult with the clamped score, its label and all flags.
    """
    inputs = _snapshot(applicant, lineage, documents)

    raw = sum(rule.delta for rule in SCORE_RULES if rule.applies(inputs))
    score = clamp_score(raw)
    flags = [rule.message for rule in FLAG_RULES if rule.applies(inputs)]

    logger.debug(
        f"Evaluated {len(documents)} documents: raw={raw} score={score} flags={len(flags)}"
    )
    return EvaluationResult(score=score, label=label_for_score(score), flags=flags)


def score_breakdown(
    applicant: ApplicantProfile,
    lineage: LineageFacts,
    documents: Sequence[ClassifiedDocument],
) -> list[tuple[str, int]]:
    """The (rule name, delta) pairs that fired, in rule order, before clamping."""
    inputs = _snapshot(applicant, lineage, documents)
    return [(rule.name, rule.delta) for rule in SCORE_RULES if rule.applies(inputs)]


def clamp_score(raw: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, raw))


def label_for_score(score: int) -> str:
    """Map a score onto the label ladder (highest band first)."""
    for minimum, _, label in SCORE_BANDS:
        if score >= minimum:
            return label
    return SCORE_BANDS[-1][2]


def _snapshot(
    applicant: ApplicantProfile,
    lineage: LineageFacts,
    documents: Sequence[ClassifiedDocument],
) -> ScoringInputs:
    return ScoringInputs(
        applicant=applicant,
        lineage=lineage,
        categories=frozenset(d.inferred_category for d in documents),
        all_pdf_or_image=all(d.is_pdf_or_image for d in documents),
    )
