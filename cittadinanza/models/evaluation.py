"""
Evaluation data model.

The scorer's output: a bounded score, the label derived from it, and the
ordered list of flags the applicant should act on.
"""

from dataclasses import dataclass, field


LABEL_EXCELLENT = "Excellent — high likelihood of viability"
LABEL_GOOD = "Good — viable with possible adjustments"
LABEL_FAIR = "Fair — incomplete documents/lineage"
LABEL_LOW = "Low — critical issues to resolve"

# Threshold ladder, evaluated high to low: (minimum score, tier, label)
SCORE_BANDS: tuple[tuple[int, str, str], ...] = (
    (80, "excellent", LABEL_EXCELLENT),
    (60, "good", LABEL_GOOD),
    (40, "fair", LABEL_FAIR),
    (0, "low", LABEL_LOW),
)

MIN_SCORE = 0
MAX_SCORE = 100


@dataclass(frozen=True)
class EvaluationResult:
    """Complete pre-screening result for one set of inputs."""
    score: int = 0
    label: str = LABEL_LOW
    flags: list[str] = field(default_factory=list)

    @property
    def tier(self) -> str:
        """Short band name ("excellent", "good", "fair", "low") for styling."""
        for minimum, tier, _ in SCORE_BANDS:
            if self.score >= minimum:
                return tier
        return "low"

    @property
    def has_flags(self) -> bool:
        return len(self.flags) > 0

    def visible_flags(self, limit: int | None = None) -> list[str]:
        """The first ``limit`` flags (all of them when limit is None)."""
        if limit is None:
            return list(self.flags)
        return self.flags[:limit]

    def hidden_flag_count(self, limit: int | None = None) -> int:
        """How many flags ``visible_flags(limit)`` leaves out."""
        if limit is None:
            return 0
        return max(0, len(self.flags) - limit)

    def to_dict(self) -> dict:
        """Serialize for the JSON API and the exported summary."""
        return {
            "score": self.score,
            "label": self.label,
            "flags": list(self.flags),
        }
