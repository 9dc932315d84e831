"""
In-memory pre-screening session.

Owns everything the user can change (applicant fields, lineage fields, the
uploaded document list, the disclaimer checkbox) and re-runs the pure
scorer whenever a result is asked for. Nothing is persisted; the only thing
that leaves the session is the optional JSON summary.
"""

import dataclasses
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Union

from .analysis.classifier import classify_all
from .analysis.scorer import evaluate
from .config import Config, DEFAULT_CONFIG
from .export import build_summary, summary_filename, write_summary
from .models.applicant import (
    RISK_FLAG_FIELDS,
    ApplicantProfile,
    LineageFacts,
    RelationshipDegree,
    field_names,
    parse_flag,
)
from .models.document import ClassifiedDocument
from .models.evaluation import EvaluationResult

logger = logging.getLogger(__name__)

DISCLAIMER_REQUIRED_MESSAGE = "Please acknowledge the disclaimer before requesting contact."
CONTACT_ACKNOWLEDGEMENT = (
    "Summary generated locally. Send the JSON summary to a specialist "
    "for a full review."
)


class DisclaimerNotAccepted(RuntimeError):
    """Raised when contact is requested before the disclaimer is acknowledged."""


class Session:
    """Mutable state for one user, plus the operations the UI triggers."""

    def __init__(
        self,
        applicant: Optional[ApplicantProfile] = None,
        lineage: Optional[LineageFacts] = None,
        config: Optional[Config] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self._applicant = applicant or ApplicantProfile.from_dict(self.config.applicant_seed())
        self._lineage = lineage or LineageFacts.from_dict(self.config.lineage)
        self._documents: list[ClassifiedDocument] = []
        self._disclaimer_accepted = False

    @classmethod
    def from_config(cls, config: Config) -> "Session":
        """A fresh session pre-filled from the config's applicant/lineage sections."""
        return cls(config=config)

    # ── State snapshots ──

    @property
    def applicant(self) -> ApplicantProfile:
        return self._applicant

    @property
    def lineage(self) -> LineageFacts:
        return self._lineage

    @property
    def documents(self) -> tuple[ClassifiedDocument, ...]:
        """Documents in upload order. A snapshot; mutate through the session."""
        return tuple(self._documents)

    @property
    def disclaimer_accepted(self) -> bool:
        return self._disclaimer_accepted

    @property
    def evaluation(self) -> EvaluationResult:
        """Freshly computed on every access."""
        return evaluate(self._applicant, self._lineage, self._documents)

    # ── Form updates ──

    def update_applicant(self, **changes) -> ApplicantProfile:
        """
        Replace applicant fields by attribute name (``full_name=...``).

        Raises:
            ValueError: If a field name is not an ApplicantProfile attribute.
        """
        _check_fields(ApplicantProfile, changes)
        self._applicant = dataclasses.replace(self._applicant, **changes)
        return self._applicant

    def update_lineage(self, **changes) -> LineageFacts:
        """
        Replace lineage fields by attribute name (``ancestor_name=...``).

        Raises:
            ValueError: If a field name is not a LineageFacts attribute, or a
                risk flag is not a recognisable true/false value.
        """
        _check_fields(LineageFacts, changes)
        for name in RISK_FLAG_FIELDS:
            if name in changes:
                changes[name] = parse_flag(changes[name], name)
        if "relationship_degree" in changes:
            changes["relationship_degree"] = RelationshipDegree.parse(
                changes["relationship_degree"]
            )
        self._lineage = dataclasses.replace(self._lineage, **changes)
        return self._lineage

    def set_applicant(self, applicant: ApplicantProfile) -> None:
        self._applicant = applicant

    def set_lineage(self, lineage: LineageFacts) -> None:
        self._lineage = lineage

    # ── Documents ──

    def add_files(
        self, files: Iterable[tuple[str, int, Optional[Union[bytes, Path]]]],
    ) -> list[ClassifiedDocument]:
        """
        Classify newly selected files and append them to the list.

        Args:
            files: (filename, size, content) triples, in selection order.

        Returns:
            The new documents, each with a freshly generated id.
        """
        added = classify_all(files)
        self._documents.extend(added)
        for doc in added:
            logger.info(f"Added {doc.filename} as {doc.inferred_category.value} (id={doc.id[:8]})")
        return added

    def add_paths(self, paths: Iterable[Path]) -> list[ClassifiedDocument]:
        """Add files from disk; the path itself is kept as the content handle."""
        return self.add_files((p.name, p.stat().st_size, p) for p in map(Path, paths))

    def get_document(self, doc_id: str) -> Optional[ClassifiedDocument]:
        for doc in self._documents:
            if doc.id == doc_id:
                return doc
        return None

    def remove_document(self, doc_id: str) -> bool:
        """Remove one document by id. Returns False if no such document."""
        doc = self.get_document(doc_id)
        if doc is None:
            logger.warning(f"Remove requested for unknown document id {doc_id}")
            return False
        self._documents = [d for d in self._documents if d.id != doc_id]
        logger.info(f"Removed {doc.filename} (id={doc_id[:8]})")
        return True

    # ── Disclaimer / contact ──

    def accept_disclaimer(self, accepted: bool = True) -> None:
        self._disclaimer_accepted = bool(accepted)

    def request_contact(self) -> str:
        """
        Ask for a specialist to get in touch.

        Nothing is sent anywhere; this only checks the precondition and tells
        the user what to do with the summary.

        Raises:
            DisclaimerNotAccepted: If the disclaimer has not been acknowledged.
        """
        if not self._disclaimer_accepted:
            raise DisclaimerNotAccepted(DISCLAIMER_REQUIRED_MESSAGE)
        return CONTACT_ACKNOWLEDGEMENT

    # ── Export ──

    def summary(self, now: Optional[datetime] = None) -> dict:
        return build_summary(
            self._applicant, self._lineage, self._documents, self.evaluation, created_at=now,
        )

    def summary_filename(self, now: Optional[datetime] = None) -> str:
        return summary_filename(now, prefix=self.config.export.filename_prefix)

    def export(self, output_dir: Optional[Path] = None, now: Optional[datetime] = None) -> Path:
        """Write the summary to disk (``config.export.output_dir`` by default)."""
        now = now or datetime.now(timezone.utc)
        return write_summary(
            self.summary(now),
            output_dir or self.config.export.output_dir,
            self.summary_filename(now),
            indent=self.config.export.indent,
        )

    def reset(self) -> None:
        """Back to the configured pre-fill, with no documents."""
        self._applicant = ApplicantProfile.from_dict(self.config.applicant_seed())
        self._lineage = LineageFacts.from_dict(self.config.lineage)
        self._documents = []
        self._disclaimer_accepted = False
        logger.info("Session reset")


def _check_fields(model, changes: dict) -> None:
    unknown = set(changes) - field_names(model)
    if unknown:
        raise ValueError(f"Unknown {model.__name__} field(s): {', '.join(sorted(unknown))}")
