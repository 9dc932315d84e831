"""
Document data model.

Represents an uploaded candidate document with its inferred category.
Only the filename is ever inspected; the content handle is carried along
untouched so the presentation layer can show or re-download it.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union


# Extensions counted as "PDF or image" by the format sanity check
ACCEPTED_EXTENSIONS = (".pdf", ".png", ".jpg", ".jpeg", ".webp", ".gif")


class DocumentCategory(str, Enum):
    """Classification categories for citizenship dossier documents."""
    BIRTH_CERTIFICATE = "birth_certificate"
    MARRIAGE_CERTIFICATE = "marriage_certificate"
    DEATH_CERTIFICATE = "death_certificate"
    NATURALIZATION_CERTIFICATE = "naturalization_certificate"
    NATURALIZATION_NEGATIVE_CERTIFICATE = "naturalization_negative_certificate"
    PASSPORT = "passport"
    NATIONAL_ID = "national_id"
    PROOF_OF_ADDRESS = "proof_of_address"
    HAGUE_APOSTILLE = "hague_apostille"
    SWORN_TRANSLATION = "sworn_translation"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        """Human-readable name for display in the viewer."""
        names = {
            "birth_certificate": "Birth Certificate",
            "marriage_certificate": "Marriage Certificate",
            "death_certificate": "Death Certificate",
            "naturalization_certificate": "Naturalization Certificate",
            "naturalization_negative_certificate": "Certificate of Non-Naturalization",
            "passport": "Passport",
            "national_id": "National ID (RG / CNH)",
            "proof_of_address": "Proof of Address",
            "hague_apostille": "Hague Apostille",
            "sworn_translation": "Sworn Translation",
            "unknown": "Unrecognized Document",
        }
        return names.get(self.value, self.value)

    @property
    def is_naturalization_proof(self) -> bool:
        return self in (
            DocumentCategory.NATURALIZATION_CERTIFICATE,
            DocumentCategory.NATURALIZATION_NEGATIVE_CERTIFICATE,
        )


def has_accepted_extension(filename: str) -> bool:
    """True if the filename ends in a PDF or image extension (any case)."""
    return filename.lower().endswith(ACCEPTED_EXTENSIONS)


def _new_document_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ClassifiedDocument:
    """A single uploaded file and the category inferred from its name."""
    filename: str
    size: int
    inferred_category: DocumentCategory = DocumentCategory.UNKNOWN

    # Uploaded bytes (viewer) or a path on disk (CLI); never read by the core
    content: Optional[Union[bytes, Path]] = field(default=None, repr=False, compare=False)

    id: str = field(default_factory=_new_document_id)

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lower()

    @property
    def is_pdf_or_image(self) -> bool:
        return has_accepted_extension(self.filename)

    @property
    def size_kb(self) -> float:
        """Size in kilobytes, for display."""
        return self.size / 1024

    def to_dict(self) -> dict:
        """Serialize to the export format (content is never exported)."""
        return {
            "name": self.filename,
            "size": self.size,
            "inferredType": self.inferred_category.value,
        }
