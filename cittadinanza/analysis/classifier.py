"""
Document Classifier.

Infers a document's category from its filename alone, using an ordered list
of keyword rules (Portuguese civil-registry vocabulary, as Brazilian
registries name their certificates). First matching rule wins.
"""

import logging
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from ..models.document import ClassifiedDocument, DocumentCategory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilenameRule:
    """Matches when any ``any_of`` keyword and every ``all_of`` keyword occur."""
    category: DocumentCategory
    any_of: tuple[str, ...] = ()
    all_of: tuple[str, ...] = ()

    def matches(self, name_lower: str) -> bool:
        if self.all_of and not all(k in name_lower for k in self.all_of):
            return False
        if self.any_of and not any(k in name_lower for k in self.any_of):
            return False
        return bool(self.any_of or self.all_of)

    @property
    def description(self) -> str:
        """Readable trigger summary, e.g. '"negativa" AND "naturaliza"'."""
        if self.all_of:
            return " AND ".join(f'"{k}"' for k in self.all_of)
        return " or ".join(f'"{k}"' for k in self.any_of)


# Order matters: the compound negative-naturalization rule must come before
# the plain naturalization rule, which would otherwise shadow it.
FILENAME_RULES: tuple[FilenameRule, ...] = (
    FilenameRule(DocumentCategory.BIRTH_CERTIFICATE, any_of=("nascimento",)),
    FilenameRule(DocumentCategory.MARRIAGE_CERTIFICATE, any_of=("casamento",)),
    FilenameRule(DocumentCategory.DEATH_CERTIFICATE, any_of=("óbito", "obito")),
    FilenameRule(
        DocumentCategory.NATURALIZATION_NEGATIVE_CERTIFICATE,
        all_of=("negativa", "naturaliza"),
    ),
    FilenameRule(DocumentCategory.NATURALIZATION_CERTIFICATE, any_of=("naturaliza",)),
    FilenameRule(DocumentCategory.PASSPORT, any_of=("passaporte",)),
    FilenameRule(DocumentCategory.NATIONAL_ID, any_of=("rg", "cnh", "identidade")),
    FilenameRule(DocumentCategory.PROOF_OF_ADDRESS, any_of=("endereco", "endereço")),
    FilenameRule(DocumentCategory.HAGUE_APOSTILLE, any_of=("apostila", "haia", "haya")),
    FilenameRule(DocumentCategory.SWORN_TRANSLATION, any_of=("tradu",)),
)


def classify(filename: str) -> DocumentCategory:
    """
    Infer a document category from a filename.

    Matching is case-insensitive and substring-based. Never fails: names
    that match no rule are ``DocumentCategory.UNKNOWN``.
    """
    # NFC so decomposed accents (macOS file pickers) still match "óbito" etc.
    name_lower = unicodedata.normalize("NFC", filename or "").lower()

    for rule in FILENAME_RULES:
        if rule.matches(name_lower):
            logger.debug(f"  {filename} -> {rule.category.value} (matched {rule.description})")
            return rule.category

    logger.debug(f"  {filename} -> unknown")
    return DocumentCategory.UNKNOWN


def classify_document(
    filename: str,
    size: int,
    content: Optional[Union[bytes, Path]] = None,
) -> ClassifiedDocument:
    """Build a new document (with a fresh id) for one selected file."""
    return ClassifiedDocument(
        filename=filename,
        size=size,
        inferred_category=classify(filename),
        content=content,
    )


def classify_all(
    files: Iterable[tuple[str, int, Optional[Union[bytes, Path]]]],
) -> list[ClassifiedDocument]:
    """
    Classify a batch of selected files, preserving their order.

    Args:
        files: (filename, size, content) triples.

    Returns:
        One new ClassifiedDocument per file.
    """
    documents = [classify_document(name, size, content) for name, size, content in files]

    categories = {}
    for doc in documents:
        cat = doc.inferred_category.value
        categories[cat] = categories.get(cat, 0) + 1

    logger.info(f"Classified {len(documents)} documents: {categories}")
    return documents
