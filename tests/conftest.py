"""Shared fixtures for the pre-screening tests."""

import pytest

from cittadinanza.analysis.classifier import classify_document
from cittadinanza.models import ApplicantProfile, LineageFacts


def make_docs(*filenames, size=2048):
    """Classify each filename into a fresh document."""
    return [classify_document(name, size) for name in filenames]


@pytest.fixture
def full_applicant():
    return ApplicantProfile(
        full_name="Maria Rossi da Silva",
        email="maria@example.com",
        phone="+55 11 90000-0000",
        country="Brasil",
        city="São Paulo",
    )


@pytest.fixture
def full_lineage():
    return LineageFacts(
        ancestor_name="Giuseppe Rossi",
        ancestor_birth_year="1895",
        ancestor_birth_place="Campania, IT",
    )


@pytest.fixture
def complete_dossier():
    """Birth, marriage, negative naturalization, apostille and translation, all PDFs."""
    return make_docs(
        "certidao_nascimento_giuseppe.pdf",
        "certidao_casamento_avos.pdf",
        "certidao_negativa_naturalizacao.pdf",
        "apostila_haia.pdf",
        "traducao_juramentada.pdf",
    )
