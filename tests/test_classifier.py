"""
Tests for filename-based document classification.

Run with: pytest tests/test_classifier.py
"""

import pytest

from cittadinanza.analysis.classifier import (
    FILENAME_RULES,
    classify,
    classify_all,
    classify_document,
)
from cittadinanza.models import DocumentCategory


class TestKeywordRules:
    """Each rule's trigger words map to its category."""

    @pytest.mark.parametrize("filename, expected", [
        ("certidao_nascimento_pedro.pdf", DocumentCategory.BIRTH_CERTIFICATE),
        ("CASAMENTO avos.jpg", DocumentCategory.MARRIAGE_CERTIFICATE),
        ("obito_giuseppe.pdf", DocumentCategory.DEATH_CERTIFICATE),
        ("Certidão de Óbito.pdf", DocumentCategory.DEATH_CERTIFICATE),
        ("naturalizacao_giuseppe.pdf", DocumentCategory.NATURALIZATION_CERTIFICATE),
        ("passaporte.jpg", DocumentCategory.PASSPORT),
        ("rg_frente.png", DocumentCategory.NATIONAL_ID),
        ("CNH.pdf", DocumentCategory.NATIONAL_ID),
        ("carteira_identidade.jpeg", DocumentCategory.NATIONAL_ID),
        ("comprovante_endereco.pdf", DocumentCategory.PROOF_OF_ADDRESS),
        ("Comprovante de Endereço.pdf", DocumentCategory.PROOF_OF_ADDRESS),
        ("apostila.pdf", DocumentCategory.HAGUE_APOSTILLE),
        ("haia_certidao.pdf", DocumentCategory.HAGUE_APOSTILLE),
        ("apostille_haya.pdf", DocumentCategory.HAGUE_APOSTILLE),
        ("traducao_juramentada.pdf", DocumentCategory.SWORN_TRANSLATION),
        ("Tradução.pdf", DocumentCategory.SWORN_TRANSLATION),
    ])
    def test_keyword_maps_to_category(self, filename, expected):
        assert classify(filename) == expected

    def test_decomposed_accents_still_match(self):
        """Names with combining accents (NFD, as macOS produces) are normalized first."""
        assert classify("o\u0301bito.pdf") == DocumentCategory.DEATH_CERTIFICATE
        assert classify("enderec\u0327o.pdf") == DocumentCategory.PROOF_OF_ADDRESS


class TestRuleOrdering:
    """The compound negative-naturalization rule beats the general one."""

    @pytest.mark.parametrize("filename", [
        "certidao_negativa_naturalizacao.pdf",
        "NATURALIZACAO_NEGATIVA.PDF",
        "Negativa de Naturalização - Giuseppe.pdf",
        "naturaliza-negativa.png",
    ])
    def test_negative_naturalization_wins(self, filename):
        assert classify(filename) == DocumentCategory.NATURALIZATION_NEGATIVE_CERTIFICATE

    def test_negativa_alone_is_not_a_naturalization_document(self):
        assert classify("certidao_negativa_debitos.pdf") == DocumentCategory.UNKNOWN

    def test_compound_rule_listed_before_general_rule(self):
        categories = [rule.category for rule in FILENAME_RULES]
        assert categories.index(DocumentCategory.NATURALIZATION_NEGATIVE_CERTIFICATE) < \
            categories.index(DocumentCategory.NATURALIZATION_CERTIFICATE)

    def test_first_match_wins(self):
        """A translated birth certificate is still a birth certificate."""
        assert classify("nascimento_traducao.pdf") == DocumentCategory.BIRTH_CERTIFICATE
        assert classify("casamento_apostila.pdf") == DocumentCategory.MARRIAGE_CERTIFICATE


class TestUnknown:
    """Anything without a trigger word is unknown, never an error."""

    @pytest.mark.parametrize("filename", [
        "photo.png",
        "scan_001.pdf",
        "IMG_2024.jpeg",
        "",
    ])
    def test_unrecognized_names(self, filename):
        assert classify(filename) == DocumentCategory.UNKNOWN

    def test_none_is_unknown(self):
        assert classify(None) == DocumentCategory.UNKNOWN


class TestDocumentCreation:
    """Building ClassifiedDocument instances from selected files."""

    def test_classify_document_fills_fields(self):
        doc = classify_document("nascimento.pdf", 1234, b"%PDF-1.4")
        assert doc.filename == "nascimento.pdf"
        assert doc.size == 1234
        assert doc.content == b"%PDF-1.4"
        assert doc.inferred_category == DocumentCategory.BIRTH_CERTIFICATE

    def test_each_upload_gets_a_fresh_id(self):
        first = classify_document("nascimento.pdf", 10)
        second = classify_document("nascimento.pdf", 10)
        assert first.id != second.id

    def test_classify_all_preserves_order(self):
        docs = classify_all([
            ("passaporte.pdf", 1, None),
            ("nascimento.pdf", 2, None),
            ("foto.png", 3, None),
        ])
        assert [d.inferred_category for d in docs] == [
            DocumentCategory.PASSPORT,
            DocumentCategory.BIRTH_CERTIFICATE,
            DocumentCategory.UNKNOWN,
        ]
        assert [d.size for d in docs] == [1, 2, 3]
