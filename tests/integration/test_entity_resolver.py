"""Integration tests for person and institution resolution."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from curatio.config import CuratioSettings
from curatio.core.models import InstitutionData, PersonData
from curatio.services import EntityResolver

pytestmark = [pytest.mark.integration, pytest.mark.requires_db]

ORCID_JANE = "https://orcid.org/0000-0001-2345-6789"
ORCID_OTHER = "https://orcid.org/0000-0002-1825-0097"
ROR_GFZ = "https://ror.org/04z8jg394"


# ============================================================================
# Person Tests
# ============================================================================


class TestFindOrCreatePerson:
    """Tests for EntityResolver.find_or_create_person."""

    def test_create_then_find_by_orcid(self, resolver: EntityResolver):
        created, was_created = resolver.find_or_create_person(
            PersonData(family_name="Smith", given_name="Jane", orcid=ORCID_JANE)
        )
        found, was_created_again = resolver.find_or_create_person(
            PersonData(family_name="Smith-Jones", given_name="J.", orcid=ORCID_JANE)
        )

        assert was_created
        assert not was_created_again
        assert found.id == created.id
        assert found.scheme_uri == "https://orcid.org"

    def test_find_by_exact_name(self, resolver: EntityResolver):
        created, _ = resolver.find_or_create_person(
            PersonData(family_name="Doe", given_name="John")
        )
        found, was_created = resolver.find_or_create_person(
            PersonData(family_name="Doe", given_name="John")
        )
        assert not was_created
        assert found.id == created.id

    def test_name_match_is_case_sensitive(self, resolver: EntityResolver):
        created, _ = resolver.find_or_create_person(
            PersonData(family_name="Doe", given_name="John")
        )
        other, was_created = resolver.find_or_create_person(
            PersonData(family_name="doe", given_name="john")
        )
        assert was_created
        assert other.id != created.id

    def test_missing_given_name_only_matches_missing(self, resolver: EntityResolver):
        resolver.find_or_create_person(PersonData(family_name="Doe", given_name="John"))
        _, was_created = resolver.find_or_create_person(PersonData(family_name="Doe"))
        assert was_created

    def test_orcid_backfilled_on_name_match(self, resolver: EntityResolver):
        """A name match without ORCID receives the incoming ORCID."""
        created, _ = resolver.find_or_create_person(
            PersonData(family_name="Smith", given_name="Jane")
        )
        found, was_created = resolver.find_or_create_person(
            PersonData(family_name="Smith", given_name="Jane", orcid=ORCID_JANE)
        )

        assert not was_created
        assert found.id == created.id
        assert found.name_identifier == ORCID_JANE
        assert found.name_identifier_scheme == "ORCID"

    def test_different_orcid_creates_new_person(self, resolver: EntityResolver):
        """Namesakes with different ORCIDs are different people."""
        first, _ = resolver.find_or_create_person(
            PersonData(family_name="Smith", given_name="Jane", orcid=ORCID_JANE)
        )
        second, was_created = resolver.find_or_create_person(
            PersonData(family_name="Smith", given_name="Jane", orcid=ORCID_OTHER)
        )

        assert was_created
        assert second.id != first.id
        assert first.name_identifier == ORCID_JANE

    def test_name_match_without_incoming_orcid(self, resolver: EntityResolver):
        first, _ = resolver.find_or_create_person(
            PersonData(family_name="Smith", given_name="Jane", orcid=ORCID_JANE)
        )
        found, was_created = resolver.find_or_create_person(
            PersonData(family_name="Smith", given_name="Jane")
        )
        assert not was_created
        assert found.id == first.id

    def test_normalized_matching(
        self, db_session: Session, normalized_settings: CuratioSettings
    ):
        resolver = EntityResolver(db_session, normalized_settings)
        created, _ = resolver.find_or_create_person(
            PersonData(family_name="Müller", given_name="Max")
        )
        found, was_created = resolver.find_or_create_person(
            PersonData(family_name="MULLER", given_name="max")
        )

        assert not was_created
        assert found.id == created.id

    def test_resolver_is_same_person_uses_settings(
        self, db_session: Session, normalized_settings: CuratioSettings
    ):
        a = PersonData(family_name="Müller", given_name="Max")
        b = PersonData(family_name="muller", given_name="MAX")
        assert EntityResolver(db_session, normalized_settings).is_same_person(a, b)


# ============================================================================
# Institution Tests
# ============================================================================


class TestFindOrCreateInstitution:
    """Tests for EntityResolver.find_or_create_institution."""

    def test_find_by_ror(self, resolver: EntityResolver):
        created, was_created = resolver.find_or_create_institution(
            InstitutionData(name="GFZ", ror_id=ROR_GFZ)
        )
        found, was_created_again = resolver.find_or_create_institution(
            InstitutionData(name="GFZ Helmholtz Centre", ror_id=ROR_GFZ)
        )

        assert was_created
        assert not was_created_again
        assert found.id == created.id

    def test_find_by_name(self, resolver: EntityResolver):
        created, _ = resolver.find_or_create_institution(InstitutionData(name="Some Lab"))
        found, was_created = resolver.find_or_create_institution(InstitutionData(name="Some Lab"))
        assert not was_created
        assert found.id == created.id

    def test_ror_backfilled(self, resolver: EntityResolver):
        created, _ = resolver.find_or_create_institution(InstitutionData(name="GFZ"))
        found, was_created = resolver.find_or_create_institution(
            InstitutionData(name="GFZ", ror_id=ROR_GFZ)
        )

        assert not was_created
        assert found.id == created.id
        assert found.name_identifier == ROR_GFZ
        assert found.name_identifier_scheme == "ROR"
