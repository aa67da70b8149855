"""Tests for person matching and entry extraction."""

import pytest

from curatio.core.models import InstitutionData, PersonData
from curatio.db.models import PersonModel
from curatio.services.entities import (
    extract_institution_data,
    extract_person_data,
    is_same_person,
)

ORCID = "https://orcid.org/0000-0002-1825-0097"
OTHER_ORCID = "https://orcid.org/0000-0001-2345-6789"


class TestIsSamePerson:
    """Tests for is_same_person."""

    def test_equal_orcid_wins_over_names(self):
        a = PersonData(family_name="Smith", given_name="Jane", orcid=ORCID)
        b = PersonData(family_name="Smith-Jones", given_name="J.", orcid=ORCID)
        assert is_same_person(a, b)

    def test_different_orcid_with_equal_names(self):
        a = PersonData(family_name="Smith", given_name="Jane", orcid=ORCID)
        b = PersonData(family_name="Smith", given_name="Jane", orcid=OTHER_ORCID)
        assert not is_same_person(a, b)

    def test_orcid_forms_compared_canonically(self):
        model = PersonModel(family_name="Smith", name_identifier="0000-0002-1825-0097")
        data = PersonData(family_name="Other", orcid=ORCID)
        assert is_same_person(model, data)

    def test_names_when_one_orcid_missing(self):
        a = PersonData(family_name="Smith", given_name="Jane", orcid=ORCID)
        b = PersonData(family_name="Smith", given_name="Jane")
        assert is_same_person(a, b)

    def test_names_are_case_sensitive_by_default(self):
        a = PersonData(family_name="Müller", given_name="Max")
        b = PersonData(family_name="muller", given_name="max")
        assert not is_same_person(a, b)
        assert is_same_person(a, b, normalized_names=True)

    def test_given_name_must_match(self):
        a = PersonData(family_name="Smith", given_name="Jane")
        b = PersonData(family_name="Smith", given_name="John")
        assert not is_same_person(a, b)

    def test_nameless_records_never_match(self):
        assert not is_same_person(PersonData(), PersonData())


class TestExtractPersonData:
    """Tests for extract_person_data."""

    def test_explicit_parts(self):
        data = extract_person_data(
            {
                "name": "ignored",
                "familyName": "Smith",
                "givenName": "Jane",
                "nameIdentifiers": [
                    {"nameIdentifier": "0000-0002-1825-0097", "nameIdentifierScheme": "ORCID"}
                ],
            }
        )
        assert data == PersonData(family_name="Smith", given_name="Jane", orcid=ORCID)

    @pytest.mark.parametrize(
        "name,family,given",
        [
            ("Smith, Jane", "Smith", "Jane"),
            ("Jane Smith", "Smith", "Jane"),
            ("Smith", "Smith", None),
        ],
    )
    def test_split_name(self, name, family, given):
        data = extract_person_data({"name": name})
        assert (data.family_name, data.given_name) == (family, given)

    def test_skips_other_schemes_and_bad_orcids(self):
        data = extract_person_data(
            {
                "name": "Smith, Jane",
                "nameIdentifiers": [
                    {"nameIdentifier": "123", "nameIdentifierScheme": "ISNI"},
                    {"nameIdentifier": "not-an-orcid", "nameIdentifierScheme": "ORCID"},
                    {"nameIdentifier": "https://orcid.org/0000-0002-1825-0097"},
                ],
            }
        )
        assert data.orcid == ORCID

    def test_no_orcid(self):
        assert extract_person_data({"name": "Smith"}).orcid is None


class TestExtractInstitutionData:
    """Tests for extract_institution_data."""

    def test_with_ror(self):
        data = extract_institution_data(
            {
                "name": "GFZ Data Services",
                "nameIdentifiers": [{"nameIdentifier": "04z8jg394", "nameIdentifierScheme": "ROR"}],
            }
        )
        assert data == InstitutionData(
            name="GFZ Data Services", ror_id="https://ror.org/04z8jg394"
        )

    def test_without_ror(self):
        assert extract_institution_data({"name": "Lab"}) == InstitutionData(name="Lab")

    def test_without_name(self):
        assert extract_institution_data({"nameIdentifiers": []}) is None
