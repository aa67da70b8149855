"""Person and institution repositories with identity lookups."""

from __future__ import annotations

from sqlalchemy import select

from curatio.core.normalization import normalize_text
from curatio.db.models.agent import InstitutionModel, PersonModel
from curatio.db.repositories.base import BaseRepository


class PersonRepository(BaseRepository[PersonModel]):
    """Repository for Person entities."""

    model = PersonModel

    def get_by_orcid(self, orcid: str) -> PersonModel | None:
        """Find a person by canonical ORCID URL."""
        stmt = select(PersonModel).where(PersonModel.name_identifier == orcid)
        return self._session.execute(stmt).scalar_one_or_none()

    def get_by_name(self, family_name: str | None, given_name: str | None) -> PersonModel | None:
        """
        Find a person by exact family and given name.

        A missing given name only matches rows whose given name is also missing.
        """
        stmt = select(PersonModel).where(
            PersonModel.family_name == family_name
            if family_name is not None
            else PersonModel.family_name.is_(None),
            PersonModel.given_name == given_name
            if given_name is not None
            else PersonModel.given_name.is_(None),
        )
        return self._session.execute(stmt.order_by(PersonModel.created_at).limit(1)).scalar()

    def get_by_name_normalized(
        self,
        family_name: str | None,
        given_name: str | None,
    ) -> PersonModel | None:
        """Find a person whose accent- and case-folded name matches.

        Folding happens in Python, so this scans every person row.
        """
        family_key = normalize_text(family_name)
        given_key = normalize_text(given_name)
        stmt = select(PersonModel).order_by(PersonModel.created_at)
        for person in self._session.execute(stmt).scalars():
            if (
                normalize_text(person.family_name) == family_key
                and normalize_text(person.given_name) == given_key
            ):
                return person
        return None


class InstitutionRepository(BaseRepository[InstitutionModel]):
    """Repository for Institution entities."""

    model = InstitutionModel

    def get_by_ror(self, ror_id: str) -> InstitutionModel | None:
        """Find an institution by canonical ROR URL."""
        stmt = select(InstitutionModel).where(InstitutionModel.name_identifier == ror_id)
        return self._session.execute(stmt).scalar_one_or_none()

    def get_by_name(self, name: str) -> InstitutionModel | None:
        """Find an institution by exact name."""
        stmt = (
            select(InstitutionModel)
            .where(InstitutionModel.name == name)
            .order_by(InstitutionModel.created_at)
            .limit(1)
        )
        return self._session.execute(stmt).scalar()
