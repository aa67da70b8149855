"""Database models."""

from .agent import InstitutionModel, PersonModel
from .authorship import AffiliationModel, ResourceContributorModel, ResourceCreatorModel
from .records import (
    AlternateIdentifierModel,
    DescriptionModel,
    FormatModel,
    FundingReferenceModel,
    GeoLocationModel,
    RelatedIdentifierModel,
    ResourceDateModel,
    RightModel,
    SizeModel,
    SubjectModel,
    TitleModel,
)
from .reference import LanguageModel, PublisherModel, ResourceTypeModel
from .resource import IgsnMetadataModel, ResourceModel

__all__ = [
    # Reference data
    "LanguageModel",
    "PublisherModel",
    "ResourceTypeModel",
    # Agents
    "InstitutionModel",
    "PersonModel",
    # Authorship
    "AffiliationModel",
    "ResourceContributorModel",
    "ResourceCreatorModel",
    # Resource
    "IgsnMetadataModel",
    "ResourceModel",
    # Records
    "AlternateIdentifierModel",
    "DescriptionModel",
    "FormatModel",
    "FundingReferenceModel",
    "GeoLocationModel",
    "RelatedIdentifierModel",
    "ResourceDateModel",
    "RightModel",
    "SizeModel",
    "SubjectModel",
    "TitleModel",
]
